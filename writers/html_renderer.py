"""
HTML RENDERER
-------------
Deterministic marketplace description fragment for one record:

<h2>name</h2>, narrative, five check-marked USPs, highlights list,
technical data table (only if the merge produced specs), safety notice,
package contents.

Every string goes through markup cleanup and HTML escaping before insertion.
"""

from __future__ import annotations

import html
import re
from typing import Iterable, List

from domain.canonical import NormalizedRecord
from domain.generation import ProductCopy
from generation.post_processor import clean_markup

CHECK_MARK = "✅"
_WARNING_ICONS = re.compile(r"⚠️|⚠|[🔥⚡☢]️?")

TABLE_OPEN = '<table border="0" summary="" style="border-collapse: collapse; width: 100%; max-width: 600px;">'
LABEL_CELL = ('<td style="padding: 4px 12px 4px 0; text-align: right; vertical-align: top; '
              'font-weight: 600; white-space: nowrap;">')
VALUE_CELL = '<td style="padding: 4px 0 4px 8px; text-align: left; vertical-align: top;">'


def _safe(text: str) -> str:
    return html.escape(clean_markup(text or ""), quote=False)


def _usp_block(usps: Iterable[str]) -> str:
    lines = [f"{CHECK_MARK} {_safe(u)}" for u in usps if clean_markup(u)]
    return "<p>" + "<br />\n".join(lines) + "</p>"


def _highlights_block(highlights: Iterable[str]) -> str:
    items = [f"<li>{_safe(h)}</li>" for h in highlights if clean_markup(h)]
    if not items:
        return ""
    return "<ul>\n" + "\n".join(items) + "\n</ul>"


def _table_block(record: NormalizedRecord) -> str:
    if not record.merged_specs:
        return ""
    rows = [
        f"<tr>\n  {LABEL_CELL}{_safe(label)}</td>\n  {VALUE_CELL}{_safe(spec.value)}</td>\n</tr>"
        for label, spec in record.merged_specs.items()
    ]
    return "<h4>Technische Daten:</h4>\n" + TABLE_OPEN + "\n<tbody>\n" + "\n".join(rows) + "\n</tbody>\n</table>"


def render(record: NormalizedRecord, copy: ProductCopy) -> str:
    """Assemble the HTML fragment; no business logic beyond dropping an empty table."""
    safety = _WARNING_ICONS.sub("", copy.safety_notice or "")

    blocks: List[str] = [
        f"<h2>{_safe(record.title or record.sku)}</h2>",
        f"<p>{_safe(copy.narrative)}</p>\n<br />",
        _usp_block(copy.usp_bullets) + "\n<br />",
    ]

    highlights = _highlights_block(copy.product_highlights)
    if highlights:
        blocks.append(highlights + "\n<br />")

    table = _table_block(record)
    if table:
        blocks.append(table + "\n<br />")

    if clean_markup(safety):
        blocks.append(f"<h3>Sicherheitshinweise</h3>\n<p>{_safe(safety)}</p>\n<br />")

    blocks.append(f"<h3>Lieferumfang</h3>\n<p>{_safe(copy.package_contents)}</p>")
    return "\n\n".join(blocks)
