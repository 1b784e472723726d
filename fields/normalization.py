"""
Low-level text and number normalization shared by the extraction stages.

- HTML cleanup of supplier text (tags, script/style blocks, common entities).
- SKU cleaning.
- Folded keys for label matching (case, diacritics and punctuation ignored).
- Localized number parsing (decimal comma, dot thousand separators) and a
  canonical number formatter.
- Qualifier/tolerance stripping so the first remaining number is the nominal one.
- The "non-answer" sentinel check used by every merge tier.
"""

from __future__ import annotations

import html
import re
import unicodedata
from typing import Optional

NON_ANSWERS = frozenset({
    "",
    "-",
    "--",
    "n/a",
    "na",
    "none",
    "null",
    "unknown",
    "not specified",
    "not available",
    "nicht angegeben",
    "nicht spezifiziert",
    "nicht sichtbar",
    "unbekannt",
    "keine angabe",
    "k.a.",
})

_SCRIPT_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_LINE_BREAK_TAGS = re.compile(r"<\s*(br|/p|/li|/tr|/div|/h[1-6])\b[^>]*>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")
_SKU_ALLOWED = re.compile(r"[^A-Za-z0-9_\-]")

_NUMBER = re.compile(r"\d{1,3}(?:\.\d{3})+(?:,\d+)?|\d+(?:[.,]\d+)?")

_TOLERANCE = re.compile(r"\(?\s*(?:±|\+/-|\+-)\s*\d+(?:[.,]\d+)?\s*(?:%|[A-Za-z]+)?\s*\)?")
_QUALIFIERS = re.compile(
    r"\b(?:typisch|typical|typ|circa|approx|approximately|nominal|nom|ca|max|min)\b\.?|[~≈]",
    re.IGNORECASE,
)


def clean_html(text: str, keep_lines: bool = False) -> str:
    """Strip markup and decode entities; optionally keep one line per block element."""
    if not text:
        return ""

    cleaned = _SCRIPT_STYLE.sub(" ", text)
    if keep_lines:
        cleaned = _LINE_BREAK_TAGS.sub("\n", cleaned)
    cleaned = _TAG.sub(" ", cleaned)
    cleaned = html.unescape(cleaned).replace("\xa0", " ")

    if keep_lines:
        lines = (re.sub(r"[ \t]+", " ", line).strip() for line in cleaned.splitlines())
        return "\n".join(line for line in lines if line)
    return re.sub(r"\s+", " ", cleaned).strip()


def clean_sku(text: str) -> str:
    """Keep only alphanumerics, dash and underscore."""
    return _SKU_ALLOWED.sub("", clean_html(text))


def fold_key(name: str) -> str:
    """'Kapazität (mAh)' -> 'kapazitatmah'."""
    lowered = (name or "").lower().replace("ß", "ss")
    decomposed = unicodedata.normalize("NFKD", lowered)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]", "", stripped)


def is_non_answer(value: Optional[str]) -> bool:
    if value is None:
        return True
    return str(value).strip().lower() in NON_ANSWERS


def parse_number(token: str) -> Optional[float]:
    """Parse the first number in `token`, accepting '3,7', '1.234,5' and '2.500'."""
    if not token:
        return None
    match = _NUMBER.search(token)
    if not match:
        return None

    s = match.group(0)
    if "," in s:
        s = s.replace(".", "").replace(",", ".")
    elif re.fullmatch(r"[1-9]\d{0,2}(?:\.\d{3})+", s):
        s = s.replace(".", "")

    try:
        return float(s)
    except ValueError:
        return None


def format_number(value: float) -> str:
    """Canonical numeric string: no trailing zeros, dot as decimal separator."""
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def strip_qualifiers(text: str) -> str:
    """Remove tolerances ('±0.3'), qualifiers ('typ.', 'ca.', 'max.') and extra spaces."""
    cleaned = _TOLERANCE.sub(" ", text or "")
    cleaned = _QUALIFIERS.sub(" ", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


def nominal_number(text: str) -> Optional[float]:
    return parse_number(strip_qualifiers(text))
