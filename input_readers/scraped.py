"""
SCRAPED RECORD ADAPTER
----------------------
Flattens an arbitrary scraped mapping into a single RawRecord.

- Scalar values are stringified and trimmed.
- Lists are joined with newlines (bullet lists stay readable line by line).
- Nested technical-data mappings are lifted to top-level `label -> value`
  entries so the column resolver can see them. Existing top-level keys win.
"""

from __future__ import annotations

from typing import Any, Mapping

from domain.canonical import RawRecord

NESTED_SPEC_KEYS = ("technicalData", "technicalSpecs", "specs", "technischeDaten")


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "\n".join(_to_text(v) for v in value if _to_text(v))
    return str(value).strip()


def flatten_scraped(scraped: Mapping[str, Any]) -> RawRecord:
    record: RawRecord = {}

    for key, value in scraped.items():
        if key in NESTED_SPEC_KEYS and isinstance(value, Mapping):
            continue
        if isinstance(value, Mapping):
            continue
        record[str(key).strip()] = _to_text(value)

    for nested_key in NESTED_SPEC_KEYS:
        nested = scraped.get(nested_key)
        if not isinstance(nested, Mapping):
            continue
        for label, value in nested.items():
            label = str(label).strip()
            if label and label not in record:
                record[label] = _to_text(value)

    return record
