"""
COLUMN RESOLVER
---------------
Maps each SemanticField to the actual header of a supplier schema.

Headers and candidates are compared as folded keys (case, diacritics and
punctuation ignored). Resolution per field, in candidate priority order:
1. exact match (across all candidates first)
2. substring match in either direction

Unresolved fields are simply absent from the map. The resolver is run once per
schema (one RawRecord is enough as a sample), never once per row.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence

from config.field_specs import FIELD_SPECS
from domain.canonical import FieldSpec, RawRecord, SemanticField
from fields.normalization import fold_key

logger = logging.getLogger(__name__)

ColumnMap = Dict[SemanticField, str]


def find_column(headers: Iterable[str], candidates: Sequence[str]) -> Optional[str]:
    """Return the first header matching one of `candidates`, or None."""
    folded = [(h, fold_key(h)) for h in headers]
    folded = [(h, key) for h, key in folded if key]

    for candidate in candidates:
        target = fold_key(candidate)
        for header, key in folded:
            if key == target:
                return header

    for candidate in candidates:
        target = fold_key(candidate)
        if not target:
            continue
        for header, key in folded:
            if target in key or key in target:
                return header

    return None


def resolve_columns(
    sample: RawRecord | Sequence[str],
    field_specs: Sequence[FieldSpec] = FIELD_SPECS,
) -> ColumnMap:
    """
    Build the SemanticField -> header map for one schema.

    Args:
        sample: One RawRecord of the schema (or its header list)
        field_specs: Candidate header names per SemanticField

    Returns:
        Map with one entry per resolved field. A header is never assigned to
        two fields; the field listed first keeps it.
    """
    headers = list(sample.keys()) if isinstance(sample, Mapping) else list(sample)
    column_map: ColumnMap = {}
    taken = set()

    for spec in field_specs:
        header = find_column([h for h in headers if h not in taken], spec.candidates)
        if header is None:
            logger.debug("No column for %s", spec.field.value)
            continue
        column_map[spec.field] = header
        taken.add(header)

    logger.info(
        "Resolved %d/%d fields: %s",
        len(column_map),
        len(field_specs),
        {f.value: h for f, h in column_map.items()},
    )
    missing = [s.field.value for s in field_specs if s.required and s.field not in column_map]
    if missing:
        logger.warning("Required fields without a column: %s", missing)

    return column_map


def project(record: RawRecord, column_map: ColumnMap) -> Dict[SemanticField, str]:
    """Read the resolved fields out of one RawRecord (empty cells omitted)."""
    values: Dict[SemanticField, str] = {}
    for semantic, header in column_map.items():
        value = (record.get(header) or "").strip()
        if value:
            values[semantic] = value
    return values
