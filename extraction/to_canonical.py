"""
Normalization pipeline into the NormalizedRecord format.

This module provides a single entry point to convert supplier input from:
- delimited text files (CSV / TSV / semicolon exports of unknown encoding)
- Excel workbooks (.xlsx / .xlsm)
- scraped product pages (string-keyed mappings)

into a list of NormalizedRecord objects.

Core responsibilities:
- Decode bytes and detect the delimiter, then parse rows into RawRecords.
- Resolve the column map once per source schema.
- Per record: clean SKU/text, build the deterministic spec tiers, extract
  model codes, categorize and synthesize marketplace titles.
- Tag SKU collisions over the whole batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from config.categories import DEFAULT_REGISTRY
from config.field_specs import FIELD_SPECS
from config.settings import EXCEL_SUFFIXES, MAX_FILE_SIZE_MB
from domain.canonical import FieldSpec, NormalizedRecord, RawRecord, SemanticField as F
from domain.category import CategoryRegistry
from domain.errors import DecodeDegraded, EmptyDataset, ParseWarning
from fields.attributes import extract_model_codes
from fields.categorizer import categorize
from fields.column_resolver import ColumnMap, project, resolve_columns
from fields.duplicates import mark_duplicates
from fields.marketplace_title import title_v1, title_v2
from fields.normalization import clean_html, clean_sku, fold_key
from fields.tech_specs import deterministic_specs, structured_specs, text_specs
from input_readers import detect_delimiter, flatten_scraped, parse_table, read_excel_bytes, resolve_encoding

logger = logging.getLogger(__name__)


@dataclass
class NormalizationReport:
    records: List[NormalizedRecord]
    warnings: List[ParseWarning] = field(default_factory=list)
    column_map: ColumnMap = field(default_factory=dict)
    encoding: Optional[str] = None
    delimiter: Optional[str] = None
    degraded: Optional[DecodeDegraded] = None
    source_kind: str = "tabular"


def _is_excel(filename: Optional[str]) -> bool:
    return bool(filename) and filename.lower().endswith(EXCEL_SUFFIXES)


def _read_source(
    source: bytes | Mapping[str, Any],
    filename: Optional[str],
    report: NormalizationReport,
) -> List[RawRecord]:
    """Turn any supported input into RawRecords, filling the decode details on `report`."""
    if isinstance(source, Mapping):
        report.source_kind = "scraped"
        return [flatten_scraped(source)]

    if len(source) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise ValueError(f"Input is larger than {MAX_FILE_SIZE_MB} MB")

    if _is_excel(filename):
        report.source_kind = "excel"
        records = read_excel_bytes(source)
        if not records:
            raise EmptyDataset(f"Workbook {filename} contains no data rows")
        return records

    decoded = resolve_encoding(source)
    report.encoding = decoded.encoding
    report.degraded = decoded.degraded

    report.delimiter = detect_delimiter(decoded.text)
    table = parse_table(decoded.text, report.delimiter)
    report.warnings.extend(table.warnings)
    return table.records


def _header_echo_keys(column_map: ColumnMap, field_specs: Sequence[FieldSpec]) -> set:
    keys = {fold_key(c) for s in field_specs if s.field == F.SKU for c in s.candidates}
    if F.SKU in column_map:
        keys.add(fold_key(column_map[F.SKU]))
    return keys


def build_record(
    raw: RawRecord,
    column_map: ColumnMap,
    registry: CategoryRegistry = DEFAULT_REGISTRY,
    field_specs: Sequence[FieldSpec] = FIELD_SPECS,
    source_row: Optional[int] = None,
) -> NormalizedRecord:
    """Normalize one RawRecord (the caller has already checked its SKU)."""
    values = project(raw, column_map)

    title = clean_html(values.get(F.TITLE, ""))
    description = clean_html(values.get(F.DESCRIPTION, ""), keep_lines=True)
    short_intro = clean_html(values.get(F.SHORT_INTRO, ""))
    bullets = clean_html(values.get(F.BULLETS, ""), keep_lines=True)

    specs = deterministic_specs(
        structured_specs(values, column_map, field_specs),
        text_specs(title, description, field_specs),
    )
    model_codes = extract_model_codes(f"{title} {description}")
    category = categorize([title, short_intro, description, bullets], registry)

    return NormalizedRecord(
        sku=clean_sku(values.get(F.SKU, "")),
        title=title,
        description=description,
        brand=clean_html(values.get(F.BRAND, "")),
        marketplace_title_v1=title_v1(title, model_codes, description),
        marketplace_title_v2=title_v2(title, model_codes),
        technical_specs=specs,
        category=category.id,
        model_codes=model_codes,
        safety_warnings=clean_html(values.get(F.SAFETY_WARNINGS, ""), keep_lines=True),
        source_row=source_row,
    )


def _usable_rows(
    raws: List[RawRecord],
    column_map: ColumnMap,
    field_specs: Sequence[FieldSpec],
    warnings: List[ParseWarning],
) -> List[Tuple[int, RawRecord]]:
    """Drop rows without a derivable SKU and rows that repeat the header."""
    echo_keys = _header_echo_keys(column_map, field_specs)
    sku_header = column_map.get(F.SKU)
    usable: List[Tuple[int, RawRecord]] = []

    for row, raw in enumerate(raws, start=1):
        raw_sku = raw.get(sku_header, "") if sku_header else ""
        sku = clean_sku(raw_sku)
        if not sku:
            warnings.append(ParseWarning(row=row, message="Row dropped: no SKU"))
            continue
        if fold_key(raw_sku) in echo_keys:
            warnings.append(ParseWarning(row=row, message="Row dropped: repeated header row"))
            continue
        usable.append((row, raw))

    return usable


def normalize_report(
    source: bytes | Mapping[str, Any],
    filename: Optional[str] = None,
    registry: CategoryRegistry = DEFAULT_REGISTRY,
    field_specs: Sequence[FieldSpec] = FIELD_SPECS,
) -> NormalizationReport:
    """
    Normalize raw bytes (delimited text or workbook) or one scraped mapping.

    Args:
        source: File content, or a scraped field mapping
        filename: Used to recognise Excel workbooks by suffix
        registry: Categories available to the categorizer
        field_specs: Candidate header names per SemanticField

    Returns:
        NormalizationReport with the records plus every non-fatal finding

    Raises:
        EmptyDataset: If no usable data row remains
        ValueError: If the input is too large or not a readable workbook
    """
    report = NormalizationReport(records=[])
    raws = _read_source(source, filename, report)
    if not raws:
        raise EmptyDataset("Source contains no data rows")

    report.column_map = resolve_columns(raws[0], field_specs)
    usable = _usable_rows(raws, report.column_map, field_specs, report.warnings)
    if not usable:
        raise EmptyDataset("No row with a usable SKU")

    records = [
        build_record(raw, report.column_map, registry, field_specs, source_row=row)
        for row, raw in usable
    ]
    report.records = mark_duplicates(records)

    logger.info(
        "Normalized %d of %d rows (%s, encoding=%s, delimiter=%r, %d warnings)",
        len(report.records),
        len(raws),
        report.source_kind,
        report.encoding,
        report.delimiter,
        len(report.warnings),
    )
    return report


def normalize(
    source: bytes | Mapping[str, Any],
    filename: Optional[str] = None,
    registry: CategoryRegistry = DEFAULT_REGISTRY,
    field_specs: Sequence[FieldSpec] = FIELD_SPECS,
) -> List[NormalizedRecord]:
    """Normalize a source and return only the records."""
    return normalize_report(source, filename, registry, field_specs).records


def summarize(report: NormalizationReport) -> Dict[str, Any]:
    """JSON-friendly view of a report (used by the CLI)."""
    return {
        "source_kind": report.source_kind,
        "encoding": report.encoding,
        "delimiter": report.delimiter,
        "degraded": bool(report.degraded),
        "column_map": {f.value: h for f, h in report.column_map.items()},
        "warnings": [{"row": w.row, "message": w.message} for w in report.warnings],
        "records": [r.to_dict() for r in report.records],
    }
