"""
TABULAR PARSER
--------------
Turns decoded text + delimiter into ordered RawRecords keyed by the header row.

Parsing goes through pandas so that quoted cells may contain the delimiter (and
line breaks). Malformed rows never abort the parse: rows with too many fields
are skipped and reported as ParseWarnings, unless the extra fields are empty
(trailing delimiters), in which case they are dropped. Only a source without a single data
row raises EmptyDataset.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from domain.canonical import RawRecord
from domain.errors import EmptyDataset, ParseWarning

logger = logging.getLogger(__name__)


@dataclass
class ParsedTable:
    headers: List[str]
    records: List[RawRecord]
    warnings: List[ParseWarning] = field(default_factory=list)


def _header_width(text: str, delimiter: str, quoting: int) -> int:
    for row in csv.reader(io.StringIO(text), delimiter=delimiter, quoting=quoting):
        if row:
            return len(row)
    raise EmptyDataset("Source contains no data")


def _unique_headers(cells: List[str]) -> List[str]:
    headers: List[str] = []
    seen: dict = {}
    for i, cell in enumerate(cells):
        name = cell or f"Unnamed: {i}"
        if name in seen:
            seen[name] += 1
            name = f"{name}.{seen[name]}"
        else:
            seen[name] = 0
        headers.append(name)
    return headers


def _read_frame(text: str, delimiter: str, warnings: List[ParseWarning], quoting: int) -> pd.DataFrame:
    # The header row is read as data so pandas never infers an index column.
    width = _header_width(text, delimiter, quoting)

    def _handle_long_row(bad_line: List[str]) -> Optional[List[str]]:
        # Trailing delimiters only add empty cells.
        if not any(cell.strip() for cell in bad_line[width:]):
            return bad_line[:width]
        preview = delimiter.join(bad_line)[:80]
        warnings.append(ParseWarning(row=None, message=f"Skipped row with {len(bad_line)} fields: {preview}"))
        return None

    return pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        quoting=quoting,
        on_bad_lines=_handle_long_row,
    )


def parse_table(text: str, delimiter: str) -> ParsedTable:
    """Parse delimited text into RawRecords (header row = keys, cells trimmed)."""
    warnings: List[ParseWarning] = []

    try:
        frame = _read_frame(text, delimiter, warnings, csv.QUOTE_MINIMAL)
    except pd.errors.EmptyDataError as e:
        raise EmptyDataset("Source contains no data") from e
    except pd.errors.ParserError as e:
        # Typically an unterminated quote; retry treating quotes as plain data.
        warnings.append(ParseWarning(row=None, message=f"Quoted cells could not be parsed ({e}); quotes ignored"))
        frame = _read_frame(text, delimiter, warnings, csv.QUOTE_NONE)

    frame = frame.fillna("")
    headers = _unique_headers([str(h).strip() for h in frame.iloc[0]])

    records: List[RawRecord] = []
    for values in frame.iloc[1:].itertuples(index=False, name=None):
        record = {header: str(value).strip() for header, value in zip(headers, values)}
        if not any(record.values()):
            continue
        records.append(record)

    if not records:
        raise EmptyDataset("Source contains a header row but no data rows")

    if warnings:
        logger.warning("Tabular parse finished with %d warnings", len(warnings))
    logger.info("Parsed %d rows with %d columns", len(records), len(headers))

    return ParsedTable(headers=headers, records=records, warnings=warnings)


def format_table(records: Sequence[RawRecord], delimiter: str) -> str:
    """Serialize RawRecords back to delimited text (quoting only where needed)."""
    if not records:
        return ""
    frame = pd.DataFrame(list(records), dtype=str).fillna("")
    return frame.to_csv(sep=delimiter, index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
