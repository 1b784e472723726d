"""
EXCEL READER
------------
Reads Excel workbooks into RawRecords with NO transformation beyond
stringifying cell values. Returns records keyed by the original supplier
column names.
"""

from __future__ import annotations

import io
from datetime import date, datetime
from typing import Any, List

from openpyxl import load_workbook

from domain.canonical import RawRecord


def _cell_to_str(value: Any) -> str:
    """Render a cell value the way it would appear in a CSV export."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def read_excel_bytes(raw: bytes, sheet_name: str | None = None) -> List[RawRecord]:
    """
    Read workbook bytes where row 1 = headers, rows 2+ = data.

    Args:
        raw: Workbook content (.xlsx / .xlsm)
        sheet_name: Optional sheet name (uses first sheet if None)

    Returns:
        List of row dicts with original headers as keys (empty rows skipped)

    Raises:
        ValueError: If the bytes are not a readable workbook
    """
    try:
        wb = load_workbook(io.BytesIO(raw), data_only=True, read_only=True)
    except Exception as e:
        raise ValueError(f"Cannot read Excel file (is it corrupted or wrong format?): {e}") from e

    try:
        ws = wb[sheet_name] if sheet_name else wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)

        header_row = next(rows, None)
        if header_row is None:
            return []

        headers = [
            _cell_to_str(h) or f"col_{c}"
            for c, h in enumerate(header_row, start=1)
        ]

        records: List[RawRecord] = []
        for values in rows:
            record = {header: _cell_to_str(v) for header, v in zip(headers, values)}
            if any(record.values()):
                records.append(record)
        return records
    finally:
        wb.close()
