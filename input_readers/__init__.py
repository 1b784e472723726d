from .delimiter import detect_delimiter, score_delimiters
from .encoding import DecodedText, resolve_encoding
from .excel import read_excel_bytes
from .scraped import flatten_scraped
from .tabular import ParsedTable, format_table, parse_table

__all__ = [
    "DecodedText",
    "ParsedTable",
    "detect_delimiter",
    "flatten_scraped",
    "format_table",
    "parse_table",
    "read_excel_bytes",
    "resolve_encoding",
    "score_delimiters",
]
