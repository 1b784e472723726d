from .attributes import extract_attributes, extract_model_codes, normalize_field_value
from .categorizer import categorize, score_categories
from .column_resolver import find_column, project, resolve_columns
from .duplicates import mark_duplicates
from .marketplace_title import detect_product_type, title_v1, title_v2, truncate_at_word
from .normalization import clean_html, clean_sku, fold_key, is_non_answer
from .tech_specs import merge_specs, parse_label_lines, text_specs

__all__ = [
    "categorize",
    "clean_html",
    "clean_sku",
    "detect_product_type",
    "extract_attributes",
    "extract_model_codes",
    "find_column",
    "fold_key",
    "is_non_answer",
    "mark_duplicates",
    "merge_specs",
    "normalize_field_value",
    "parse_label_lines",
    "project",
    "resolve_columns",
    "score_categories",
    "text_specs",
    "title_v1",
    "title_v2",
    "truncate_at_word",
]
