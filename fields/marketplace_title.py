"""
MARKETPLACE TITLES
------------------
Two deterministic, brand-free title variants per record.

V1: "<product type> <model codes>", e.g. "Notebook Netzteil K42JQ", max 100 chars
V2: model codes only, e.g. "P210 P290", max 80 chars

Both tolerate records without any model code and truncate only at word
boundaries.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Optional, Sequence

from config.settings import MAX_MODEL_CODES_IN_TITLE, TITLE_V1_MAX, TITLE_V2_MAX
from config.title_rules import (
    BRAND_TOKENS,
    FILLER_TOKENS,
    GENERIC_TOKENS,
    PRODUCT_TYPE_RULES,
    ProductTypeRule,
)

_WORD_SPLIT = re.compile(r"[\s,;.\-]+")


def truncate_at_word(text: str, limit: int) -> str:
    """Cut `text` to `limit` chars at the last space; never return a partial word."""
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) <= limit:
        return text
    if text[limit] == " ":
        return text[:limit].rstrip()
    cut = text.rfind(" ", 0, limit + 1)
    if cut <= 0:
        return ""
    return text[:cut].rstrip()


def _rule_matches(rule: ProductTypeRule, text: str) -> bool:
    return all(re.search(rf"\b(?:{group})\b", text) for group in rule.groups)


def detect_product_type(text: str, rules: Sequence[ProductTypeRule] = PRODUCT_TYPE_RULES) -> Optional[str]:
    """Two-group rules are tried before single-group rules."""
    lowered = text.lower()
    for rule in sorted(rules, key=lambda r: len(r.groups) < 2):
        if _rule_matches(rule, lowered):
            return rule.label
    return None


def _title_words(title: str, excluded: FrozenSet[str], count: int) -> List[str]:
    words = [
        w for w in _WORD_SPLIT.split(title)
        if len(w) > 2 and w.lower() not in excluded
    ]
    return words[:count]


def _compose(parts: Sequence[str], limit: int) -> str:
    """Join parts and truncate; a part whose first word alone exceeds `limit` is left out."""
    fitting = [p for p in parts if p and truncate_at_word(p, limit)]
    return truncate_at_word(" ".join(fitting), limit)


def title_v1(title: str, model_codes: Sequence[str], description: str = "", limit: int = TITLE_V1_MAX) -> str:
    product_type = detect_product_type(f"{title} {description}")
    if not product_type:
        product_type = " ".join(_title_words(title, BRAND_TOKENS | FILLER_TOKENS, 2))

    return _compose([product_type] + list(model_codes[:MAX_MODEL_CODES_IN_TITLE]), limit)


def title_v2(title: str, model_codes: Sequence[str], limit: int = TITLE_V2_MAX) -> str:
    codes = [c for c in model_codes if truncate_at_word(c, limit)]
    if codes:
        return _compose(codes[:MAX_MODEL_CODES_IN_TITLE], limit)
    return _compose(_title_words(title, BRAND_TOKENS | FILLER_TOKENS | GENERIC_TOKENS, 3), limit)
