"""
Post-processing of generated text.

Pure text transforms plus quality checks. Checks never reject text; they
return issue strings that end up on ProductCopy.issues.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from config.settings import (
    NARRATIVE_MAX_SENTENCES,
    NARRATIVE_MIN_SENTENCES,
    USP_COUNT,
    USP_MAX_CHARS,
    USP_MIN_CHARS,
)

logger = logging.getLogger(__name__)

GENERIC_PHRASES: Tuple[str, ...] = (
    "steht für Qualität, Zuverlässigkeit und Langlebigkeit",
    "ideal für den täglichen Einsatz",
    "perfekte Wahl für",
    "hochwertiges Produkt für professionelle Anwendungen",
    "zeichnet sich durch zuverlässige Leistung",
)

_LEADING_MARKUP = re.compile(r"^[ \t]*(?:[-*•]+|\*\*|✅)[ \t]*", re.MULTILINE)
_BOLD = re.compile(r"\*\*")
_SENTENCE_END = re.compile(r"[.!?]+(?:\s+|$)")
_UNIT_NUMBER = re.compile(r"\d+(?:[.,]\d+)?\s*(?:mAh|Wh|mm|kg|V|A|g|W)(?![A-Za-z])")


@dataclass
class Checked:
    text: str
    issues: List[str] = field(default_factory=list)


def clean_markup(text: str) -> str:
    """Strip leading bullet/bold/check-mark artifacts and collapse whitespace."""
    if not text:
        return ""
    cleaned = _LEADING_MARKUP.sub("", str(text))
    cleaned = _BOLD.sub("", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


def remove_generic_phrases(text: str, phrases: Sequence[str] = GENERIC_PHRASES) -> Checked:
    result = Checked(text)
    for phrase in phrases:
        pattern = re.compile(re.escape(phrase), re.IGNORECASE)
        if pattern.search(result.text):
            result.text = re.sub(r"\s{2,}", " ", pattern.sub("", result.text)).strip()
            result.issues.append(f'Removed generic phrase: "{phrase}"')
    return result


def count_sentences(text: str) -> int:
    return len([s for s in _SENTENCE_END.split(text) if s.strip()])


def check_narrative(text: str) -> Checked:
    """Clean a narrative and flag sentence count / missing product figures."""
    result = remove_generic_phrases(clean_markup(text))

    sentences = count_sentences(result.text)
    if sentences < NARRATIVE_MIN_SENTENCES:
        result.issues.append(f"Too few sentences: {sentences} (minimum {NARRATIVE_MIN_SENTENCES})")
    elif sentences > NARRATIVE_MAX_SENTENCES:
        result.issues.append(f"Too many sentences: {sentences} (maximum {NARRATIVE_MAX_SENTENCES})")

    if not _UNIT_NUMBER.search(result.text):
        result.issues.append("Not product-specific: no figure with a unit")

    if result.issues:
        logger.info("Narrative issues: %s", result.issues)
    return result


def check_usps(usps: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Clean USP bullets and report count/length problems.

    Returns:
        (cleaned non-empty bullets, issues)
    """
    issues: List[str] = []
    cleaned: List[str] = []
    for usp in usps:
        checked = remove_generic_phrases(clean_markup(usp))
        issues.extend(checked.issues)
        if checked.text:
            cleaned.append(checked.text)

    if len(cleaned) < USP_COUNT:
        issues.append(f"Too few USPs: {len(cleaned)} (expected {USP_COUNT})")
    elif len(cleaned) > USP_COUNT:
        issues.append(f"Too many USPs: {len(cleaned)} (expected {USP_COUNT})")

    for idx, usp in enumerate(cleaned, start=1):
        if len(usp) > USP_MAX_CHARS:
            issues.append(f"USP {idx} too long: {len(usp)} chars")
        if len(usp) < USP_MIN_CHARS:
            issues.append(f"USP {idx} too short: {len(usp)} chars")

    return cleaned, issues


def pad_usps(usps: Sequence[str], templates: Sequence[str], count: int = USP_COUNT) -> List[str]:
    """
    Exactly `count` bullets: keep the first `count`, then top up with templates
    not used yet, in template order.
    """
    padded = list(usps[:count])
    used = {u.strip().lower() for u in padded}
    for template in templates:
        if len(padded) >= count:
            break
        if template.strip().lower() not in used:
            padded.append(template)
            used.add(template.strip().lower())
    return padded
