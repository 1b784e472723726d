"""
Record enrichment: generated copy + fallbacks + spec merge.

`enrich` always returns a complete ProductCopy. Whatever a subprompt could not
deliver (failed, timed out, malformed, or simply not requested) is filled from
the category configuration or from deterministic data, and the deterministic
specs are merged with the generated ones onto the record.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from config.categories import DEFAULT_REGISTRY
from config.settings import BATCH_CONCURRENCY, DEFAULT_PACKAGE_CONTENTS
from domain.canonical import NormalizedRecord, SemanticField
from domain.category import CategoryConfig, CategoryRegistry
from domain.generation import GenerationResult, ProductCopy, PromptContext
from fields.normalization import is_non_answer
from fields.tech_specs import merge_specs

from .orchestrator import PromptOrchestrator
from .post_processor import check_narrative, check_usps, clean_markup, pad_usps
from .prompts import (
    ALL_SUBPROMPTS,
    NARRATIVE,
    PACKAGE_CONTENTS,
    SAFETY_WARNINGS,
    TECH_EXTRACTION,
    USP_GENERATION,
)

logger = logging.getLogger(__name__)


def build_context(record: NormalizedRecord, category: CategoryConfig) -> PromptContext:
    return PromptContext(
        category_name=category.name,
        category_description=category.description,
        product_data=record.to_prompt_data(),
        available_fields=tuple(f.label for f in category.technical_fields),
        usp_templates=category.usp_templates,
    )


def _payload(results: Dict[str, GenerationResult], name: str, key: str) -> Any:
    """Member `key` of a successful structured result, else None."""
    result = results.get(name)
    if result is None or not result.success or not isinstance(result.data, dict):
        return None
    return result.data.get(key)


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    text = clean_markup(str(value))
    return "" if is_non_answer(text) else text


def _generated_specs(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    specs: Dict[str, str] = {}
    for key, raw in value.items():
        text = _text(raw)
        if text:
            specs[clean_markup(str(key))] = text
    return specs


def _fallback_narrative(record: NormalizedRecord, category: CategoryConfig) -> str:
    if record.title:
        return f"{record.title}. {category.description}."
    return f"{category.description}."


async def enrich(
    record: NormalizedRecord,
    category: CategoryConfig,
    requested: Iterable[str] = ALL_SUBPROMPTS,
    orchestrator: Optional[PromptOrchestrator] = None,
    fill_required: bool = False,
) -> ProductCopy:
    """
    Generate, validate and assemble the copy for one record.

    Side effect: `record.merged_specs` is replaced by the merged spec table.
    """
    orchestrator = orchestrator or PromptOrchestrator()
    requested = list(dict.fromkeys(requested))
    results = await orchestrator.execute_multiple(requested, build_context(record, category))

    issues: List[str] = []
    fallbacks = [name for name in requested if name in results and not results[name].success]

    narrative = ""
    narrative_raw = _text(_payload(results, NARRATIVE, "narrative"))
    if narrative_raw:
        checked = check_narrative(narrative_raw)
        narrative = checked.text
        issues.extend(checked.issues)
    if not narrative:
        narrative = _fallback_narrative(record, category)

    highlights = _payload(results, NARRATIVE, "productHighlights")
    highlights = [h for h in (_text(x) for x in highlights or []) if h] if isinstance(highlights, list) else []
    if not highlights:
        highlights = list(category.product_highlights)

    usps_raw = _payload(results, USP_GENERATION, "usps")
    usps, usp_issues = check_usps([str(u) for u in usps_raw] if isinstance(usps_raw, list) else [])
    if USP_GENERATION in requested and results.get(USP_GENERATION) and results[USP_GENERATION].success:
        issues.extend(usp_issues)
    usps = pad_usps(usps, category.usp_templates)

    safety = _text(_payload(results, SAFETY_WARNINGS, "safetyNotice")) or category.safety_notice

    package = (
        _text(_payload(results, PACKAGE_CONTENTS, "packageContents"))
        or record.spec(SemanticField.PACKAGE_CONTENTS)
        or DEFAULT_PACKAGE_CONTENTS
    )

    copy = ProductCopy(
        narrative=narrative,
        usp_bullets=usps,
        technical_specs=_generated_specs(_payload(results, TECH_EXTRACTION, "technicalSpecs")),
        safety_notice=safety,
        package_contents=package,
        product_highlights=highlights,
        issues=issues + [f"Fallback used for {name}" for name in fallbacks],
        fallbacks=fallbacks,
    )

    record.merged_specs = merge_specs(record, category, copy.technical_specs, fill_required=fill_required)

    if fallbacks:
        logger.warning("Record %s: fallback content for %s", record.sku, ", ".join(fallbacks))
    logger.info("Record %s enriched (%d issues)", record.sku, len(copy.issues))
    return copy


async def enrich_batch(
    records: Sequence[NormalizedRecord],
    registry: CategoryRegistry = DEFAULT_REGISTRY,
    requested: Iterable[str] = ALL_SUBPROMPTS,
    orchestrator: Optional[PromptOrchestrator] = None,
    concurrency: int = BATCH_CONCURRENCY,
    fill_required: bool = False,
) -> List[ProductCopy]:
    """Enrich many records with at most `concurrency` in flight; results keep input order."""
    orchestrator = orchestrator or PromptOrchestrator()
    requested = list(requested)
    window = asyncio.Semaphore(max(1, concurrency))

    async def _one(record: NormalizedRecord) -> ProductCopy:
        async with window:
            return await enrich(record, registry.get(record.category), requested, orchestrator, fill_required)

    logger.info("Enriching %d records (window %d)", len(records), concurrency)
    return list(await asyncio.gather(*(_one(r) for r in records)))
