from .enrich import build_context, enrich, enrich_batch
from .orchestrator import GenerationState, PromptOrchestrator, RequestTrace, RetryPolicy, parse_structured
from .post_processor import check_narrative, check_usps, clean_markup, pad_usps
from .prompts import ALL_SUBPROMPTS, BASE_SYSTEM_PROMPT, SUBPROMPTS

__all__ = [
    "ALL_SUBPROMPTS",
    "BASE_SYSTEM_PROMPT",
    "GenerationState",
    "PromptOrchestrator",
    "RequestTrace",
    "RetryPolicy",
    "SUBPROMPTS",
    "build_context",
    "check_narrative",
    "check_usps",
    "clean_markup",
    "enrich",
    "enrich_batch",
    "pad_usps",
    "parse_structured",
]
