from .canonical import (
    FieldSpec,
    NormalizedRecord,
    RawRecord,
    SemanticField,
    SpecSource,
    SpecValue,
)
from .category import CategoryConfig, CategoryRegistry, TechnicalField
from .errors import (
    DecodeDegraded,
    EmptyDataset,
    GenerationFailed,
    GenerationTimeout,
    InvalidGeneratedShape,
    ParseWarning,
    ProductCopyError,
    RateLimited,
)
from .generation import GenerationResult, ProductCopy, PromptContext, SubpromptSpec

__all__ = [
    "CategoryConfig",
    "CategoryRegistry",
    "DecodeDegraded",
    "EmptyDataset",
    "FieldSpec",
    "GenerationFailed",
    "GenerationResult",
    "GenerationTimeout",
    "InvalidGeneratedShape",
    "NormalizedRecord",
    "ParseWarning",
    "ProductCopy",
    "ProductCopyError",
    "PromptContext",
    "RateLimited",
    "RawRecord",
    "SemanticField",
    "SpecSource",
    "SpecValue",
    "SubpromptSpec",
    "TechnicalField",
]
