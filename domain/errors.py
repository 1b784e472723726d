"""
Error taxonomy.

Only EmptyDataset is fatal (for one normalize call). Generation errors are
raised inside a single subprompt call and converted into failed
GenerationResults by the orchestrator. Non-fatal findings (ParseWarning,
DecodeDegraded) are plain values collected on the normalization report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class ProductCopyError(RuntimeError):
    """Base class for pipeline errors."""
    pass


class EmptyDataset(ProductCopyError):
    """Raised when a source yields zero usable data rows."""
    pass


class GenerationFailed(ProductCopyError):
    """Raised when one subprompt call cannot produce a usable result."""

    def __init__(self, message: str, subprompt: Optional[str] = None):
        super().__init__(message)
        self.subprompt = subprompt


class RateLimited(GenerationFailed):
    """Rate-limit class failure; the only kind that is retried."""
    pass


class GenerationTimeout(GenerationFailed):
    pass


class InvalidGeneratedShape(GenerationFailed):
    pass


@dataclass(frozen=True)
class ParseWarning:
    row: Optional[int]
    message: str


@dataclass(frozen=True)
class DecodeDegraded:
    encoding: str
    replacement_count: int
