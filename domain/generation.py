"""
Generation-side data model.

GenerationResult is the uniform outcome of one subprompt call: `data` holds
either the parsed JSON object (structured subprompts) or raw text, never both.
ProductCopy is the assembled, post-processed output for one record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass
class GenerationResult:
    success: bool
    data: Any = None
    error: Optional[str] = None
    attempts: int = 0

    @classmethod
    def ok(cls, data: Any, attempts: int = 1) -> "GenerationResult":
        return cls(success=True, data=data, attempts=attempts)

    @classmethod
    def failed(cls, error: str, attempts: int = 0) -> "GenerationResult":
        return cls(success=False, data=None, error=error, attempts=attempts)


@dataclass(frozen=True)
class PromptContext:
    category_name: str
    category_description: str
    product_data: Dict[str, Any]
    available_fields: Tuple[str, ...] = ()
    usp_templates: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SubpromptSpec:
    name: str
    system_prompt: Callable[[PromptContext], str]
    user_prompt: Callable[[PromptContext], str]
    temperature: float
    max_tokens: int
    structured: bool = True
    result_key: Optional[str] = None


@dataclass
class ProductCopy:
    narrative: str
    usp_bullets: List[str]
    technical_specs: Dict[str, str] = field(default_factory=dict)
    safety_notice: Optional[str] = None
    package_contents: Optional[str] = None
    product_highlights: List[str] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    fallbacks: List[str] = field(default_factory=list)
