"""
Category configuration schema.

A CategoryConfig bundles the category-specific vocabulary used downstream:
keywords for the categorizer, technical fields for the merge resolver and the
tech-extraction prompt, USP templates for padding, and the default safety
notice / highlights used when generation falls back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class TechnicalField:
    key: str
    label: str
    unit: Optional[str] = None
    required: bool = False
    fallback: Optional[str] = None


@dataclass(frozen=True)
class CategoryConfig:
    id: str
    name: str
    description: str
    keywords: Tuple[str, ...]
    technical_fields: Tuple[TechnicalField, ...]
    usp_templates: Tuple[str, ...]
    safety_notice: str
    product_highlights: Tuple[str, ...]


@dataclass(frozen=True)
class CategoryRegistry:
    """Read-only, versioned set of categories with a default."""

    version: str
    categories: Tuple[CategoryConfig, ...]
    default_id: str

    def __post_init__(self) -> None:
        ids = [c.id for c in self.categories]
        if self.default_id not in ids:
            raise ValueError(f"Default category '{self.default_id}' is not registered")
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate category ids: {ids}")

    @property
    def default(self) -> CategoryConfig:
        return self.get(self.default_id)

    def get(self, category_id: str) -> CategoryConfig:
        """Return the category by id, or the default category if unknown."""
        by_id = self._by_id()
        return by_id.get(category_id) or by_id[self.default_id]

    def _by_id(self) -> Dict[str, CategoryConfig]:
        return {c.id: c for c in self.categories}
