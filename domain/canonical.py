"""
Record shapes shared by every stage of the pipeline.

Two types are kept apart:
- RawRecord: what a supplier file or scraped page says (header -> string).
- NormalizedRecord: what we think it means, keyed by SemanticField.

The Column Resolver is the only bridge between the two.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

RawRecord = Dict[str, str]


class SemanticField(str, Enum):
    SKU = "sku"
    TITLE = "title"
    DESCRIPTION = "description"
    SHORT_INTRO = "short_intro"
    BULLETS = "bullets"
    BRAND = "brand"
    SAFETY_WARNINGS = "safety_warnings"

    VOLTAGE = "voltage"
    CAPACITY = "capacity"
    CURRENT = "current"
    POWER = "power"
    ENERGY = "energy"
    WEIGHT = "weight"
    LENGTH = "length"
    WIDTH = "width"
    HEIGHT = "height"
    DIAMETER = "diameter"
    CHEMISTRY = "chemistry"
    PROTECTION = "protection"
    EAN = "ean"
    PACKAGING_UNIT = "packaging_unit"
    PACKAGE_CONTENTS = "package_contents"


@dataclass(frozen=True)
class FieldSpec:
    """Resolution metadata for one SemanticField."""

    field: SemanticField
    candidates: Tuple[str, ...]
    label: str
    unit: Optional[str] = None
    required: bool = False
    technical: bool = True


class SpecSource(str, Enum):
    STRUCTURED = "structured"
    TEXT = "text"
    GENERATED = "generated"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SpecValue:
    value: str
    source: SpecSource


@dataclass
class NormalizedRecord:
    """
    Canonical product record produced once per RawRecord.

    `technical_specs` carries the deterministic tiers (structured columns and
    free-text extraction). `merged_specs` stays empty until generation has
    finished and the merge resolver has run.
    """

    sku: str
    title: str
    description: str = ""
    brand: str = ""
    marketplace_title_v1: str = ""
    marketplace_title_v2: str = ""
    technical_specs: Dict[SemanticField, SpecValue] = field(default_factory=dict)
    category: str = ""
    is_duplicate: bool = False

    model_codes: List[str] = field(default_factory=list)
    safety_warnings: str = ""
    source_row: Optional[int] = None
    merged_specs: Dict[str, SpecValue] = field(default_factory=dict)

    def spec(self, semantic: SemanticField) -> Optional[str]:
        found = self.technical_specs.get(semantic)
        return found.value if found else None

    def specs_from(self, source: SpecSource) -> Dict[str, str]:
        """Deterministic specs of one provenance, keyed by field key."""
        return {
            semantic.value: spec.value
            for semantic, spec in self.technical_specs.items()
            if spec.source == source
        }

    def to_prompt_data(self) -> Dict[str, object]:
        """Product data handed to the generation subprompts."""
        data: Dict[str, object] = {
            "product_name": self.title,
            "sku": self.sku,
            "brand": self.brand,
            "description": self.description,
            "model_codes": list(self.model_codes),
            "technical_data": {s.value: v.value for s, v in self.technical_specs.items()},
        }
        if self.safety_warnings:
            data["safetyWarnings"] = self.safety_warnings
        return {k: v for k, v in data.items() if v not in ("", [], {})}

    def to_dict(self) -> Dict[str, object]:
        return {
            "sku": self.sku,
            "title": self.title,
            "description": self.description,
            "brand": self.brand,
            "marketplace_title_v1": self.marketplace_title_v1,
            "marketplace_title_v2": self.marketplace_title_v2,
            "technical_specs": {s.value: v.value for s, v in self.technical_specs.items()},
            "spec_sources": {s.value: v.source.value for s, v in self.technical_specs.items()},
            "category": self.category,
            "is_duplicate": self.is_duplicate,
            "model_codes": list(self.model_codes),
            "source_row": self.source_row,
        }
