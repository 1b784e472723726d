"""
TECH-SPEC RESOLUTION
--------------------
Builds the deterministic spec tiers at normalization time and merges them
with generated specs once generation has finished.

Priority per field (field-local, one field may come from tier 1 while its
sibling comes from tier 3):
1. structured source columns
2. free text: "Label: value" lines first, then pattern hits
3. generated values

Labels and keys are compared as folded keys. Non-answers ("n/a",
"nicht angegeben", ...) count as absent at every tier.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from config.field_specs import FIELD_SPECS
from domain.canonical import FieldSpec, NormalizedRecord, SemanticField as F, SpecSource, SpecValue
from domain.category import CategoryConfig, TechnicalField
from fields.attributes import extract_attributes, normalize_field_value
from fields.normalization import clean_html, fold_key, is_non_answer

logger = logging.getLogger(__name__)

LABEL_LINE = re.compile(r"^\s*([A-Za-zÄÖÜäöüß][^:=\n]{0,48}?)\s*[:=]\s*(.+?)\s*$")
MIN_CONTAINED_KEY = 4

DIMENSIONS_KEY = "dimensions"
PACKAGE_CONTENTS_KEY = F.PACKAGE_CONTENTS.value


def parse_label_lines(text: str) -> List[Tuple[str, str]]:
    """'Kapazität: 3800mAh' lines as (label, value) pairs, in order."""
    pairs: List[Tuple[str, str]] = []
    for line in clean_html(text, keep_lines=True).splitlines():
        match = LABEL_LINE.match(line)
        if match and not is_non_answer(match.group(2)):
            pairs.append((match.group(1).strip(), match.group(2).strip()))
    return pairs


def _spec_keys(spec: FieldSpec) -> List[str]:
    keys = [fold_key(spec.label), fold_key(spec.field.value)]
    keys += [fold_key(c) for c in spec.candidates]
    return [k for k in dict.fromkeys(keys) if k]


def match_label(label: str, field_specs: Sequence[FieldSpec] = FIELD_SPECS) -> Optional[FieldSpec]:
    """Technical FieldSpec whose label or candidates match `label`."""
    key = fold_key(label)
    if not key:
        return None
    technical = [s for s in field_specs if s.technical]

    for spec in technical:
        if key in _spec_keys(spec):
            return spec
    for spec in technical:
        if any(len(k) >= MIN_CONTAINED_KEY and k in key for k in _spec_keys(spec)):
            return spec
    return None


def text_specs(title: str, description: str, field_specs: Sequence[FieldSpec] = FIELD_SPECS) -> Dict[F, str]:
    """Tier 2 for one record: label/value lines win over pattern hits."""
    found: Dict[F, str] = {}

    for label, raw in parse_label_lines(description):
        spec = match_label(label, field_specs)
        if spec is None or spec.field in found:
            continue
        value = normalize_field_value(spec.field, raw, header=label)
        if value:
            found[spec.field] = value

    for semantic, value in extract_attributes(f"{title}\n{description}").items():
        found.setdefault(semantic, value)

    return found


def structured_specs(
    values: Mapping[F, str],
    column_map: Mapping[F, str],
    field_specs: Sequence[FieldSpec] = FIELD_SPECS,
) -> Dict[F, str]:
    """Tier 1: unit-normalized values of resolved technical columns."""
    found: Dict[F, str] = {}
    for spec in field_specs:
        if not spec.technical or spec.field not in values:
            continue
        value = normalize_field_value(spec.field, values[spec.field], header=column_map.get(spec.field, ""))
        if value:
            found[spec.field] = value
    return found


def deterministic_specs(structured: Mapping[F, str], text: Mapping[F, str]) -> Dict[F, SpecValue]:
    specs = {f: SpecValue(v, SpecSource.STRUCTURED) for f, v in structured.items()}
    for semantic, value in text.items():
        if semantic not in specs:
            specs[semantic] = SpecValue(value, SpecSource.TEXT)
    return specs


def _semantic_for(field: TechnicalField, field_specs: Sequence[FieldSpec]) -> Optional[F]:
    try:
        return F(field.key)
    except ValueError:
        pass
    spec = match_label(field.label, field_specs)
    return spec.field if spec else None


def _strip_mm(value: str) -> str:
    return re.sub(r"\s*mm$", "", value)


def _dimensions(record: NormalizedRecord) -> Optional[SpecValue]:
    """Compose 'L × W × H mm' (or 'Ø × L mm') from the deterministic parts."""
    specs = record.technical_specs
    for parts in ((F.LENGTH, F.WIDTH, F.HEIGHT), (F.DIAMETER, F.LENGTH)):
        if all(p in specs for p in parts):
            values = [specs[p] for p in parts]
            source = SpecSource.TEXT if any(v.source == SpecSource.TEXT for v in values) else SpecSource.STRUCTURED
            return SpecValue(" × ".join(_strip_mm(v.value) for v in values) + " mm", source)
    return None


def _lookup(keys: Sequence[str], entries: Mapping[str, str]) -> Optional[str]:
    for key in keys:
        value = entries.get(key)
        if value and not is_non_answer(value):
            return value
    return None


def merge_specs(
    record: NormalizedRecord,
    category: CategoryConfig,
    generated: Mapping[str, str],
    field_specs: Sequence[FieldSpec] = FIELD_SPECS,
    fill_required: bool = False,
) -> Dict[str, SpecValue]:
    """
    Merge deterministic and generated specs into display label -> SpecValue.

    Category fields come first in their configured order, followed by any
    other deterministic technical values. Fields nobody could fill are left
    out, unless `fill_required` is set: then a required field with a
    configured fallback shows that fallback.
    """
    by_field = {s.field: s for s in field_specs}
    label_lines = {fold_key(label): value for label, value in reversed(parse_label_lines(record.description))}
    generated_by_key = {fold_key(k): str(v).strip() for k, v in generated.items() if v is not None}

    merged: Dict[str, SpecValue] = {}
    used: set = set()

    for field in category.technical_fields:
        semantic = _semantic_for(field, field_specs)
        keys = [fold_key(field.key), fold_key(field.label)]
        if semantic is not None and semantic in by_field:
            keys += _spec_keys(by_field[semantic])
        keys = [k for k in dict.fromkeys(keys) if k]

        resolved: Optional[SpecValue] = None
        deterministic = record.technical_specs.get(semantic) if semantic else None

        if deterministic is not None and not is_non_answer(deterministic.value):
            resolved = deterministic
        elif field.key == DIMENSIONS_KEY:
            resolved = _dimensions(record)

        if resolved is None:
            line_value = _lookup(keys, label_lines)
            if line_value:
                resolved = SpecValue(line_value, SpecSource.TEXT)

        if resolved is None:
            generated_value = _lookup(keys, generated_by_key)
            if generated_value:
                if semantic is not None:
                    generated_value = normalize_field_value(semantic, generated_value) or generated_value
                resolved = SpecValue(generated_value, SpecSource.GENERATED)

        if resolved is None and fill_required and field.required and field.fallback:
            resolved = SpecValue(field.fallback, SpecSource.FALLBACK)

        if resolved is None:
            logger.debug("No value for %s", field.key)
            continue

        merged[field.label] = resolved
        if semantic is not None:
            used.add(semantic)
        if field.key == DIMENSIONS_KEY:
            used.update((F.LENGTH, F.WIDTH, F.HEIGHT, F.DIAMETER))

    for semantic, spec_value in record.technical_specs.items():
        if semantic in used or semantic.value == PACKAGE_CONTENTS_KEY:
            continue
        label = by_field[semantic].label if semantic in by_field else semantic.value
        if label not in merged and not is_non_answer(spec_value.value):
            merged[label] = spec_value

    logger.info(
        "Merged %d specs for %s (%s)",
        len(merged),
        record.sku,
        ", ".join(f"{label}={v.source.value}" for label, v in merged.items()),
    )
    return merged
