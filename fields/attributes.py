"""
ATTRIBUTE EXTRACTION
--------------------
Heuristic extraction of technical values and identifiers from free text.

Pattern families:
- unit-qualified numerics (voltage, capacity, current, power, energy, weight)
- dimension triples / pairs ("70 x 21 x 21 mm", "21 x 70 mm")
- model / article codes
- chemistry, EAN, packaging unit, package contents

Numbers accept the decimal comma and are emitted in canonical form with the
canonical unit reattached ("5000 mAh", "3.7 V", "25A"). Voltage ranges are kept
verbatim. A field without a match is absent from the result, never "".

The same unit handling is used for values read from structured columns
(`normalize_field_value`), so both deterministic tiers look alike.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from domain.canonical import SemanticField as F
from fields.normalization import (
    clean_html,
    format_number,
    is_non_answer,
    parse_number,
    strip_qualifiers,
)

logger = logging.getLogger(__name__)

_NUM = r"(\d+(?:[.,]\d+)?)"
_LEFT = r"(?<![\w.,])"

VOLTAGE_RANGE = re.compile(
    _LEFT + r"\d{1,3}(?:[.,]\d+)?\s*(?:V|Volt)?\s*(?:-|–|bis|to)\s*\d{1,3}(?:[.,]\d+)?\s*(?:V|Volt)(?!\w)"
)
VOLTAGE = re.compile(_LEFT + _NUM + r"\s*(V|Volt|volt)(?!\w)")
CAPACITY = re.compile(_LEFT + _NUM + r"\s*(mAh|Ah)(?!\w)", re.IGNORECASE)
CURRENT = re.compile(_LEFT + _NUM + r"\s*(mA|A)(?!\w)")
POWER = re.compile(_LEFT + _NUM + r"\s*(kW|W|Watt)(?!\w)")
ENERGY = re.compile(_LEFT + _NUM + r"\s*(kWh|Wh)(?!\w)")
WEIGHT = re.compile(_LEFT + _NUM + r"\s*(kg|Kg|KG|g|Gramm)(?!\w)")
DIMENSIONS = re.compile(
    _LEFT + _NUM + r"\s*[x×*]\s*" + _NUM + r"(?:\s*[x×*]\s*" + _NUM + r")?\s*(mm|cm|m)(?!\w)",
    re.IGNORECASE,
)
EAN = re.compile(r"(?<!\d)\d{13}(?!\d)")

MODEL_CODE = re.compile(r"\b[A-Z0-9]{3,}[\dA-Z\-/]*\b")
KNOWN_TECH_TOKENS = frozenset({"SDHC", "SDXC", "USB", "HDMI", "LED"})
EXCLUDED_CODES = frozenset({"DE", "EN", "FR", "IT", "ES", "NL", "PL", "VGA", "DVI", "AUX", "RGB"})
YEAR_LIKE = re.compile(r"^(?:19|20)\d{2}$")
UNIT_SUFFIXED = re.compile(r"^\d+(?:[.,]\d+)?(?:V|W|Wh|mAh|Ah|A|mA|mm|cm|g|kg)$", re.IGNORECASE)

PACKAGING_PATTERNS = (
    re.compile(r"(\d+)\s*(?:er)?[\s-]*(?:Pack|Set|Stück|Stuck|Stueck|pcs|pieces|pc)\b", re.IGNORECASE),
    re.compile(r"(?:Pack|Set)\s*(?:mit|zu|a)\s*(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)[\s-]*teilig", re.IGNORECASE),
    re.compile(r"Einzelst(?:ü|ue)ck", re.IGNORECASE),
)

PACKAGE_CONTENTS_PATTERNS = (
    re.compile(r"Im Lieferumfang enthalten:\s*([^.;\n]+)", re.IGNORECASE),
    re.compile(r"Lieferumfang:\s*([^.;\n]+)", re.IGNORECASE),
    re.compile(r"Enthält:\s*([^.;\n]+)", re.IGNORECASE),
    re.compile(r"Inklusive:\s*([^.;\n]+)", re.IGNORECASE),
    re.compile(r"inkl\.\s*([^.;\n]+)", re.IGNORECASE),
)
PACKAGE_CONTENTS_MAX = 200

CHEMISTRY_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"\bLiFePO4\b|\bLFP\b", re.IGNORECASE), "LiFePO4"),
    (re.compile(r"\bLi-?Po(?:ly(?:mer)?)?\b", re.IGNORECASE), "Li-Poly"),
    (re.compile(r"\bLi-?Ion(?:en)?\b|\bLithium-Ion(?:en)?\b", re.IGNORECASE), "Li-Ion"),
    (re.compile(r"\bNi-?MH\b", re.IGNORECASE), "NiMH"),
    (re.compile(r"\bNi-?Cd\b", re.IGNORECASE), "NiCd"),
    (re.compile(r"\bBlei-?S(?:ä|ae)ure\b|\blead-?acid\b", re.IGNORECASE), "Blei-Säure"),
    (re.compile(r"\bAlkali(?:ne|sch)?\b", re.IGNORECASE), "Alkaline"),
)

DIMENSION_FIELDS = (F.LENGTH, F.WIDTH, F.HEIGHT, F.DIAMETER)

# canonical unit + factor per source unit (lower-cased)
UNIT_TABLES: Dict[F, Tuple[str, Dict[str, float]]] = {
    F.VOLTAGE: ("V", {"v": 1, "volt": 1, "mv": 0.001}),
    F.CAPACITY: ("mAh", {"mah": 1, "ah": 1000}),
    F.CURRENT: ("A", {"a": 1, "ma": 0.001}),
    F.POWER: ("W", {"w": 1, "watt": 1, "kw": 1000}),
    F.ENERGY: ("Wh", {"wh": 1, "kwh": 1000}),
    F.WEIGHT: ("g", {"g": 1, "gramm": 1, "kg": 1000, "mg": 0.001}),
}
for _dim in DIMENSION_FIELDS:
    UNIT_TABLES[_dim] = ("mm", {"mm": 1, "cm": 10, "m": 1000})


def format_quantity(semantic: F, value: float) -> str:
    """'5000 mAh', '3.7 V'; current is written compactly ('25A')."""
    unit = UNIT_TABLES[semantic][0]
    number = format_number(value)
    if semantic == F.CURRENT:
        return f"{number}{unit}"
    return f"{number} {unit}"


def convert(semantic: F, number: float, unit: Optional[str]) -> float:
    """Scale `number` from `unit` to the canonical unit of `semantic`."""
    factors = UNIT_TABLES[semantic][1]
    return number * factors.get((unit or "").lower(), 1)


def format_chemistry(value: str) -> str:
    for pattern, label in CHEMISTRY_PATTERNS:
        if pattern.search(value):
            return label
    return value.strip()


def simplify_protection(value: str) -> str:
    """'PCB/BMS Schutz, Überladeschutz' -> 'PCB/BMS'."""
    first = value.split(",")[0].strip()
    simplified = re.sub(r"[\s-]*schutz$", "", first, flags=re.IGNORECASE).strip()
    return simplified or first


def extract_packaging_unit(text: str) -> Optional[str]:
    for pattern in PACKAGING_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        if match.groups() and match.group(1):
            return f"{int(match.group(1))} Stück"
        return "1 Stück"
    return None


def extract_package_contents(text: str) -> Optional[str]:
    for pattern in PACKAGE_CONTENTS_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        contents = match.group(1).strip()
        if len(contents) > PACKAGE_CONTENTS_MAX:
            contents = contents[:PACKAGE_CONTENTS_MAX].strip()
            last_comma = contents.rfind(",")
            if last_comma > 150:
                contents = contents[:last_comma]
        return contents or None
    return None


def extract_model_codes(text: str) -> List[str]:
    """Alphanumeric model / article codes, deduplicated in order of appearance."""
    codes: List[str] = []
    for token in MODEL_CODE.findall(text or ""):
        if not 3 <= len(token) <= 20:
            continue
        if not (re.search(r"\d", token) or token in KNOWN_TECH_TOKENS):
            continue
        if token in EXCLUDED_CODES or YEAR_LIKE.match(token) or UNIT_SUFFIXED.match(token):
            continue
        if token not in codes:
            codes.append(token)
    return codes


def _first_quantity(pattern: re.Pattern, semantic: F, text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    number = parse_number(match.group(1))
    if number is None:
        return None
    return format_quantity(semantic, convert(semantic, number, match.group(2)))


def extract_dimensions(text: str) -> Dict[F, str]:
    match = DIMENSIONS.search(text)
    if not match:
        return {}

    unit = match.group(4)
    numbers = [parse_number(g) for g in match.groups()[:3] if g]
    targets = (F.LENGTH, F.WIDTH, F.HEIGHT) if len(numbers) == 3 else (F.DIAMETER, F.LENGTH)

    found: Dict[F, str] = {}
    for semantic, number in zip(targets, numbers):
        if number is not None:
            found[semantic] = format_quantity(semantic, convert(semantic, number, unit))
    return found


def extract_voltage(text: str) -> Optional[str]:
    """A range is returned as written; otherwise the first point value."""
    ranged = VOLTAGE_RANGE.search(text)
    if ranged:
        return ranged.group(0).strip()
    return _first_quantity(VOLTAGE, F.VOLTAGE, text)


def extract_attributes(text: str) -> Dict[F, str]:
    """
    Run every pattern family over `text` (titles first, then descriptions).

    Returns:
        SemanticField -> normalized value for each family that matched
    """
    plain = clean_html(text)
    numeric = strip_qualifiers(plain)
    found: Dict[F, str] = {}

    voltage = extract_voltage(numeric)
    if voltage:
        found[F.VOLTAGE] = voltage

    for semantic, pattern in (
        (F.CAPACITY, CAPACITY),
        (F.CURRENT, CURRENT),
        (F.POWER, POWER),
        (F.ENERGY, ENERGY),
        (F.WEIGHT, WEIGHT),
    ):
        value = _first_quantity(pattern, semantic, numeric)
        if value:
            found[semantic] = value

    found.update(extract_dimensions(numeric))

    for pattern, label in CHEMISTRY_PATTERNS:
        if pattern.search(plain):
            found[F.CHEMISTRY] = label
            break

    ean = EAN.search(plain)
    if ean:
        found[F.EAN] = ean.group(0)

    packaging = extract_packaging_unit(plain)
    if packaging:
        found[F.PACKAGING_UNIT] = packaging

    contents = extract_package_contents(clean_html(text, keep_lines=True))
    if contents:
        found[F.PACKAGE_CONTENTS] = contents

    logger.debug("Extracted %s", {k.value: v for k, v in found.items()})
    return found


def _unit_hint(text: str) -> Optional[str]:
    """Unit written right after the first number, e.g. '0,07 kg' -> 'kg'."""
    match = re.search(r"\d+(?:[.,]\d+)?\s*([A-Za-zµ]+)", text)
    return match.group(1) if match else None


def _header_unit(header: str, semantic: F) -> Optional[str]:
    """Unit named in a header such as 'Gewicht (kg)' or 'Kapazitaet_mAh'."""
    factors = UNIT_TABLES[semantic][1]
    for token in reversed(re.findall(r"[A-Za-z]+", header or "")):
        if token.lower() in factors:
            return token
    return None


def normalize_field_value(semantic: F, raw: str, header: str = "") -> Optional[str]:
    """
    Normalize one value taken from a structured column or a label/value line.

    Returns None for non-answers. Values without a usable number are kept as
    cleaned text.
    """
    text = clean_html(raw)
    if is_non_answer(text):
        return None

    if semantic == F.VOLTAGE:
        ranged = VOLTAGE_RANGE.search(text)
        if ranged:
            return ranged.group(0).strip()

    if semantic in UNIT_TABLES:
        stripped = strip_qualifiers(text)
        number = parse_number(stripped)
        if number is None:
            return text
        unit = _unit_hint(stripped)
        if not unit or unit.lower() not in UNIT_TABLES[semantic][1]:
            unit = _header_unit(header, semantic)
        return format_quantity(semantic, convert(semantic, number, unit))

    if semantic == F.CHEMISTRY:
        return format_chemistry(text)
    if semantic == F.PROTECTION:
        return simplify_protection(text)
    if semantic == F.EAN:
        digits = re.sub(r"\D", "", text)
        return digits if 8 <= len(digits) <= 14 else text
    if semantic == F.PACKAGING_UNIT:
        return extract_packaging_unit(text) or text
    return text
