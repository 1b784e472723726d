"""
Product-type rules and word lists for the marketplace title synthesizer.

A rule matches when every one of its keyword groups matches the lower-cased
product text (word-bounded regex alternation). Rules with two groups are
evaluated before single-group rules; within each tier the order below applies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class ProductTypeRule:
    label: str
    groups: Tuple[str, ...]


PRODUCT_TYPE_RULES: Tuple[ProductTypeRule, ...] = (
    ProductTypeRule("Notebook Netzteil", (r"notebook|laptop",
                                          r"netzteil|power supply|ac adapter|netzadapter|stromversorgung")),
    ProductTypeRule("KFZ Ladekabel", (r"kfz|auto|car", r"ladekabel|ladegeraet|ladegerät|charger")),
    ProductTypeRule("HDMI Umschaltbox", (r"hdmi", r"umschaltbox|switch")),
    ProductTypeRule("HDMI Konverter", (r"hdmi", r"konverter|converter|adapter")),
    ProductTypeRule("TV Kupplung", (r"tv|fernseh", r"kupplung|verteiler")),
    ProductTypeRule("LED Lampe", (r"led", r"lampe|leuchte|light")),

    ProductTypeRule("Akku", (r"akku|battery|batterie|hochleistungs-akku|li-ion|lithium|cell",)),
    ProductTypeRule("Netzteil", (r"netzteil|power supply|ac adapter|netzadapter|stromversorgung",)),
    ProductTypeRule("Ladegerät", (r"ladegeraet|ladegerät|ladestation|charger|charging station|lader",)),
    ProductTypeRule("Speicherkarte", (r"speicherkarte|memory card|sd|sdhc|sdxc|microsd",)),
    ProductTypeRule("Dockingstation", (r"dockingstation|docking station|dock",)),
    ProductTypeRule("Adapter", (r"adapter|stromadapter",)),
    ProductTypeRule("Kabel", (r"kabel|cable|stromkabel|netzkabel",)),
)

BRAND_TOKENS: FrozenSet[str] = frozenset({
    "asus", "hp", "dell", "lenovo", "acer", "samsung", "apple", "sony", "lg", "toshiba",
    "msi", "ibm", "fujitsu", "medion", "xtar", "keeppower", "ansmann", "varta", "panasonic",
})

FILLER_TOKENS: FrozenSet[str] = frozenset({
    "für", "fuer", "kein", "original", "passend", "geeignet", "mit", "und",
})

GENERIC_TOKENS: FrozenSet[str] = frozenset({
    "netzteil", "akku", "notebook", "laptop", "charger", "adapter", "cable", "kabel",
    "battery", "batterie", "ladegerät", "ladegeraet",
})
