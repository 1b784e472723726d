"""
Candidate header names per SemanticField, in priority order.

Supplier exports use German and English headers, Brickfox-style keys
(`p_name[de]`) and marketplace exports (`Shop SKU`). The first candidate that
resolves wins, so more specific names come first.
"""

from __future__ import annotations

from typing import Dict, Tuple

from domain.canonical import FieldSpec, SemanticField as F


FIELD_SPECS: Tuple[FieldSpec, ...] = (
    FieldSpec(F.SKU, ("Shop SKU", "SKU", "Artikelnummer", "p_item_number", "Item Number",
                      "Article Number", "Art.-Nr.", "articleNumber"),
              label="Artikelnummer", required=True, technical=False),
    FieldSpec(F.TITLE, ("Titel (DE)", "Title", "Produktname", "p_name[de]", "Product Name",
                        "product_name", "productName", "Name"),
              label="Produktname", required=True, technical=False),
    FieldSpec(F.DESCRIPTION, ("Produktbeschreibung (DE)", "Description", "Beschreibung",
                              "p_description[de]", "Product Description", "autoExtractedDescription"),
              label="Beschreibung", technical=False),
    FieldSpec(F.SHORT_INTRO, ("short_intro", "Kurzbeschreibung", "Short Description", "Intro"),
              label="Kurzbeschreibung", technical=False),
    FieldSpec(F.BULLETS, ("bullets", "Merkmale", "Features", "Highlights"),
              label="Merkmale", technical=False),
    FieldSpec(F.BRAND, ("Brand", "Marke", "p_group_path[de]", "Hersteller", "Manufacturer"),
              label="Marke", technical=False),
    FieldSpec(F.SAFETY_WARNINGS, ("safetyWarnings", "Sicherheitshinweise", "Safety Warnings", "Warnhinweise"),
              label="Sicherheitshinweise", technical=False),

    FieldSpec(F.VOLTAGE, ("Spannung", "Nominal-Spannung", "Nennspannung", "Voltage", "Spannung_V"),
              label="Spannung", unit="V"),
    FieldSpec(F.CAPACITY, ("Kapazität", "Kapazitaet", "Nominal-Kapazität", "Capacity", "Kapazitaet_mAh"),
              label="Kapazität", unit="mAh"),
    FieldSpec(F.CURRENT, ("Entladestrom", "Max. Entladestrom", "Discharge Current", "Strom", "Current"),
              label="Entladestrom", unit="A"),
    FieldSpec(F.POWER, ("Leistung", "Power", "Wattage", "Leistung_W"),
              label="Leistung", unit="W"),
    FieldSpec(F.ENERGY, ("Energiegehalt", "Energie", "Energy", "Nennenergie"),
              label="Energie", unit="Wh"),
    FieldSpec(F.WEIGHT, ("Gewicht", "Weight", "Netto-Gewicht", "Bruttogewicht", "v_weight"),
              label="Gewicht", unit="g"),
    FieldSpec(F.LENGTH, ("Länge", "Laenge", "Length", "v_depth"),
              label="Länge", unit="mm"),
    FieldSpec(F.WIDTH, ("Breite", "Width", "v_width"),
              label="Breite", unit="mm"),
    FieldSpec(F.HEIGHT, ("Höhe", "Hoehe", "Height", "v_height"),
              label="Höhe", unit="mm"),
    FieldSpec(F.DIAMETER, ("Durchmesser", "Diameter"),
              label="Durchmesser", unit="mm"),
    FieldSpec(F.CHEMISTRY, ("Zellchemie", "Zellenchemie", "Technologie", "Chemistry", "Cell Chemistry"),
              label="Technologie"),
    FieldSpec(F.PROTECTION, ("Schutzschaltung", "Protection", "PCB"),
              label="Schutzschaltung"),
    FieldSpec(F.EAN, ("EAN", "EAN-Code", "GTIN", "Barcode", "v_ean"),
              label="EAN"),
    FieldSpec(F.PACKAGING_UNIT, ("Verpackungseinheit", "Packaging Unit", "VPE"),
              label="Verpackungseinheit"),
    FieldSpec(F.PACKAGE_CONTENTS, ("Lieferumfang", "Package Contents", "Inhalt"),
              label="Lieferumfang"),
)

FIELD_SPECS_BY_FIELD: Dict[F, FieldSpec] = {spec.field: spec for spec in FIELD_SPECS}
