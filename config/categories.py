"""
Product category tables.

Read-only data: one CategoryConfig per supported category, bundled into a
versioned CategoryRegistry. Components take the registry (or a single
CategoryConfig) as an argument; DEFAULT_REGISTRY is only the default value.
"""

from __future__ import annotations

from domain.category import CategoryConfig, CategoryRegistry, TechnicalField


BATTERY = CategoryConfig(
    id="battery",
    name="Akku/Batterie",
    description="Wiederaufladbare Akkus und Einwegbatterien",
    keywords=("akku", "batterie", "battery", "li-ion", "lithium", "nimh", "nicd", "mah", "wh"),
    technical_fields=(
        TechnicalField("capacity", "Kapazität", unit="mAh", required=True, fallback="Nicht angegeben"),
        TechnicalField("voltage", "Spannung", unit="V", required=True, fallback="Nicht angegeben"),
        TechnicalField("chemistry", "Technologie", fallback="Lithium-Ionen"),
        TechnicalField("protection", "Schutzschaltung", fallback="Ja"),
        TechnicalField("current", "Entladestrom", unit="A"),
        TechnicalField("energy", "Energie", unit="Wh"),
        TechnicalField("weight", "Gewicht", unit="g"),
        TechnicalField("dimensions", "Abmessungen", unit="mm"),
    ),
    usp_templates=(
        "Wiederaufladbar - spart Kosten und schont die Umwelt",
        "Integrierte Schutzschaltung - maximale Sicherheit vor Überladung und Tiefentladung",
        "Langlebige Lithium-Ionen Technologie - lange Lebensdauer und hohe Zyklenfestigkeit",
        "Professionelle Qualität - zuverlässig für den täglichen Einsatz",
        "Kein Memory-Effekt - jederzeit nachladbar ohne Kapazitätsverlust",
        "Umweltfreundlich - nachhaltige Energieversorgung",
        "Hohe Energiedichte - langanhaltende Leistung bei kompakter Bauweise",
    ),
    safety_notice=(
        "⚠️ Nicht ins Feuer werfen oder erhitzen. Vor Kurzschluss schützen. "
        "Nur mit geeigneten Ladegeräten laden. Von Kindern fernhalten. "
        "Bei Beschädigung nicht mehr verwenden."
    ),
    product_highlights=(
        "Robustes Gehäuse und langlebige Verarbeitung",
        "Zuverlässige Energieversorgung für professionelle Anwendungen",
        "Hohe Leistung bei geringem Gewicht",
        "Optimales Preis-Leistungs-Verhältnis",
        "Kompatibel mit vielen Geräten",
    ),
)

CHARGER = CategoryConfig(
    id="charger",
    name="Ladegerät",
    description="Ladegeräte für Akkus und Batterien",
    keywords=("ladegerät", "charger", "lader", "charging", "laden", "netzteil"),
    technical_fields=(
        TechnicalField("input", "Eingang", unit="V/A", required=True, fallback="230V AC"),
        TechnicalField("output", "Ausgang", unit="V/A", required=True, fallback="Nicht angegeben"),
        TechnicalField("voltage", "Spannung", unit="V"),
        TechnicalField("current", "Ladestrom", unit="A"),
        TechnicalField("power", "Leistung", unit="W"),
        TechnicalField("chargingTime", "Ladezeit", unit="h", fallback="Abhängig von Akkukapazität"),
        TechnicalField("compatibility", "Kompatibilität", fallback="Siehe Beschreibung"),
        TechnicalField("weight", "Gewicht", unit="g"),
    ),
    usp_templates=(
        "Intelligente Ladesteuerung - optimale Ladung für maximale Akkulebensdauer",
        "Mehrfachschutz - gegen Überladung, Überhitzung und Kurzschluss",
        "Schnellladefunktion - spart wertvolle Zeit",
        "Universal einsetzbar - kompatibel mit verschiedenen Akkutypen",
        "LED-Anzeige - zeigt den aktuellen Ladestatus",
        "Kompaktes Design - ideal für unterwegs",
        "Energieeffizient - niedriger Standby-Verbrauch",
    ),
    safety_notice=(
        "⚠️ Nur in trockenen Räumen verwenden. Nicht abdecken während des Ladevorgangs. "
        "Bei Überhitzung sofort vom Netz trennen. Kinder beaufsichtigen. "
        "Nur mit kompatiblen Akkus verwenden."
    ),
    product_highlights=(
        "Hochwertige Elektronik für sichere Ladung",
        "Langlebige Konstruktion für jahrelangen Einsatz",
        "Einfache Bedienung und klare Anzeigen",
        "Zuverlässige Leistung bei kompakter Bauweise",
        "Optimales Preis-Leistungs-Verhältnis",
    ),
)

TOOL = CategoryConfig(
    id="tool",
    name="Werkzeug",
    description="Elektrowerkzeuge und Handwerkzeuge",
    keywords=("werkzeug", "tool", "bohrmaschine", "säge", "schleifer", "schrauber", "akkuschrauber"),
    technical_fields=(
        TechnicalField("power", "Leistung", unit="W", required=True, fallback="Nicht angegeben"),
        TechnicalField("torque", "Drehmoment", unit="Nm"),
        TechnicalField("speed", "Drehzahl", unit="min⁻¹"),
        TechnicalField("voltage", "Spannung", unit="V"),
        TechnicalField("weight", "Gewicht", unit="g"),
        TechnicalField("dimensions", "Abmessungen", unit="mm"),
    ),
    usp_templates=(
        "Kraftvolle Leistung - für anspruchsvolle Arbeiten",
        "Ergonomisches Design - ermüdungsfreies Arbeiten auch bei langen Einsätzen",
        "Robuste Konstruktion - langlebig und zuverlässig",
        "Vielseitig einsetzbar - für professionelle und private Anwendungen",
        "Präzise Arbeitsweise - exakte Ergebnisse",
        "Einfache Handhabung - intuitive Bedienung",
        "Sicheres Arbeiten - integrierte Sicherheitsfunktionen",
    ),
    safety_notice=(
        "⚠️ Bedienungsanleitung vor Gebrauch lesen. Schutzkleidung (Brille, Handschuhe, "
        "Gehörschutz) tragen. Werkstück sicher fixieren. Von Kindern fernhalten. "
        "Regelmäßige Wartung durchführen."
    ),
    product_highlights=(
        "Professionelle Qualität für anspruchsvolle Aufgaben",
        "Langlebige Verarbeitung und hochwertige Materialien",
        "Optimal ausbalanciert für präzise Kontrolle",
        "Vielseitig einsetzbar in Werkstatt und auf der Baustelle",
        "Hervorragendes Preis-Leistungs-Verhältnis",
    ),
)

DEFAULT_REGISTRY = CategoryRegistry(
    version="2024.11",
    categories=(BATTERY, CHARGER, TOOL),
    default_id="battery",
)
