"""
Subprompt definitions for product copy generation.

Every subprompt is sent as: BASE_SYSTEM_PROMPT + subprompt system prompt, plus
a user prompt carrying the product data as JSON. All subprompts request a JSON
object; `result_key` names the member the orchestrator requires.
"""

from __future__ import annotations

import json
from typing import Dict, Tuple

from domain.generation import PromptContext, SubpromptSpec

NARRATIVE = "narrative"
USP_GENERATION = "usp-generation"
TECH_EXTRACTION = "tech-extraction"
SAFETY_WARNINGS = "safety-warnings"
PACKAGE_CONTENTS = "package-contents"

ALL_SUBPROMPTS: Tuple[str, ...] = (NARRATIVE, USP_GENERATION, TECH_EXTRACTION, SAFETY_WARNINGS, PACKAGE_CONTENTS)

BASE_SYSTEM_PROMPT = """
Du bist ein Produkttext-Experte für Online-Shops.

GRUNDPRINZIPIEN:
1. Verwende NUR Informationen aus den gegebenen Produktdaten
2. Wenn ein Wert fehlt, lass das Feld komplett weg (kein "Nicht angegeben")
3. Schreibe verkaufsfördernde Texte, keine technischen Spezifikationen
4. Gib immer valides JSON zurück, ohne Markdown-Formatierung
5. Sei präzise, professionell und kundenorientiert

VERBOTEN:
❌ Erfundene Daten oder Annahmen
❌ Template-Anweisungen im Output ("VERWENDE...", "FÜGE EIN...")
❌ Markdown-Formatierung (```json, **, etc.)
❌ Technische Daten als USPs ("3,6 V Spannung")
❌ UI-Anweisungen oder Barrierefreiheits-Hinweise

ERLAUBT:
✅ Kundennutzen in den Vordergrund stellen
✅ Professionelle und klare Sprache
✅ Strukturierte JSON-Ausgabe
✅ Flexibilität basierend auf verfügbaren Daten
""".strip()


def _product_json(context: PromptContext) -> str:
    return json.dumps(context.product_data, indent=2, ensure_ascii=False)


def _numbered(items: Tuple[str, ...], empty: str) -> str:
    if not items:
        return empty
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def narrative_system(context: PromptContext) -> str:
    return f"""
Du schreibst PRODUKTSPEZIFISCHE Produktbeschreibungen.

PRODUKTKATEGORIE: {context.category_name}
{context.category_description}

KRITISCH: Schreibe eine Beschreibung, die NUR auf DIESES Produkt passt,
keine generischen Texte, die auf jedes Produkt der Kategorie passen.

DEINE AUFGABE:
Schreibe eine professionelle, produktspezifische Beschreibung in 4-5 Sätzen.

INHALT:
1. Was ist das Produkt KONKRET? Nenne Modell/Format (z.B. "Der RCR123A...")
2. Welche SPEZIFISCHEN Vorteile hat es? (echte Werte: 950 mAh, PCB, etc.)
3. WOFÜR wird es verwendet? (konkrete Anwendungen)
4. Für wen ist ES geeignet?

STIL:
- Nutze konkrete Produktdaten (Modell, Kapazität, Format)
- Erkläre echte Vorteile (nicht "hochwertig", "zuverlässig")
- Der Produktname wird separat behandelt, nicht wiederholen

OUTPUT-FORMAT (JSON):
{{
  "narrative": "Die produktspezifische Beschreibung in 4-5 Sätzen.",
  "productHighlights": ["optional, kurze Highlights"]
}}
""".strip()


def narrative_user(context: PromptContext) -> str:
    return (
        f"Produktdaten:\n{_product_json(context)}\n\n"
        "Schreibe jetzt eine PRODUKTSPEZIFISCHE Beschreibung als JSON.\n"
        "- Nutze konkrete Werte (Modell, Kapazität, Format)\n"
        "- Erkläre, WOFÜR dieses spezielle Produkt verwendet wird\n"
        "- Vermeide generische Phrasen ohne Kontext"
    )


def usp_system(context: PromptContext) -> str:
    templates = _numbered(context.usp_templates, "Keine Vorlagen verfügbar")
    return f"""
Du bist Experte für verkaufsfördernde USPs (Unique Selling Propositions).

PRODUKTKATEGORIE: {context.category_name}
{context.category_description}

VERFÜGBARE USP-VORSCHLÄGE:
{templates}

DEINE AUFGABE:
Erstelle GENAU 5 verkaufsfördernde USP-Bulletpoints für dieses Produkt.

REGELN:
✅ Beschreiben VORTEILE für den Kunden, keine technischen Daten
✅ Folgen dem Format: "Vorteil - Erklärung/Nutzen"
✅ Kurz und prägnant (max. 10 Wörter)

VERBOTEN:
❌ Nackte technische Daten ("3,6 V Spannung", "Gewicht: 184 g")
❌ Abmessungen ("70×37.5×37.5 mm")

OUTPUT-FORMAT (JSON):
{{
  "usps": ["USP 1", "USP 2", "USP 3", "USP 4", "USP 5"]
}}
""".strip()


def usp_user(context: PromptContext) -> str:
    return f"Produktdaten:\n{_product_json(context)}\n\nErstelle jetzt 5 verkaufsfördernde USPs als JSON."


def tech_system(context: PromptContext) -> str:
    fields = "\n".join(f"- {f}" for f in context.available_fields) or "Keine Felder definiert"
    return f"""
Du extrahierst technische Produktdaten.

PRODUKTKATEGORIE: {context.category_name}

WICHTIGE TECHNISCHE FELDER:
{fields}

REGELN:
1. Verwende NUR Daten aus dem Input
2. Verwende die Feld-Labels von oben als Schlüssel
3. Wenn ein Wert fehlt, lass das Feld komplett weg
4. Keine Annahmen oder Schätzungen
5. Einheiten korrekt übernehmen (V, mAh, mm, g, etc.)

OUTPUT-FORMAT (JSON):
{{
  "technicalSpecs": {{
    "Feldname1": "Wert1",
    "Feldname2": "Wert2"
  }}
}}
""".strip()


def tech_user(context: PromptContext) -> str:
    return f"Produktdaten:\n{_product_json(context)}\n\nExtrahiere die technischen Daten als JSON."


def safety_system(context: PromptContext) -> str:
    supplier_text = context.product_data.get("safetyWarnings")
    if supplier_text:
        source = (
            "Nutze die folgenden Original-Sicherheitshinweise vom Lieferanten als Basis "
            "und fasse sie in 3 kurze, prägnante Sätze zusammen:\n\n"
            f"LIEFERANTEN-SICHERHEITSHINWEISE:\n{supplier_text}"
        )
    else:
        source = "Es liegen keine Lieferanten-Hinweise vor. Erstelle 3 relevante Hinweise für die Produktkategorie."

    return f"""
Du erstellst Sicherheitshinweise für Produkte.

PRODUKTKATEGORIE: {context.category_name}

{source}

REGELN:
1. GENAU 3 kurze Sätze, jeder endet mit einem Punkt
2. Max. 10 Wörter pro Satz
3. OHNE Warn-Icon am Anfang

OUTPUT-FORMAT (JSON):
{{
  "safetyNotice": "Satz 1. Satz 2. Satz 3."
}}
""".strip()


def safety_user(context: PromptContext) -> str:
    return f"Produktdaten:\n{_product_json(context)}\n\nErstelle GENAU 3 kurze Sicherheitshinweise als JSON."


def package_system(context: PromptContext) -> str:
    return f"""
Du beschreibst den Lieferumfang von Produkten.

PRODUKTKATEGORIE: {context.category_name}

REGELN:
1. Verwende NUR Informationen aus den Produktdaten
2. Wenn der Lieferumfang explizit genannt ist, übernimm ihn 1:1
3. Wenn nicht angegeben, beschreibe nur das Hauptprodukt
4. Keine Annahmen über Zubehör

BEISPIELE:
- "1x Akku wie beschrieben"
- "Ladegerät mit Netzkabel und Bedienungsanleitung"

OUTPUT-FORMAT (JSON):
{{
  "packageContents": "Beschreibung des Lieferumfangs"
}}
""".strip()


def package_user(context: PromptContext) -> str:
    return f"Produktdaten:\n{_product_json(context)}\n\nBeschreibe den Lieferumfang als JSON."


SUBPROMPTS: Dict[str, SubpromptSpec] = {
    NARRATIVE: SubpromptSpec(NARRATIVE, narrative_system, narrative_user,
                             temperature=0.5, max_tokens=400, result_key="narrative"),
    USP_GENERATION: SubpromptSpec(USP_GENERATION, usp_system, usp_user,
                                  temperature=0.4, max_tokens=500, result_key="usps"),
    TECH_EXTRACTION: SubpromptSpec(TECH_EXTRACTION, tech_system, tech_user,
                                   temperature=0.1, max_tokens=400, result_key="technicalSpecs"),
    SAFETY_WARNINGS: SubpromptSpec(SAFETY_WARNINGS, safety_system, safety_user,
                                   temperature=0.2, max_tokens=300, result_key="safetyNotice"),
    PACKAGE_CONTENTS: SubpromptSpec(PACKAGE_CONTENTS, package_system, package_user,
                                    temperature=0.2, max_tokens=200, result_key="packageContents"),
}
