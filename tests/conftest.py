# conftest.py
# Ensure the repository root is on sys.path so the top-level packages
# (config, domain, fields, ...) import the same way they do when installed.

import asyncio
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from config.categories import BATTERY, CHARGER, DEFAULT_REGISTRY, TOOL  # noqa: E402
from domain.canonical import NormalizedRecord, SemanticField, SpecSource, SpecValue  # noqa: E402
from domain.errors import GenerationFailed  # noqa: E402
from generation.prompts import SUBPROMPTS  # noqa: E402

HANG = "__hang__"

# Subprompts are told apart by their (temperature, max_tokens) pair.
SUBPROMPT_BY_SETTINGS = {(s.temperature, s.max_tokens): name for name, s in SUBPROMPTS.items()}


class FakeGenerator:
    """
    Canned text generator.

    responses: subprompt name -> outcome, where an outcome is a dict/list
    (returned as JSON), a str (returned as is), HANG (never returns), an
    exception (raised) or a tuple of outcomes consumed one per call.
    """

    def __init__(self, responses, delay: float = 0.0):
        self.responses = dict(responses)
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._positions = {}

    def _next(self, name):
        outcome = self.responses.get(name)
        if isinstance(outcome, tuple):
            position = self._positions.get(name, 0)
            self._positions[name] = position + 1
            outcome = outcome[min(position, len(outcome) - 1)]
        return outcome

    async def __call__(self, system, user, temperature, max_tokens, structured):
        name = SUBPROMPT_BY_SETTINGS[(temperature, max_tokens)]
        self.calls.append((name, system, user))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            outcome = self._next(name)
            if outcome == HANG:
                await asyncio.Event().wait()
            if isinstance(outcome, BaseException):
                raise outcome
            if callable(outcome):
                outcome = outcome(system, user)
            if outcome is None:
                raise GenerationFailed(f"No canned response for {name}")
            if isinstance(outcome, (dict, list)):
                return json.dumps(outcome, ensure_ascii=False)
            return outcome
        finally:
            self.in_flight -= 1

    def names(self):
        return [name for name, _, _ in self.calls]


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


GOOD_RESPONSES = {
    "narrative": {
        "narrative": "Der XTAR 21700-HP liefert 5000 mAh für Taschenlampen. "
                     "Mit 25A Entladestrom eignet er sich für Hochleistungslampen.",
    },
    "usp-generation": {
        "usps": [
            "Hohe Kapazität - lange Laufzeit pro Ladung",
            "Hoher Entladestrom - ideal für Hochleistungslampen",
            "Wiederaufladbar - spart langfristig Kosten",
            "Geprüfte Zellen - gleichbleibende Qualität",
            "Flache Bauform - passt in viele Geräte",
        ],
    },
    "tech-extraction": {"technicalSpecs": {"Kapazität": "4800 mAh", "Technologie": "Li-Ion"}},
    "safety-warnings": {"safetyNotice": "Nicht kurzschließen. Nicht erhitzen. Von Kindern fernhalten."},
    "package-contents": {"packageContents": "1x Akku 21700-HP"},
}


@pytest.fixture
def registry():
    return DEFAULT_REGISTRY


@pytest.fixture
def battery():
    return BATTERY


@pytest.fixture
def charger():
    return CHARGER


@pytest.fixture
def tool():
    return TOOL


@pytest.fixture
def fake_generator():
    return FakeGenerator


@pytest.fixture
def good_responses():
    return dict(GOOD_RESPONSES)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def hang():
    return HANG


@pytest.fixture
def battery_record():
    return NormalizedRecord(
        sku="XT-21700HP",
        title="XTAR 21700-HP 25A 5000mAh Li-Ion Akku",
        description="Kapazität: 5000mAh\nEntladestrom: 25A",
        brand="XTAR",
        technical_specs={
            SemanticField.CAPACITY: SpecValue("5000 mAh", SpecSource.STRUCTURED),
            SemanticField.CURRENT: SpecValue("25A", SpecSource.TEXT),
            SemanticField.CHEMISTRY: SpecValue("Li-Ion", SpecSource.TEXT),
        },
        category="battery",
        model_codes=["21700-HP"],
    )
