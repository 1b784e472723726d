"""
Tests for keyword-scored categorization.
"""

from config.categories import DEFAULT_REGISTRY
from domain.category import CategoryConfig, CategoryRegistry
from fields.categorizer import categorize, score_categories


def _category(category_id, keywords):
    return CategoryConfig(
        id=category_id,
        name=category_id.title(),
        description=category_id,
        keywords=keywords,
        technical_fields=(),
        usp_templates=(),
        safety_notice="",
        product_highlights=(),
    )


def test_battery_text():
    category = categorize(["XTAR 21700-HP 25A 5000mAh Li-Ion Akku"])
    assert category.id == "battery"


def test_charger_text():
    category = categorize(["Universal Ladegerät", "Schnelles Laden über USB"])
    assert category.id == "charger"


def test_tool_text():
    category = categorize(["Bosch Bohrmaschine", "Kraftvolles Werkzeug für die Werkstatt"])
    assert category.id == "tool"


def test_no_hits_gives_default():
    registry = CategoryRegistry("t", (_category("a", ("x1",)), _category("b", ("y1",))), default_id="b")
    assert categorize(["nichts passendes"], registry).id == "b"


def test_tie_keeps_first_category():
    registry = CategoryRegistry(
        "t",
        (_category("first", ("alpha",)), _category("second", ("beta",))),
        default_id="second",
    )
    assert categorize(["alpha beta"], registry).id == "first"


def test_strictly_higher_count_wins():
    registry = CategoryRegistry(
        "t",
        (_category("first", ("alpha",)), _category("second", ("beta", "gamma"))),
        default_id="first",
    )
    assert categorize(["alpha beta gamma"], registry).id == "second"


def test_scores_are_case_insensitive_substring_counts():
    scores = dict(score_categories("AKKU mit 3000MAH", DEFAULT_REGISTRY))
    assert scores["battery"] == 2
    assert scores["tool"] == 0


def test_empty_parts_are_skipped():
    assert categorize(["", None, "Akkuschrauber Werkzeug"]).id == "tool"
