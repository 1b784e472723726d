"""
Tests for the two marketplace title variants.
"""

import pytest

from fields.marketplace_title import detect_product_type, title_v1, title_v2, truncate_at_word


class TestTruncateAtWord:
    def test_short_text_is_unchanged(self):
        assert truncate_at_word("Akku  18650 ", 80) == "Akku 18650"

    def test_cut_on_boundary(self):
        assert truncate_at_word("eins zwei drei", 9) == "eins zwei"

    def test_cut_before_partial_word(self):
        assert truncate_at_word("eins zwei drei", 7) == "eins"

    def test_single_long_word(self):
        assert truncate_at_word("Hochleistungsakku", 5) == ""

    @pytest.mark.parametrize("limit", [1, 5, 10, 17, 23, 40, 80, 100])
    def test_never_exceeds_limit_or_splits_words(self, limit):
        text = "Notebook Netzteil K42JQ K52F X53SV ADP-65JH-BB Ersatz für Asus Geräte"
        result = truncate_at_word(text, limit)

        assert len(result) <= limit
        assert text.startswith(result)
        if result and result != text:
            assert text[len(result)] == " "


class TestProductType:
    def test_pair_rules_win_over_single(self):
        assert detect_product_type("laptop netzteil 19v") == "Notebook Netzteil"

    def test_single_rule(self):
        assert detect_product_type("XTAR Li-Ion Akku") == "Akku"

    def test_no_rule(self):
        assert detect_product_type("Powerpack Mobile") is None


class TestTitleV1:
    def test_type_plus_codes(self):
        assert title_v1("ASUS Notebook Netzteil K42JQ", ["K42JQ"]) == "Notebook Netzteil K42JQ"

    def test_description_contributes_type(self):
        title = title_v1("ASUS K42JQ", ["K42JQ"], description="Laptop Netzteil 19V 65W")
        assert title == "Notebook Netzteil K42JQ"

    def test_battery_title(self):
        assert title_v1("XTAR 21700-HP 25A 5000mAh Li-Ion Akku", ["21700-HP"]) == "Akku 21700-HP"

    def test_brand_free_without_codes(self):
        title = title_v1("HP Laptop Netzteil 19V", [])
        assert title == "Notebook Netzteil"
        assert "HP" not in title.split()

    def test_fallback_words(self):
        assert title_v1("Varta Powerpack Mobile Energy", []) == "Powerpack Mobile"

    def test_at_most_three_codes(self):
        assert title_v1("Akku", ["A100", "B200", "C300", "D400"]) == "Akku A100 B200 C300"

    def test_length_limit(self):
        codes = ["ABCDEFGHIJ-0123456789"] * 3
        assert len(title_v1("Akku", codes, limit=30)) <= 30

    def test_over_long_code_leaves_product_type(self):
        assert title_v1("Akku", ["K" * 40], limit=30) == "Akku"

    def test_over_long_leading_word_keeps_codes(self):
        assert title_v1("Q" * 120, ["K42JQ"]) == "K42JQ"


class TestTitleV2:
    def test_codes_only(self):
        assert title_v2("Samsung Akku P210 P290", ["P210", "P290"]) == "P210 P290"

    def test_no_codes_uses_specific_words(self):
        assert title_v2("Varta Powerpack Mobile Energy Akku", []) == "Powerpack Mobile Energy"

    def test_limit(self):
        assert title_v2("x", ["ABCDE-1234", "FGHIJ-5678"], limit=10) == "ABCDE-1234"

    def test_empty_title(self):
        assert title_v2("", []) == ""

    def test_over_long_code_is_skipped(self):
        assert title_v2("Akku", ["A" * 90, "P210"]) == "P210"
