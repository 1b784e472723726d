"""
Tests for free-text attribute extraction and value normalization.
"""

import pytest

from domain.canonical import SemanticField as F
from fields.attributes import (
    extract_attributes,
    extract_model_codes,
    extract_package_contents,
    extract_packaging_unit,
    normalize_field_value,
)
from fields.normalization import clean_html, fold_key, is_non_answer, parse_number, strip_qualifiers


class TestNormalizationHelpers:
    def test_clean_html_drops_scripts_and_entities(self):
        text = "<p>Akku&nbsp;<b>18650</b></p><script>alert(1)</script>&amp; mehr"
        assert clean_html(text) == "Akku 18650 & mehr"

    def test_clean_html_keeps_lines(self):
        text = "<p>Kapazität: 3000mAh</p><p>Spannung: 3,7V</p>"
        assert clean_html(text, keep_lines=True) == "Kapazität: 3000mAh\nSpannung: 3,7V"

    def test_fold_key(self):
        assert fold_key("Kapazität (mAh)") == "kapazitatmah"
        assert fold_key("Größe") == "grosse"

    @pytest.mark.parametrize("token,expected", [
        ("3,7", 3.7),
        ("1.234,5", 1234.5),
        ("2.500", 2500.0),
        ("0.045", 0.045),
        ("3.7", 3.7),
        ("ca. 45 g", 45.0),
        ("kein Wert", None),
    ])
    def test_parse_number(self, token, expected):
        assert parse_number(token) == expected

    def test_strip_qualifiers(self):
        assert strip_qualifiers("typ. 3,7 V ±0,1V") == "3,7 V"
        assert strip_qualifiers("max. 20A") == "20A"

    @pytest.mark.parametrize("value", ["", "n/a", "N/A", " nicht angegeben ", "-", None])
    def test_non_answers(self, value):
        assert is_non_answer(value)

    def test_real_value_is_an_answer(self):
        assert not is_non_answer("3,7 V")


class TestExtractAttributes:
    def test_voltage_range_is_kept_literally(self):
        found = extract_attributes("Spannung: 3,6V - 3,7V")
        assert found[F.VOLTAGE] == "3,6V - 3,7V"

    def test_title_with_capacity_current_and_model(self):
        title = "XTAR 21700-HP 25A 5000mAh Li-Ion Akku"
        found = extract_attributes(title)

        assert found[F.CAPACITY] == "5000 mAh"
        assert found[F.CURRENT] == "25A"
        assert found[F.CHEMISTRY] == "Li-Ion"
        assert F.VOLTAGE not in found

        codes = extract_model_codes(title)
        assert "21700-HP" in codes
        assert "25A" not in codes

    def test_decimal_comma_and_unit_conversion(self):
        found = extract_attributes("Akku 3,7V 2,5Ah 0,07 kg")
        assert found[F.VOLTAGE] == "3.7 V"
        assert found[F.CAPACITY] == "2500 mAh"
        assert found[F.WEIGHT] == "70 g"

    def test_qualifiers_do_not_hide_the_nominal_value(self):
        found = extract_attributes("Kapazität typ. 3400 mAh, ca. 48 g")
        assert found[F.CAPACITY] == "3400 mAh"
        assert found[F.WEIGHT] == "48 g"

    def test_dimension_triple(self):
        found = extract_attributes("Maße: 7 x 2,1 x 2,1 cm")
        assert found[F.LENGTH] == "70 mm"
        assert found[F.WIDTH] == "21 mm"
        assert found[F.HEIGHT] == "21 mm"

    def test_dimension_pair_is_diameter_and_length(self):
        found = extract_attributes("Zelle 21 x 70 mm")
        assert found[F.DIAMETER] == "21 mm"
        assert found[F.LENGTH] == "70 mm"
        assert F.HEIGHT not in found

    def test_power_energy_and_ean(self):
        found = extract_attributes("Powerbank 18 W, 74 Wh, EAN 4260123456789")
        assert found[F.POWER] == "18 W"
        assert found[F.ENERGY] == "74 Wh"
        assert found[F.EAN] == "4260123456789"

    def test_current_in_milliamps(self):
        assert extract_attributes("Ladestrom 500mA")[F.CURRENT] == "0.5A"

    def test_nothing_found_means_absent_fields(self):
        assert extract_attributes("Ein schönes Produkt") == {}

    def test_html_input(self):
        found = extract_attributes("<ul><li>Kapazität: <b>3000mAh</b></li></ul>")
        assert found[F.CAPACITY] == "3000 mAh"


class TestModelCodes:
    def test_exclusions(self):
        codes = extract_model_codes("Netzteil 19V 2024 DE K42JQ USB 65W ADP-65JH")
        assert codes == ["K42JQ", "USB", "ADP-65JH"]

    def test_deduplicated_in_order(self):
        assert extract_model_codes("P210 P290 P210") == ["P210", "P290"]

    def test_empty_text(self):
        assert extract_model_codes("") == []


class TestPackaging:
    @pytest.mark.parametrize("text,expected", [
        ("4er Pack Akkus", "4 Stück"),
        ("Set mit 2 Zellen", "2 Stück"),
        ("10 Stück im Karton", "10 Stück"),
        ("3-teilig", "3 Stück"),
        ("Einzelstück", "1 Stück"),
        ("Akku", None),
    ])
    def test_packaging_unit(self, text, expected):
        assert extract_packaging_unit(text) == expected

    def test_package_contents(self):
        text = "Robuster Akku.\nLieferumfang: 1x Akku, 1x Schutzbox. Weitere Infos"
        assert extract_package_contents(text) == "1x Akku, 1x Schutzbox"

    def test_long_package_contents_is_cut(self):
        items = ", ".join(f"1x Teil {i}" for i in range(60))
        contents = extract_package_contents(f"Lieferumfang: {items}")
        assert len(contents) <= 200
        assert not contents.endswith(",")


class TestNormalizeFieldValue:
    def test_unit_from_value(self):
        assert normalize_field_value(F.CAPACITY, "3,0 Ah") == "3000 mAh"

    def test_unit_from_header(self):
        assert normalize_field_value(F.WEIGHT, "0,045", header="Gewicht (kg)") == "45 g"
        assert normalize_field_value(F.CAPACITY, "3000", header="Kapazitaet_mAh") == "3000 mAh"

    def test_bare_number_takes_canonical_unit(self):
        assert normalize_field_value(F.VOLTAGE, "3,7") == "3.7 V"

    def test_voltage_range(self):
        assert normalize_field_value(F.VOLTAGE, "3,6V - 3,7V") == "3,6V - 3,7V"

    def test_non_answer_is_none(self):
        assert normalize_field_value(F.CAPACITY, "k.A.") is None

    def test_text_without_number_is_kept(self):
        assert normalize_field_value(F.CAPACITY, "siehe Datenblatt") == "siehe Datenblatt"

    def test_chemistry_protection_and_ean(self):
        assert normalize_field_value(F.CHEMISTRY, "Lithium-Ionen") == "Li-Ion"
        assert normalize_field_value(F.PROTECTION, "PCB-Schutz, Überladeschutz") == "PCB"
        assert normalize_field_value(F.EAN, "4260 1234 5678 9") == "4260123456789"
