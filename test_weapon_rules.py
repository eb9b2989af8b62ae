"""Tests for weapon rules and numeric helpers."""

import pytest

from weapon_rules import (
    element_aliases, should_show_condition, condition_text, gacha_classification,
    parse_int, parse_number, percent_per_atb, regen_max_potency, sort_by_potency,
    HEAL_MIN_POTENCY_THRESHOLD,
)


class TestElementAliases:

    def test_default_labels(self):
        aliases = element_aliases("Fire")
        assert aliases.resist_label == "[Resist] Fire"
        assert aliases.enchant_label == "[Enchant] Fire"
        assert aliases.materia_label == "Fire"

    def test_lightning_override(self):
        aliases = element_aliases("Lightning")
        assert aliases.resist_label == "[Resist] Thunder"
        assert aliases.enchant_label == "[Enchant] Thunder"
        assert aliases.materia_label == "Light"


class TestConditions:

    def test_allow_listed_weapon_with_equal_potency(self):
        assert should_show_condition("Bahamut Greatsword", 100, 100) is True

    def test_ordinary_weapon_with_equal_potency(self):
        assert should_show_condition("Ordinary Sword", 100, 100) is False

    def test_potency_increase(self):
        assert should_show_condition("Ordinary Sword", 100, 150) is True

    def test_missing_potency(self):
        assert should_show_condition("Ordinary Sword", None, 150) is False
        assert should_show_condition("Umbral Blade", None, None) is True

    def test_condition_from_dmg_slot(self):
        record = {'effect1': 'DMG +50%', 'condition1': 'HP > 50%', 'condition2': 'Other'}
        assert condition_text(record) == 'HP > 50%'

    def test_condition_falls_back_to_slot_two(self):
        record = {'effect1': '[Buff] PATK', 'condition1': 'A', 'condition2': 'B'}
        assert condition_text(record) == 'B'


@pytest.mark.parametrize("code,label", [
    ("L", "Limited"),
    ("Y", "Event"),
    ("N", "Featured"),
    ("", "Featured"),
    ("l", "Featured"),
])
def test_gacha_classification(code, label):
    assert gacha_classification(code) == label


class TestNumbers:

    def test_regen_formula(self):
        assert regen_max_potency(18, 13) == 103
        assert regen_max_potency(0, 50) == 50
        assert regen_max_potency(20, 10) == 6 * 15 + 10

    def test_regen_without_duration_or_potency(self):
        assert regen_max_potency(None, 40) == 40
        assert regen_max_potency(18, None) is None

    def test_percent_per_atb_rounds_half_up(self):
        assert percent_per_atb(550, 4) == 138
        assert percent_per_atb(540, "4") == 135
        assert percent_per_atb(100, 3) == 33

    def test_percent_per_atb_zero_atb(self):
        assert percent_per_atb(550, 0) == 550
        assert percent_per_atb(550, "0") == 550
        assert percent_per_atb(550, "") == 550

    def test_percent_per_atb_missing_potency(self):
        assert percent_per_atb(None, 4) is None

    def test_parse_int(self):
        assert parse_int("540") == 540
        assert parse_int(" 25%") == 25
        assert parse_int("-3") == -3
        assert parse_int("12.9") == 12
        assert parse_int("") is None
        assert parse_int("Mid") is None
        assert parse_int(None) is None

    def test_parse_number(self):
        assert parse_number("99.5") == 99.5
        assert parse_number(7) == 7.0
        assert parse_number("abc") is None

    def test_heal_threshold(self):
        assert HEAL_MIN_POTENCY_THRESHOLD == 25


class TestSortByPotency:

    def test_descending(self):
        rows = [["a", "500"], ["b", "1000"], ["c", 750]]
        assert [r[0] for r in sort_by_potency(rows, 1)] == ["b", "c", "a"]

    def test_stable_for_ties(self):
        rows = [["a", 100], ["b", 200], ["c", 100], ["d", 100]]
        assert [r[0] for r in sort_by_potency(rows, 1)] == ["b", "a", "c", "d"]

    def test_non_numeric_sorts_last(self):
        rows = [["a", ""], ["b", "50"], ["c", "High"], ["d", "75"]]
        assert [r[0] for r in sort_by_potency(rows, 1)] == ["d", "b", "a", "c"]
