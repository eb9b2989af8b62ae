"""Tests for per-filter badge counts."""

from filter_counts import (
    AggregateCounter, compute_filter_counts, character_counts,
    ELEMENT_COUNTS, EFFECT_COUNTS, MATERIA_COUNTS,
)
from weapon_database import WeaponStore


WEAPONS = [
    {'name': 'Flame Saber', 'charName': 'Cloud', 'element': 'Fire', 'gachaType': 'L',
     'effect1': '[Status Apply] Burn', 'effect2': '[Buff] Haste', 'support1': 'Circle'},
    {'name': 'Frost Rod', 'charName': ' Aerith ', 'element': 'Ice', 'gachaType': 'Y',
     'effect1': '[Debuff] MATK', 'support2': 'X Sigil', 'sigil': 'Diamond'},
    {'name': 'Cure Staff', 'charName': 'Aerith', 'element': 'Heal', 'potOb10': '10',
     'effect3': '[Buff] Provoke', 'support3': 'Triangle'},
    {'name': 'Dual Blade', 'charName': 'Cloud', 'element': 'Fire/Ice', 'gachaType': 'L',
     'effect2': '[Dispel Buffs]'},
    {'name': '', 'charName': '', 'element': 'None', 'effect1': '[Status Cleanse] Poison'},
]


def test_counts(make_store):
    counts = compute_filter_counts(make_store(WEAPONS))

    assert counts['fire'] == 1
    assert counts['ice'] == 1
    assert counts['none'] == 1
    assert counts['heal'] == 1
    assert counts['water'] == 0

    assert counts['matk_down'] == 1
    assert counts['provoke'] == 1
    assert counts['patk_up'] == 0

    assert counts['circle'] == 1
    assert counts['triangle'] == 1
    assert counts['x_sigil'] == 1

    assert counts['limited'] == 2
    assert counts['diamond'] == 1
    assert counts['all'] == 5


def test_every_category_present(make_store):
    counts = compute_filter_counts(make_store(WEAPONS))
    expected = (set(ELEMENT_COUNTS) | set(EFFECT_COUNTS) | set(MATERIA_COUNTS)
                | {'limited', 'diamond', 'unique', 'all'})
    assert set(counts) == expected


def test_unique_effects_counted_once_per_name(make_store):
    counter = AggregateCounter(make_store(WEAPONS))
    # Flame Saber matches two markers; the nameless weapon is skipped
    assert counter.count_unique_effects() == 2


def test_duplicate_names_counted_once(make_store):
    store = make_store([
        {'name': 'Twin', 'effect1': '[Status Apply] Stop'},
        {'name': 'Twin', 'effect2': 'Increases Command Gauge'},
    ])
    assert AggregateCounter(store).count_unique_effects() == 1


def test_counts_do_not_change_store(make_store):
    store = make_store(WEAPONS)
    before = [dict(weapon) for weapon in store.all()]

    compute_filter_counts(store)

    assert [dict(weapon) for weapon in store.all()] == before


def test_empty_store():
    counts = compute_filter_counts(WeaponStore())
    assert all(value == 0 for value in counts.values())


def test_character_counts(make_store):
    assert character_counts(make_store(WEAPONS)) == {'Aerith': 2, 'Cloud': 2}
