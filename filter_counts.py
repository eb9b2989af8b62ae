"""
Filter Counts

Per-filter weapon counts for the dropdown badges, computed once after the
store is populated. Uses the same predicates as the filter engine but
only counts; the store is never modified.
"""

from typing import Callable, Dict

from models import WeaponRecord
from weapon_database import WeaponStore
from weapon_rules import gacha_classification


ELEMENT_COUNTS = {
    'fire': 'Fire',
    'ice': 'Ice',
    'lightning': 'Lightning',
    'water': 'Water',
    'wind': 'Wind',
    'earth': 'Earth',
    'none': 'None',
    'heal': 'Heal',
}

EFFECT_COUNTS = {
    'matk_down': '[Debuff] MATK',
    'patk_down': '[Debuff] PATK',
    'pdef_down': '[Debuff] PDEF',
    'mdef_down': '[Debuff] MDEF',
    'patk_up': '[Buff] PATK',
    'matk_up': '[Buff] MATK',
    'pdef_up': '[Buff] PDEF',
    'mdef_up': '[Buff] MDEF',
    'exploit_weakness': '[Buff] Weakness',
    'provoke': '[Buff] Provoke',
}

MATERIA_COUNTS = {
    'circle': 'Circle',
    'triangle': 'Triangle',
    'x_sigil': 'X Sigil',
}

# Effects listed under the "unique effects" filter
UNIQUE_EFFECT_MARKERS = (
    '[Status Apply]',
    '[Status Cleanse]',
    '[Dispel',
    'Haste',
    'Increases Command Gauge',
)


class AggregateCounter:
    """Counts weapons per filter category over a store."""

    def __init__(self, store: WeaponStore):
        self.store = store

    def count_where(self, predicate: Callable[[WeaponRecord], bool]) -> int:
        return sum(1 for weapon in self.store.all() if predicate(weapon))

    def count_unique_effects(self) -> int:
        """
        Number of distinct weapon names having any unique effect.

        A weapon matching several markers is counted once; weapons
        without a name are not counted.
        """
        names = set()
        for weapon in self.store.all():
            name = weapon.get('name')
            if not name:
                continue
            if any(self.store.has_effect(weapon, marker) for marker in UNIQUE_EFFECT_MARKERS):
                names.add(name)
        return len(names)

    def compute_all(self) -> Dict[str, int]:
        """Counts for every badge category."""
        store = self.store
        counts: Dict[str, int] = {}

        for key, element in ELEMENT_COUNTS.items():
            counts[key] = self.count_where(
                lambda weapon, element=element: store.field_equals(weapon, 'element', element))

        for key, effect in EFFECT_COUNTS.items():
            counts[key] = self.count_where(
                lambda weapon, effect=effect: store.has_effect(weapon, effect))

        for key, materia in MATERIA_COUNTS.items():
            counts[key] = self.count_where(
                lambda weapon, materia=materia: store.has_materia(weapon, materia))

        counts['limited'] = self.count_where(
            lambda weapon: gacha_classification(weapon.get('gachaType', '')) == 'Limited')
        counts['diamond'] = self.count_where(
            lambda weapon: store.has_substring(weapon, 'sigil', 'Diamond'))
        counts['unique'] = self.count_unique_effects()
        counts['all'] = len(store)

        return counts


def compute_filter_counts(store: WeaponStore) -> Dict[str, int]:
    """Convenience function to compute all badge counts for a store."""
    return AggregateCounter(store).compute_all()


def character_counts(store: WeaponStore) -> Dict[str, int]:
    """Weapon count per character name (trimmed), sorted by name."""
    counts: Dict[str, int] = {}
    for weapon in store.all():
        name = (weapon.get('charName') or '').strip()
        if name:
            counts[name] = counts.get(name, 0) + 1
    return dict(sorted(counts.items()))
