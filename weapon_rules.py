"""
Weapon Rules

Game-specific lookup tables and formulas: element label overrides,
weapons that always show their condition text, the healing threshold,
regen totals and the "% per ATB" efficiency figure.

Pure functions, no I/O.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional, List, Any, Union

from models import WeaponRecord


# =============================================================================
# GAME MECHANICS CONSTANTS
# =============================================================================

HEAL_ELEMENT = 'Heal'
NO_ELEMENT = 'None'
HEAL_MIN_POTENCY_THRESHOLD = 25     # Heals below 25% are not listed
REGEN_TICK_INTERVAL_SEC = 3         # Regen ticks every 3 seconds
REGEN_TICK_PERCENT = 15             # Each regen tick heals 15%
ZERO_ATB_DISPLAY = 'No Limit'       # Shown for weapons with 0 uses

# Lightning is stored as "Thunder" in effect text and "Light" in support slots
ELEMENT_NAME_OVERRIDES = {
    'Lightning': {'resist': 'Thunder', 'enchant': 'Thunder', 'materia': 'Light'},
}

# Weapons whose potency depends on an in-combat condition that a simple
# max > base check misses; they always show their condition text.
WEAPON_SPECIAL_RULES = {
    "Bahamut Greatsword": "Variable potency based on HP threshold",
    "Sabin's Claws": "Multi-hit with conditional bonus",
    "Blade of the Worthy": "Stacking damage buff mechanic",
    "Umbral Blade": "Darkness-dependent potency scaling",
}

GACHA_LABELS = {
    'L': 'Limited',
    'Y': 'Event',
}
DEFAULT_GACHA_LABEL = 'Featured'

Number = Union[int, float]

_INT_PATTERN = re.compile(r'\s*([+-]?\d+)')
_NUMBER_PATTERN = re.compile(r'\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


# =============================================================================
# ELEMENTS / CONDITIONS / GACHA
# =============================================================================

@dataclass(frozen=True)
class ElementAliases:
    """Labels used to find an element's related effects and materia."""
    resist_label: str
    enchant_label: str
    materia_label: str


def element_aliases(element: str) -> ElementAliases:
    """
    Get the resist/enchant/materia labels for an element.

    Defaults to "[Resist] <element>", "[Enchant] <element>" and the element
    name itself; ELEMENT_NAME_OVERRIDES remaps elements whose dataset text
    differs from the element name.
    """
    override = ELEMENT_NAME_OVERRIDES.get(element)
    if override:
        return ElementAliases(
            resist_label="[Resist] " + override['resist'],
            enchant_label="[Enchant] " + override['enchant'],
            materia_label=override['materia'],
        )
    return ElementAliases(
        resist_label="[Resist] " + element,
        enchant_label="[Enchant] " + element,
        materia_label=element,
    )


def should_show_condition(weapon_name: str, base_potency: Optional[Number],
                          max_potency: Optional[Number]) -> bool:
    """True if the weapon's condition column should be filled in."""
    if weapon_name in WEAPON_SPECIAL_RULES:
        return True
    if base_potency is None or max_potency is None:
        return False
    return max_potency > base_potency


def condition_text(record: WeaponRecord) -> str:
    """Condition of the DMG-bearing effect slot (slot 1 if it mentions DMG, else slot 2)."""
    if 'DMG' in (record.get('effect1') or ''):
        return record.get('condition1') or ''
    return record.get('condition2') or ''


def gacha_classification(gacha_type_code: str) -> str:
    """Map a gacha type code to "Limited", "Event" or "Featured"."""
    return GACHA_LABELS.get(gacha_type_code, DEFAULT_GACHA_LABEL)


# =============================================================================
# NUMERIC HELPERS
# =============================================================================

def parse_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a value ("540", " 25%", "-3").

    Returns None when there is no leading integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else int(value)
    if not isinstance(value, str):
        return None
    match = _INT_PATTERN.match(value)
    return int(match.group(1)) if match else None


def parse_number(value: Any) -> Optional[float]:
    """Parse the leading decimal number of a value, None if there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and math.isnan(value) else float(value)
    if not isinstance(value, str):
        return None
    match = _NUMBER_PATTERN.match(value)
    return float(match.group(1)) if match else None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent_per_atb(max_potency: Optional[Number], atb: Any) -> Optional[Number]:
    """
    Max potency per ATB bar, rounded half up.

    A zero (or missing) ATB cost returns the max potency unchanged.
    """
    atb_value = parse_number(atb)
    if not atb_value or max_potency is None:
        return max_potency
    return round_half_up(max_potency / atb_value)


def regen_max_potency(duration_sec: Optional[int], base_potency: Optional[int]) -> Optional[int]:
    """
    Total healing of a regen weapon.

    One tick of REGEN_TICK_PERCENT every REGEN_TICK_INTERVAL_SEC over the
    duration, plus the initial heal.
    """
    if base_potency is None or not duration_sec:
        return base_potency
    ticks = math.floor(duration_sec / REGEN_TICK_INTERVAL_SEC)
    return ticks * REGEN_TICK_PERCENT + base_potency


def sort_by_potency(rows: List[List[Any]], column: int) -> List[List[Any]]:
    """
    Sort data rows descending by a numeric column.

    Stable: equal values keep their order. Values that don't parse as a
    number sort after every numeric value.
    """
    def sort_key(row):
        value = parse_number(row[column]) if column < len(row) else None
        if value is None:
            return (1, 0.0)
        return (0, -value)

    return sorted(rows, key=sort_key)
