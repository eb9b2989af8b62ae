"""
Shared pytest fixtures: 52-column weapon rows, CSV text and loaded stores.
"""

from typing import Dict, List

import pytest

from models import CSV_COLUMN_MAP, MIN_WEAPON_COLUMNS
from weapon_database import WeaponStore


CSV_HEADER = ",".join(f"col{i}" for i in range(MIN_WEAPON_COLUMNS))


def build_row(**fields: str) -> List[str]:
    """A full-width CSV row with the given named fields filled in."""
    row = [''] * MIN_WEAPON_COLUMNS
    for field_name, value in fields.items():
        row[CSV_COLUMN_MAP[field_name]] = value
    return row


def csv_line(cells: List[str]) -> str:
    """Join cells into a CSV line, quoting where needed."""
    out = []
    for cell in cells:
        if any(c in cell for c in ',"\r\n'):
            cell = '"' + cell.replace('"', '""') + '"'
        out.append(cell)
    return ",".join(out)


def build_csv(weapons: List[Dict[str, str]]) -> str:
    """CSV text (header + one line per weapon, trailing newline)."""
    lines = [CSV_HEADER] + [csv_line(build_row(**weapon)) for weapon in weapons]
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_row():
    return build_row


@pytest.fixture
def make_csv():
    return build_csv


@pytest.fixture
def make_store():
    """Factory returning a WeaponStore loaded with the given weapons."""
    def _make(weapons: List[Dict[str, str]]) -> WeaponStore:
        store = WeaponStore()
        result = store.load(build_csv(weapons))
        assert result.ok, result.message
        return store
    return _make


@pytest.fixture
def fire_weapon() -> Dict[str, str]:
    return {
        'name': 'Test Fire Sword', 'charName': 'Cloud', 'atb': '4', 'type': 'Phys.',
        'element': 'Fire', 'range': 'Single', 'effect1Target': 'Enemy',
        'effect1': '[Debuff] PDEF -', 'effect1Pot': '50', 'effect1MaxPot': '75',
        'support1': 'DMG +10%', 'support3': 'Fire', 'potOb10': '540', 'maxPotOb10': '540',
        'effect1Dur': '25', 'effect1Range': 'Single', 'uses': '0', 'gachaType': 'N',
    }


@pytest.fixture
def heal_weapon() -> Dict[str, str]:
    return {
        'name': 'Weak Healing Rod', 'charName': 'Aerith', 'atb': '3', 'type': 'Mag.',
        'element': 'Heal', 'range': 'All', 'effect1Target': 'All Allies',
        'effect1': 'HP Gain', 'potOb10': '15', 'maxPotOb10': '15', 'uses': '2',
        'gachaType': 'N',
    }
