"""
Data models for the Weapon Reference

Defines the weapon record layout, the CSV column table, filter
configuration types and the tabular result handed to the renderer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, List, Tuple, Any


# =============================================================================
# WEAPON RECORD LAYOUT
# =============================================================================

# A weapon record is an ordered mapping of field name -> string value.
WeaponRecord = Dict[str, str]

# Column indices for the weapon CSV. Columns 32-45, 48 (id) and 51 are
# not carried into the record.
CSV_COLUMN_MAP = {
    'name': 0,
    'charName': 1,
    'sigil': 2,
    'atb': 3,
    'type': 4,
    'element': 5,
    'range': 6,
    'effect1Target': 7,
    'effect1': 8,
    'effect1Pot': 9,
    'effect1MaxPot': 10,
    'effect2Target': 11,
    'effect2': 12,
    'effect2Pot': 13,
    'effect2MaxPot': 14,
    'effect3Target': 15,
    'effect3': 16,
    'effect3Pot': 17,
    'effect3MaxPot': 18,
    'support1': 19,
    'support2': 20,
    'support3': 21,
    'rAbility1': 22,
    'rAbility2': 23,
    'potOb10': 24,
    'maxPotOb10': 25,
    'effect1Dur': 26,
    'effect2Dur': 27,
    'effect3Dur': 28,
    'condition1': 29,
    'condition2': 30,
    'condition3': 31,
    'effect1Range': 46,
    'uses': 47,
    'gachaType': 49,
    'effect2Range': 50,
}

# Field order of every record (dict insertion order follows this)
WEAPON_FIELDS: Tuple[str, ...] = tuple(CSV_COLUMN_MAP.keys())

MIN_WEAPON_COLUMNS = 52

# Slot field groups used by the "any slot" predicates
EFFECT_FIELDS = ('effect1', 'effect2', 'effect3')
SUPPORT_FIELDS = ('support1', 'support2', 'support3')


# =============================================================================
# FILTER CONFIGURATION
# =============================================================================

class QueryKind(str, Enum):
    """Query shapes understood by the filter engine."""
    ELEMENT = 'element'
    STAT_EFFECT = 'statEffect'
    MATERIA_SLOT = 'materiaSlot'
    SIGIL = 'sigil'
    COMPOSITE = 'composite'
    LIMITED = 'limited'
    ALL = 'all'
    # Special forms, only valid inside a composite
    REGEN = 'regen'
    UNIQUE_EFFECT = 'uniqueEffect'


@dataclass(frozen=True)
class SubQuery:
    """One table of a composite filter."""
    kind: QueryKind
    text: str = ''
    header: str = ''


@dataclass(frozen=True)
class FilterConfig:
    """
    Declarative description of one named filter.

    `text` is the match text (element name, effect marker, materia name...),
    `header` the display header. Composite filters leave both empty and
    list their tables in `tables`, rendered in declared order.
    """
    kind: QueryKind
    text: str = ''
    header: str = ''
    tables: Tuple[SubQuery, ...] = ()


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class ResultTable:
    """
    Output of a single query.

    rows[0] is the column header list, rows[1:] are data rows.
    """
    header: str
    rows: List[List[Any]] = field(default_factory=list)

    @property
    def columns(self) -> List[str]:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> List[List[Any]]:
        return self.rows[1:]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column_index(self, name: str) -> int:
        """Index of a column by header name, -1 if absent."""
        try:
            return self.columns.index(name)
        except ValueError:
            return -1

    def render_args(self) -> Tuple[int, int, List[List[Any]], str]:
        """Arguments for the table renderer: (rows, cols, rows-with-header, header)."""
        return self.row_count, self.column_count, self.rows, self.header

    def to_dict(self) -> Dict[str, Any]:
        return {
            'header': self.header,
            'rows': self.rows,
            'row_count': self.row_count,
            'column_count': self.column_count,
        }


class LoadStatus(str, Enum):
    """Outcome of a store load attempt."""
    LOADED = 'loaded'
    ALREADY_LOADED = 'already_loaded'
    PARSE_ERROR = 'parse_error'
    TRANSPORT_ERROR = 'transport_error'


@dataclass
class LoadResult:
    """Explicit result of loading the weapon store."""
    status: LoadStatus
    weapon_count: int = 0
    skipped_rows: int = 0
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.status in (LoadStatus.LOADED, LoadStatus.ALREADY_LOADED)


# =============================================================================
# ERRORS
# =============================================================================

class TransportError(Exception):
    """The weapon data source could not be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WeaponParseError(Exception):
    """The weapon data could not be parsed as a whole."""
