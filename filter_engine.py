"""
Filter Engine

Interprets FilterConfig entries against a WeaponStore and builds the
result tables (header row + data rows) handed to the table renderer.
"""

from typing import Dict, List, Optional, Any, Callable

from models import (
    FilterConfig, QueryKind, ResultTable, WeaponRecord, EFFECT_FIELDS, SUPPORT_FIELDS,
)
from weapon_database import WeaponStore
from weapon_rules import (
    HEAL_ELEMENT, NO_ELEMENT, HEAL_MIN_POTENCY_THRESHOLD,
    element_aliases, should_show_condition, condition_text, gacha_classification,
    parse_int, percent_per_atb, regen_max_potency, sort_by_potency,
)
from filter_registry import FILTER_CONFIGS


# =============================================================================
# TABLE LAYOUTS
# =============================================================================

ELEM_COLUMNS = ["Weapon Name", "Char", "AOE", "Type", "ATB", "Uses",
                "Pot%", "Max%", "% per ATB", "Condition"]
HEAL_COLUMNS = ["Weapon Name", "Char", "AOE", "Type", "ATB", "Uses", "Target",
                "Pot%", "Max%", "% per ATB"]
LIMITED_COLUMNS = ["Weapon Name", "Char", "AOE", "Type", "ATB", "Element",
                   "Pot%", "Max%", "% per ATB", "Condition"]
ALL_COLUMNS = ["Weapon Name", "Char", "AOE", "Type", "ATB", "Element",
               "Pot%", "Max%", "% per ATB", "Gacha Type", "Condition"]
MATERIA_COLUMNS = ["Weapon Name", "Char", "AOE", "Type", "Elem", "ATB", "Uses",
                   "Pot%", "Max%"]
REGEN_COLUMNS = ["Name", "Char", "Type", "ATB", "Uses", "AOE", "Target",
                 "Duration (s)", "Pot%", "Max%", "% per ATB"]
EFFECT_COLUMNS = ["Name", "Char", "Type", "Elem", "ATB", "Uses", "AOE", "Target",
                  "Pot", "Max Pot", "Duration (s)", "Condition"]
UNIQUE_COLUMNS = ["Name", "Char", "AOE", "Type", "Elem", "ATB", "Uses",
                  "Target1", "Effect1", "Condition1", "Target2", "Effect2", "Condition2"]

MAX_POT_COLUMN = "Max%"

# Regen and unique-effect markers only appear in the first two effect slots
PRIMARY_EFFECT_FIELDS = EFFECT_FIELDS[:2]


def _cell(value: Any) -> Any:
    return '' if value is None else value


def strip_marker(effect_text: str, marker: str) -> str:
    """Drop everything up to and including the marker and the separator after it."""
    index = effect_text.find(marker)
    if index < 0:
        return effect_text
    return effect_text[index + len(marker) + 1:]


class FilterEngine:
    """
    Runs registered filters over a weapon store.

    Args:
        store: Populated weapon store
        registry: Filter id -> FilterConfig (defaults to FILTER_CONFIGS)
    """

    def __init__(self, store: WeaponStore, registry: Optional[Dict[str, FilterConfig]] = None):
        self.store = store
        self.registry = registry if registry is not None else FILTER_CONFIGS
        self._queries: Dict[QueryKind, Callable[[str, str], Optional[ResultTable]]] = {
            QueryKind.ELEMENT: self.element_table,
            QueryKind.STAT_EFFECT: self.effect_table,
            QueryKind.MATERIA_SLOT: self.materia_table,
            QueryKind.SIGIL: self.sigil_table,
            QueryKind.LIMITED: self.limited_table,
            QueryKind.ALL: self.all_table,
            QueryKind.REGEN: self.regen_table,
            QueryKind.UNIQUE_EFFECT: self.unique_effect_table,
        }

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def run(self, filter_id: str) -> List[ResultTable]:
        """
        Run a filter by id.

        Returns one table per rendered section; unknown ids log an error
        and return an empty list.
        """
        config = self.registry.get(filter_id)
        if config is None:
            print(f"Error: Unknown filter: {filter_id}")
            return []
        return self.run_config(config)

    def run_config(self, config: FilterConfig) -> List[ResultTable]:
        kind = self._kind(config.kind)
        if kind is None:
            return []

        if kind == QueryKind.COMPOSITE:
            tables = []
            for sub_query in config.tables:
                tables.extend(self.run_query(sub_query.kind, sub_query.text, sub_query.header))
            return tables

        if kind == QueryKind.ELEMENT:
            return self.element_overview(config.text)

        if kind in (QueryKind.REGEN, QueryKind.UNIQUE_EFFECT):
            print(f"Error: Query kind {kind.value} is only valid inside a composite filter")
            return []

        return self.run_query(kind, config.text, config.header)

    def run_query(self, kind: Any, text: str, header: str) -> List[ResultTable]:
        """Run a single (non-composite) query and return its table as a list."""
        kind = self._kind(kind)
        query = self._queries.get(kind) if kind is not None else None
        if query is None:
            if kind is not None:
                print(f"Error: Unknown filter type: {kind.value}")
            return []
        table = query(text, header)
        return [table] if table is not None else []

    @staticmethod
    def _kind(kind: Any) -> Optional[QueryKind]:
        try:
            return QueryKind(kind)
        except ValueError:
            print(f"Error: Unknown filter type: {kind}")
            return None

    # -------------------------------------------------------------------------
    # Shared row pieces
    # -------------------------------------------------------------------------

    def _get(self, weapon: WeaponRecord, field_name: str) -> str:
        return self.store.get_field(weapon, field_name)

    def _potencies(self, weapon: WeaponRecord):
        """(base potency, max potency, % per ATB) for the weapon's C-ability."""
        pot = parse_int(self._get(weapon, 'potOb10'))
        max_pot = parse_int(self._get(weapon, 'maxPotOb10'))
        return pot, max_pot, percent_per_atb(max_pot, self._get(weapon, 'atb'))

    def _condition(self, weapon: WeaponRecord, pot: Optional[int], max_pot: Optional[int]) -> str:
        if should_show_condition(self._get(weapon, 'name'), pot, max_pot):
            return condition_text(weapon)
        return ''

    @staticmethod
    def _table(header: str, columns: List[str], rows: List[List[Any]],
               sort: bool = False) -> ResultTable:
        if sort:
            rows = sort_by_potency(rows, columns.index(MAX_POT_COLUMN))
        return ResultTable(header=header, rows=[list(columns)] + rows)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def element_overview(self, element: str) -> List[ResultTable]:
        """
        Element filter: the element's own C-abilities, then (except for
        non-elemental) resist-down effects, damage-up effects and materia
        slots for that element.
        """
        tables = [self.element_table(element, "Weapon with C-Abilities - " + element)]
        if element != NO_ELEMENT:
            aliases = element_aliases(element)
            tables.append(self.effect_table(
                aliases.resist_label, f"Weapon with [Debuff] {element} Resist Down:"))
            tables.append(self.effect_table(
                aliases.enchant_label, f"Weapon with [Buff] {element} Damage Up:"))
            tables.append(self.materia_table(
                aliases.materia_label, f"Weapon with {element} Materia Slot:"))
        return tables

    def element_table(self, element: str, header: str) -> ResultTable:
        """Weapons whose element is exactly `element`, by max potency."""
        is_heal = element == HEAL_ELEMENT
        rows = []
        for weapon in self.store.all():
            if not self.store.field_equals(weapon, 'element', element):
                continue

            pot, max_pot, per_atb = self._potencies(weapon)
            # Low % heals are not worth listing
            if is_heal and pot is not None and pot < HEAL_MIN_POTENCY_THRESHOLD:
                continue

            row = [
                self._get(weapon, 'name'),
                self._get(weapon, 'charName'),
                self._get(weapon, 'range'),
                self._get(weapon, 'type'),
                self._get(weapon, 'atb'),
                self._get(weapon, 'uses'),
            ]
            if is_heal:
                row.append(self._get(weapon, 'effect1Target'))
            row += [_cell(pot), _cell(max_pot), _cell(per_atb)]
            if not is_heal:
                row.append(self._condition(weapon, pot, max_pot))
            rows.append(row)

        return self._table(header, HEAL_COLUMNS if is_heal else ELEM_COLUMNS, rows, sort=True)

    def effect_table(self, text: str, header: str) -> ResultTable:
        """Weapons with `text` in any effect slot; columns come from the first matching slot."""
        rows = []
        for weapon in self.store.all():
            slot = self.store.find_slot(weapon, EFFECT_FIELDS, text)
            if slot is None:
                continue

            # There is no effect3Range column; slot 3 shares effect2Range
            range_field = 'effect1Range' if slot == 1 else 'effect2Range'
            rows.append([
                self._get(weapon, 'name'),
                self._get(weapon, 'charName'),
                self._get(weapon, 'type'),
                self._get(weapon, 'element'),
                self._get(weapon, 'atb'),
                self._get(weapon, 'uses'),
                self._get(weapon, range_field),
                self._get(weapon, f'effect{slot}Target'),
                self._get(weapon, f'effect{slot}Pot'),
                self._get(weapon, f'effect{slot}MaxPot'),
                self._get(weapon, f'effect{slot}Dur'),
                self._get(weapon, f'condition{slot}'),
            ])

        return self._table(header, EFFECT_COLUMNS, rows)

    def _support_row(self, weapon: WeaponRecord) -> List[Any]:
        return [
            self._get(weapon, 'name'),
            self._get(weapon, 'charName'),
            self._get(weapon, 'range'),
            self._get(weapon, 'type'),
            self._get(weapon, 'element'),
            self._get(weapon, 'atb'),
            self._get(weapon, 'uses'),
            self._get(weapon, 'potOb10'),
            self._get(weapon, 'maxPotOb10'),
        ]

    def materia_table(self, text: str, header: str) -> ResultTable:
        """Weapons with `text` in any support (materia) slot."""
        rows = [self._support_row(weapon) for weapon in self.store.all()
                if self.store.find_slot(weapon, SUPPORT_FIELDS, text) is not None]
        return self._table(header, MATERIA_COLUMNS, rows)

    def sigil_table(self, text: str, header: str) -> ResultTable:
        """Weapons whose sigil contains `text`."""
        rows = [self._support_row(weapon) for weapon in self.store.all()
                if self.store.has_substring(weapon, 'sigil', text)]
        return self._table(header, MATERIA_COLUMNS, rows)

    def limited_table(self, text: str, header: str) -> ResultTable:
        """Limited gacha weapons, by max potency."""
        rows = []
        for weapon in self.store.all():
            if gacha_classification(self._get(weapon, 'gachaType')) != 'Limited':
                continue
            pot, max_pot, per_atb = self._potencies(weapon)
            rows.append([
                self._get(weapon, 'name'),
                self._get(weapon, 'charName'),
                self._get(weapon, 'range'),
                self._get(weapon, 'type'),
                self._get(weapon, 'atb'),
                self._get(weapon, 'element'),
                _cell(pot),
                _cell(max_pot),
                _cell(per_atb),
                self._condition(weapon, pot, max_pot),
            ])
        return self._table(header, LIMITED_COLUMNS, rows, sort=True)

    def all_table(self, text: str, header: str) -> ResultTable:
        """Every weapon in dataset order, with its gacha classification."""
        rows = []
        for weapon in self.store.all():
            pot, max_pot, per_atb = self._potencies(weapon)
            rows.append([
                self._get(weapon, 'name'),
                self._get(weapon, 'charName'),
                self._get(weapon, 'range'),
                self._get(weapon, 'type'),
                self._get(weapon, 'atb'),
                self._get(weapon, 'element'),
                _cell(pot),
                _cell(max_pot),
                _cell(per_atb),
                gacha_classification(self._get(weapon, 'gachaType')),
                self._condition(weapon, pot, max_pot),
            ])
        return self._table(header, ALL_COLUMNS, rows)

    def regen_table(self, text: str, header: str) -> ResultTable:
        """
        Heal weapons with a regen effect in slot 1 or 2.

        Max% is the total heal over the regen duration of the matching slot.
        """
        text = text or 'Regen'
        rows = []
        for weapon in self.store.all():
            if not self.store.field_equals(weapon, 'element', HEAL_ELEMENT):
                continue
            slot = self.store.find_slot(weapon, PRIMARY_EFFECT_FIELDS, text)
            if slot is None:
                continue

            atb = self._get(weapon, 'atb')
            duration = parse_int(self._get(weapon, f'effect{slot}Dur'))
            pot = parse_int(self._get(weapon, 'potOb10'))
            max_pot = regen_max_potency(duration, pot)

            rows.append([
                self._get(weapon, 'name'),
                self._get(weapon, 'charName'),
                self._get(weapon, 'type'),
                atb,
                self._get(weapon, 'uses'),
                self._get(weapon, f'effect{slot}Range'),
                self._get(weapon, f'effect{slot}Target'),
                _cell(duration),
                _cell(pot),
                _cell(max_pot),
                _cell(percent_per_atb(max_pot, atb)),
            ])

        return self._table(header, REGEN_COLUMNS, rows, sort=True)

    def unique_effect_table(self, text: str, header: str) -> ResultTable:
        """
        Weapons with the marker `text` in effect slot 1 or 2.

        Both effects are listed with the marker (and the separator that
        follows it) removed.
        """
        rows = []
        for weapon in self.store.all():
            slot = self.store.find_slot(weapon, PRIMARY_EFFECT_FIELDS, text)
            if slot is None:
                continue

            rows.append([
                self._get(weapon, 'name'),
                self._get(weapon, 'charName'),
                self._get(weapon, f'effect{slot}Range'),
                self._get(weapon, 'type'),
                self._get(weapon, 'element'),
                self._get(weapon, 'atb'),
                self._get(weapon, 'uses'),
                self._get(weapon, 'effect1Target'),
                strip_marker(self._get(weapon, 'effect1'), text),
                self._get(weapon, 'condition1'),
                self._get(weapon, 'effect2Target'),
                strip_marker(self._get(weapon, 'effect2'), text),
                self._get(weapon, 'condition2'),
            ])

        return self._table(header, UNIQUE_COLUMNS, rows)
