"""
Filter Registry

Every selectable filter, keyed by filter id. Each entry is a FilterConfig
interpreted by FilterEngine; adding a filter only needs a new entry here.
"""

from typing import Dict

from models import FilterConfig, SubQuery, QueryKind


def _element(name: str) -> FilterConfig:
    return FilterConfig(QueryKind.ELEMENT, text=name)


def _effect(text: str, header: str) -> FilterConfig:
    return FilterConfig(QueryKind.STAT_EFFECT, text=text, header=header)


def _materia(text: str, header: str) -> FilterConfig:
    return FilterConfig(QueryKind.MATERIA_SLOT, text=text, header=header)


FILTER_CONFIGS: Dict[str, FilterConfig] = {
    # Element filters
    'filterFire': _element('Fire'),
    'filterIce': _element('Ice'),
    'filterLightning': _element('Lightning'),
    'filterWater': _element('Water'),
    'filterWind': _element('Wind'),
    'filterEarth': _element('Earth'),
    'filterNonElem': _element('None'),

    # Limited/Gacha
    'filterLimited': FilterConfig(QueryKind.LIMITED, header='Limited/Crossover Weapons:'),

    # Everything
    'filterAll': FilterConfig(QueryKind.ALL, header='List of All Weapons:'),

    # Stat debuffs
    'filterMatkDown': _effect('[Debuff] MATK', 'Weapon with [Debuff] MATK:'),
    'filterPatkDown': _effect('[Debuff] PATK', 'Weapon with [Debuff] PATK:'),
    'filterPdefDown': _effect('[Debuff] PDEF', 'Weapon with [Debuff] PDEF:'),
    'filterMdefDown': _effect('[Debuff] MDEF', 'Weapon with [Debuff] MDEF:'),

    # Stat buffs
    'filterPatkUp': _effect('[Buff] PATK', 'Weapon with [Buff] PATK:'),
    'filterMatkUp': _effect('[Buff] MATK', 'Weapon with [Buff] MATK:'),
    'filterPdefUp': _effect('[Buff] PDEF', 'Weapon with [Buff] PDEF:'),
    'filterMdefUp': _effect('[Buff] MDEF', 'Weapon with [Buff] MDEF:'),

    'filterExploitWeakness': _effect('[Buff] Weakness', 'Exploit Weakness Weapon:'),

    # Materia slots
    'filterCircleSigilMateria': _materia('Circle', 'Weapon with ◯ Sigil Materia Slot:'),
    'filterTriangleSigilMateria': _materia('Triangle', 'Weapon with △ Sigil Materia Slot:'),
    'filterXSigilMateria': _materia('X Sigil', 'Weapon with ✕ Sigil Materia Slot:'),

    # Diamond is a weapon sigil, not a materia slot
    'filterDiamondMateria': FilterConfig(
        QueryKind.SIGIL, text='Diamond', header='Weapon with ◊ Sigil:'),

    # Composite filters (one table per entry, in order)
    'filterHeal': FilterConfig(QueryKind.COMPOSITE, tables=(
        SubQuery(QueryKind.ELEMENT, 'Heal', 'Non-Regen Healing Weapon (> 25% Potency):'),
        SubQuery(QueryKind.REGEN, 'Regen', 'Regen Healing Weapon:'),
        SubQuery(QueryKind.MATERIA_SLOT, 'All (Cure)', 'Weapon with All (Cure) Materia Slot:'),
    )),
    'filterProvoke': FilterConfig(QueryKind.COMPOSITE, tables=(
        SubQuery(QueryKind.STAT_EFFECT, '[Buff] Provoke', 'Provoke Weapon:'),
        SubQuery(QueryKind.STAT_EFFECT, '[Buff] Veil', 'Veil Weapon:'),
    )),
    'filterUniqueEffect': FilterConfig(QueryKind.COMPOSITE, tables=(
        SubQuery(QueryKind.UNIQUE_EFFECT, '[Status Apply]', 'Weapon Applying Status:'),
        SubQuery(QueryKind.UNIQUE_EFFECT, '[Status Cleanse]', 'Weapon Removing Status:'),
        SubQuery(QueryKind.UNIQUE_EFFECT, '[Dispel', 'Weapon with Dispel Effect:'),
        SubQuery(QueryKind.STAT_EFFECT, 'Haste', 'Weapon with Haste Effect:'),
        SubQuery(QueryKind.STAT_EFFECT, 'Increases Command Gauge',
                 'Weapon with Increase Command Gauge Effect:'),
    )),
}
