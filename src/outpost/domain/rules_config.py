"""Declarative rule configuration for the Outpost engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import ResourceKind, TileKind, UnitKind


@dataclass(frozen=True, slots=True)
class GridRules:
    """Board dimensions and terrain classification."""

    width: int = 20
    height: int = 20
    default_kind: TileKind = TileKind.EMPTY
    blocking_kinds: frozenset[TileKind] = frozenset({TileKind.VILLAGE, TileKind.MOUNTAINS})
    resource_kinds: dict[TileKind, ResourceKind] = field(
        default_factory=lambda: {
            TileKind.FOREST: ResourceKind.LUMBER,
            TileKind.FIELD: ResourceKind.FOOD,
            TileKind.ROCKS: ResourceKind.STONE,
        }
    )


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Attack eligibility and the numbers used by the development ledger."""

    attack_capable: frozenset[UnitKind] = frozenset(
        {UnitKind.WARRIOR, UnitKind.SWORDSMAN, UnitKind.ARCHER}
    )
    attack_damage: int = 10  # dealt by the local ledger only
    counter_damage: int = 5  # returned to the attacker by the local ledger only


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    grid: GridRules = GridRules()
    combat: CombatRules = CombatRules()


DEFAULT_RULES = RulesConfig()
