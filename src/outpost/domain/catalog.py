"""Static catalog of buildable unit kinds."""

from __future__ import annotations

from dataclasses import dataclass

from outpost.domain.enums import UnitKind


@dataclass(frozen=True, slots=True)
class UnitProfile:
    """Catalog entry describing a unit kind."""

    kind: UnitKind
    label: str
    description: str = ""
    gold_cost: int = 200
    build_turns: int = 1


UNIT_CATALOG: dict[UnitKind, UnitProfile] = {
    UnitKind.SETTLER: UnitProfile(UnitKind.SETTLER, "Settler"),
    UnitKind.BUILDER: UnitProfile(UnitKind.BUILDER, "Builder", "Can build and gather resources"),
    UnitKind.WARRIOR: UnitProfile(UnitKind.WARRIOR, "Warrior", "Basic combat unit"),
    UnitKind.ARCHER: UnitProfile(UnitKind.ARCHER, "Archer"),
    UnitKind.SWORDSMAN: UnitProfile(UnitKind.SWORDSMAN, "Swordsman"),
    UnitKind.CROSSBOWMAN: UnitProfile(UnitKind.CROSSBOWMAN, "Crossbowman"),
    UnitKind.MUSKETMAN: UnitProfile(UnitKind.MUSKETMAN, "Musketman"),
    UnitKind.RIFLEMAN: UnitProfile(UnitKind.RIFLEMAN, "Rifleman"),
    UnitKind.TANK: UnitProfile(UnitKind.TANK, "Tank"),
}


def profile_for(kind: UnitKind) -> UnitProfile:
    return UNIT_CATALOG[kind]
