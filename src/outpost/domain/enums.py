"""Enumerations used across the Outpost rules layer."""

from __future__ import annotations

from enum import StrEnum


class TileKind(StrEnum):
    """Terrain or feature category of a grid cell."""

    EMPTY = "Empty"
    PLAINS = "Plains"
    FOREST = "Forest"
    FIELD = "Field"
    ROCKS = "Rocks"
    MOUNTAINS = "Mountains"
    VILLAGE = "Village"
    STONE_QUARRY = "StoneQuarry"


class ResourceKind(StrEnum):
    """Resources a builder can gather from a tile."""

    LUMBER = "lumber"
    FOOD = "food"
    STONE = "stone"


class UnitKind(StrEnum):
    """Unit kinds known to the ledger."""

    SETTLER = "settler"
    BUILDER = "builder"
    WARRIOR = "warrior"
    ARCHER = "archer"
    SWORDSMAN = "swordsman"
    CROSSBOWMAN = "crossbowman"
    MUSKETMAN = "musketman"
    RIFLEMAN = "rifleman"
    TANK = "tank"


class DecisionKind(StrEnum):
    """Outcome categories of a resolved click."""

    MOVE = "move"
    ATTACK = "attack"
    SELECT = "select"
    DESELECT = "deselect"
    NOOP = "noop"
    REJECTED = "rejected"


class Severity(StrEnum):
    """Severity of a user-facing notification."""

    INFO = "info"
    ERROR = "error"
