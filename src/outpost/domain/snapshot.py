"""Build engine snapshots from the ledger's state document.

The ledger reports the board as a flat, row-major list of terrain image
indices plus separate lists of cities, upgraded tiles, player units and NPC
units.  :func:`build_snapshot` folds these into a :class:`GridModel` and a
:class:`UnitRegistry`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from outpost.domain.enums import TileKind, UnitKind
from outpost.domain.grid import GridModel
from outpost.domain.models import CityID, Tile, Unit, UnitID
from outpost.domain.rules_config import DEFAULT_RULES, RulesConfig
from outpost.domain.units import UnitRegistry
from outpost.errors import SnapshotError

logger = logging.getLogger(__name__)

# Terrain image index -> tile kind.  Index 0 marks a hole in the map.
TILE_INDEX: dict[int, TileKind] = {
    1: TileKind.PLAINS,
    2: TileKind.FOREST,
    3: TileKind.FIELD,
    4: TileKind.ROCKS,
    5: TileKind.MOUNTAINS,
    10: TileKind.VILLAGE,
    11: TileKind.STONE_QUARRY,
}

# Upgrade names reported by the ledger that replace the underlying terrain.
UPGRADE_KINDS: dict[str, TileKind] = {
    "stoneQuarry": TileKind.STONE_QUARRY,
}


@dataclass(slots=True)
class CityRecord:
    city_id: int
    x: int
    y: int


@dataclass(slots=True)
class UpgradedTileRecord:
    x: int
    y: int
    tile_type: str


@dataclass(slots=True)
class UnitRecord:
    unit_id: int
    x: int
    y: int
    unit_type: UnitKind
    health: int
    movement_range: int


@dataclass(slots=True)
class LedgerState:
    """Raw state document as served by the ledger."""

    map: list[int]
    cities: list[CityRecord] = field(default_factory=list)
    upgraded_tiles: list[UpgradedTileRecord] = field(default_factory=list)
    units: list[UnitRecord] = field(default_factory=list)
    npc_units: list[UnitRecord] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Authoritative grid and unit state at one point in time."""

    grid: GridModel
    registry: UnitRegistry


def build_grid(state: LedgerState, *, rules: RulesConfig = DEFAULT_RULES) -> GridModel:
    """Return the grid described by ``state``.

    Cities take precedence over upgrades, which take precedence over the
    terrain map.  Holes and unknown indices are left for the grid to fill
    with its default tile.
    """

    width, height = rules.grid.width, rules.grid.height
    if len(state.map) != width * height:
        raise SnapshotError(f"map has {len(state.map)} cells, expected {width * height}")

    cities = {(city.x, city.y): CityID(city.city_id) for city in state.cities}
    upgrades = {
        (tile.x, tile.y): UPGRADE_KINDS[tile.tile_type]
        for tile in state.upgraded_tiles
        if tile.tile_type in UPGRADE_KINDS
    }

    tiles: list[Tile] = []
    for row in range(height):
        for col in range(width):
            key = (col, row)
            if key in cities:
                tiles.append(Tile(x=col, y=row, kind=TileKind.VILLAGE, city_id=cities[key]))
                continue
            if key in upgrades:
                tiles.append(Tile(x=col, y=row, kind=upgrades[key]))
                continue
            index = state.map[row * width + col]
            if not index:
                continue
            kind = TILE_INDEX.get(index)
            if kind is None:
                logger.warning("unknown terrain index %s at (%s, %s)", index, col, row)
                continue
            tiles.append(Tile(x=col, y=row, kind=kind))
    return GridModel(tiles, rules=rules.grid)


def build_registry(state: LedgerState) -> UnitRegistry:
    """Return the registry of player units followed by NPC units."""

    units = [_to_unit(record, is_npc=False) for record in state.units]
    units.extend(_to_unit(record, is_npc=True) for record in state.npc_units)
    return UnitRegistry(units)


def build_snapshot(state: LedgerState, *, rules: RulesConfig = DEFAULT_RULES) -> Snapshot:
    return Snapshot(grid=build_grid(state, rules=rules), registry=build_registry(state))


def _to_unit(record: UnitRecord, *, is_npc: bool) -> Unit:
    return Unit(
        id=UnitID(record.unit_id),
        x=record.x,
        y=record.y,
        kind=UnitKind(record.unit_type),
        health=record.health,
        movement_range=record.movement_range,
        is_npc=is_npc,
    )
