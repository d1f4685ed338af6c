"""Value types describing the grid and the units standing on it.

Every type here is frozen.  Snapshots received from the ledger are never
patched in place; a refresh swaps in a new set of values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from .enums import TileKind, UnitKind

# --- Strongly typed identifiers -------------------------------------------------

UnitID = NewType("UnitID", int)
CityID = NewType("CityID", int)


# --- Core dataclasses -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Coord:
    """Column/row position on the square grid."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Tile:
    """Single grid cell."""

    x: int
    y: int
    kind: TileKind
    city_id: CityID | None = None

    @property
    def coord(self) -> Coord:
        return Coord(self.x, self.y)


@dataclass(frozen=True, slots=True)
class Unit:
    """Unit entity as reported by the ledger."""

    id: UnitID
    x: int
    y: int
    kind: UnitKind
    health: int
    movement_range: int
    is_selected: bool = False
    is_npc: bool = False

    @property
    def coord(self) -> Coord:
        return Coord(self.x, self.y)

    @property
    def is_player_owned(self) -> bool:
        return not self.is_npc
