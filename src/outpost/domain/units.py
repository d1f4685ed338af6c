"""Registry of the units present in a snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from outpost.domain.models import Coord, Unit, UnitID
from outpost.errors import SnapshotError


class UnitRegistry:
    """Immutable lookup table for player and NPC units.

    Units keep the order in which the snapshot listed them.  The only way to
    change anything is :meth:`with_selection`, which returns a new registry.
    """

    __slots__ = ("_by_coord", "_by_id", "_units")

    def __init__(self, units: Iterable[Unit] = ()) -> None:
        ordered: list[Unit] = []
        by_id: dict[UnitID, Unit] = {}
        by_coord: dict[Coord, Unit] = {}
        for unit in units:
            if unit.id in by_id:
                raise SnapshotError(f"duplicate unit id {int(unit.id)}")
            if unit.coord in by_coord:
                other = by_coord[unit.coord]
                raise SnapshotError(
                    f"units {int(other.id)} and {int(unit.id)} share tile ({unit.x}, {unit.y})"
                )
            if unit.is_npc and unit.is_selected:
                unit = replace(unit, is_selected=False)
            ordered.append(unit)
            by_id[unit.id] = unit
            by_coord[unit.coord] = unit
        self._units = tuple(ordered)
        self._by_id = by_id
        self._by_coord = by_coord

    def __len__(self) -> int:
        return len(self._units)

    def unit_at(self, x: int, y: int) -> Unit | None:
        return self._by_coord.get(Coord(x, y))

    def unit_by_id(self, unit_id: UnitID) -> Unit | None:
        return self._by_id.get(unit_id)

    def all_units(self) -> tuple[Unit, ...]:
        return self._units

    def player_units(self) -> tuple[Unit, ...]:
        return tuple(unit for unit in self._units if unit.is_player_owned)

    def npc_units(self) -> tuple[Unit, ...]:
        return tuple(unit for unit in self._units if unit.is_npc)

    def selected_unit(self) -> Unit | None:
        """Return the player unit whose selection flag is set, if any."""

        for unit in self._units:
            if unit.is_selected and unit.is_player_owned:
                return unit
        return None

    def with_selection(self, unit_id: UnitID | None, selected: bool = True) -> UnitRegistry:
        """Return a copy where only ``unit_id`` may carry the selection flag.

        Every other player unit is cleared in the same pass.  NPC units and
        unknown ids never end up selected; ``None`` clears every flag.
        """

        updated: list[Unit] = []
        for unit in self._units:
            wanted = selected and unit.id == unit_id and unit.is_player_owned
            if unit.is_selected != wanted:
                unit = replace(unit, is_selected=wanted)
            updated.append(unit)
        return UnitRegistry(updated)
