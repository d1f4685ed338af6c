"""Derived per-tile overlays for the rendering layer."""

from __future__ import annotations

from outpost.domain.enums import ResourceKind, UnitKind
from outpost.domain.grid import GridModel
from outpost.domain.models import Coord, Unit
from outpost.domain.reachability import reachable
from outpost.domain.units import UnitRegistry


def highlighted_tiles(grid: GridModel, registry: UnitRegistry) -> frozenset[Coord]:
    """Return tiles in range of any unit that currently carries a selection flag."""

    found: set[Coord] = set()
    for unit in registry.player_units():
        if unit.is_selected:
            found |= reachable(unit.coord, unit.movement_range, grid, registry)
    return frozenset(found)


def resource_overlay(grid: GridModel, selected: Unit | None) -> dict[Coord, ResourceKind]:
    """Map resource tiles to their resource while a builder is selected."""

    if selected is None or selected.kind != UnitKind.BUILDER:
        return {}
    overlay: dict[Coord, ResourceKind] = {}
    for tile in grid.tiles():
        resource = grid.resource_for(tile.kind)
        if resource is not None:
            overlay[tile.coord] = resource
    return overlay
