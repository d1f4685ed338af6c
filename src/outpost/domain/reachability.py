"""Movement range rules.

Range is pure Manhattan distance on a uniform-cost board.  Terrain never
blocks transit; a blocking tile only vetoes itself as a destination.
Occupancy is not considered here, the action resolver handles occupied
tiles before it ever asks whether a tile is reachable.
"""

from __future__ import annotations

from outpost.domain.grid import GridModel
from outpost.domain.models import Coord
from outpost.domain.units import UnitRegistry


def manhattan_distance(a: Coord, b: Coord) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def is_reachable(origin: Coord, target: Coord, budget: int, grid: GridModel) -> bool:
    """Return True when ``target`` is a legal destination from ``origin``."""

    if target == origin:
        return False
    if not grid.in_bounds(target.x, target.y):
        return False
    if manhattan_distance(origin, target) > budget:
        return False
    return not grid.is_blocking(grid.tile_at(target.x, target.y).kind)


def reachable(
    origin: Coord,
    budget: int,
    grid: GridModel,
    registry: UnitRegistry | None = None,
) -> frozenset[Coord]:
    """Return every coordinate reachable from ``origin`` within ``budget``.

    ``registry`` is accepted so callers can pass the full snapshot, but unit
    positions do not affect the result.
    """

    if budget <= 0:
        return frozenset()

    found: set[Coord] = set()
    for y in range(max(0, origin.y - budget), min(grid.height, origin.y + budget + 1)):
        spread = budget - abs(origin.y - y)
        for x in range(max(0, origin.x - spread), min(grid.width, origin.x + spread + 1)):
            candidate = Coord(x, y)
            if is_reachable(origin, candidate, budget, grid):
                found.add(candidate)
    return frozenset(found)
