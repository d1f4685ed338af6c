"""Tests for movement range rules."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from outpost.domain.enums import TileKind
from outpost.domain.grid import GridModel
from outpost.domain.models import Coord, Tile
from outpost.domain.reachability import is_reachable, manhattan_distance, reachable

coords = st.builds(Coord, st.integers(0, 19), st.integers(0, 19))
tile_kinds = st.sampled_from(list(TileKind))


def _plains() -> GridModel:
    return GridModel(Tile(x=c.x, y=c.y, kind=TileKind.PLAINS) for c in GridModel().coordinates())


def test_manhattan_distance():
    assert manhattan_distance(Coord(5, 5), Coord(5, 8)) == 3
    assert manhattan_distance(Coord(0, 0), Coord(3, 4)) == 7
    assert manhattan_distance(Coord(4, 2), Coord(1, 6)) == 7


def test_range_on_open_plains():
    grid = _plains()
    result = reachable(Coord(5, 5), 3, grid)

    assert Coord(5, 8) in result
    assert Coord(5, 9) not in result
    assert Coord(5, 5) not in result
    # Full diamond of radius 3 without its centre.
    assert len(result) == 24


def test_blocking_destination_is_excluded():
    grid = GridModel(
        [
            Tile(x=6, y=5, kind=TileKind.VILLAGE),
            Tile(x=4, y=5, kind=TileKind.MOUNTAINS),
        ]
    )
    result = reachable(Coord(5, 5), 5, grid)

    assert Coord(6, 5) not in result
    assert Coord(4, 5) not in result
    # Terrain never blocks transit, only the destination itself.
    assert Coord(7, 5) in result
    assert Coord(3, 5) in result


def test_range_is_clipped_to_the_board():
    grid = _plains()

    assert reachable(Coord(0, 0), 1, grid) == {Coord(1, 0), Coord(0, 1)}
    assert all(grid.in_bounds(c.x, c.y) for c in reachable(Coord(19, 19), 6, grid))
    assert not is_reachable(Coord(19, 19), Coord(20, 19), 3, grid)


def test_zero_budget_reaches_nothing():
    assert reachable(Coord(5, 5), 0, _plains()) == frozenset()
    assert reachable(Coord(5, 5), -2, _plains()) == frozenset()


@given(
    origin=coords,
    budget=st.integers(min_value=0, max_value=8),
    terrain=st.dictionaries(coords, tile_kinds, max_size=60),
)
def test_reachable_matches_brute_force(origin, budget, terrain):
    grid = GridModel(Tile(x=c.x, y=c.y, kind=kind) for c, kind in terrain.items())
    result = reachable(origin, budget, grid)

    assert origin not in result
    for coord in result:
        assert manhattan_distance(origin, coord) <= budget
        assert not grid.is_blocking(grid.tile_at(coord.x, coord.y).kind)

    expected = {
        coord
        for coord in grid.coordinates()
        if coord != origin
        and manhattan_distance(origin, coord) <= budget
        and not grid.is_blocking(grid.tile_at(coord.x, coord.y).kind)
    }
    assert result == expected
