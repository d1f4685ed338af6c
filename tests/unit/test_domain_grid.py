"""Unit tests for the tile grid."""

from __future__ import annotations

import pytest

from outpost.domain.enums import ResourceKind, TileKind
from outpost.domain.grid import GridModel
from outpost.domain.models import Coord, Tile
from outpost.errors import SnapshotError


def test_holes_read_back_as_default_tiles():
    grid = GridModel([Tile(x=1, y=1, kind=TileKind.FOREST)])

    assert grid.tile_at(1, 1).kind == TileKind.FOREST
    hole = grid.tile_at(3, 4)
    assert hole == Tile(x=3, y=4, kind=TileKind.EMPTY)


def test_out_of_bounds_lookup_falls_back_to_default():
    grid = GridModel()

    assert not grid.in_bounds(20, 0)
    assert not grid.in_bounds(0, -1)
    assert grid.tile_at(25, -1).kind == TileKind.EMPTY


def test_blocking_kinds():
    grid = GridModel()

    assert grid.is_blocking(TileKind.VILLAGE)
    assert grid.is_blocking(TileKind.MOUNTAINS)
    for kind in TileKind:
        if kind not in (TileKind.VILLAGE, TileKind.MOUNTAINS):
            assert not grid.is_blocking(kind)


def test_resource_mapping():
    grid = GridModel()

    assert grid.resource_for(TileKind.FOREST) == ResourceKind.LUMBER
    assert grid.resource_for(TileKind.FIELD) == ResourceKind.FOOD
    assert grid.resource_for(TileKind.ROCKS) == ResourceKind.STONE
    assert grid.resource_for(TileKind.PLAINS) is None
    assert grid.resource_for(TileKind.STONE_QUARRY) is None


def test_rejects_inconsistent_tiles():
    with pytest.raises(SnapshotError):
        GridModel([Tile(x=0, y=0, kind=TileKind.PLAINS), Tile(x=0, y=0, kind=TileKind.FOREST)])
    with pytest.raises(SnapshotError):
        GridModel([Tile(x=20, y=0, kind=TileKind.PLAINS)])


def test_coordinates_cover_the_board_row_by_row():
    grid = GridModel()
    coords = list(grid.coordinates())

    assert len(coords) == 400
    assert coords[:2] == [Coord(0, 0), Coord(1, 0)]
    assert coords[20] == Coord(0, 1)
    assert len(list(grid.tiles())) == 400
