"""Bounded tile grid for a single ledger snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from outpost.domain.enums import ResourceKind, TileKind
from outpost.domain.models import Coord, Tile
from outpost.domain.rules_config import DEFAULT_RULES, GridRules
from outpost.errors import SnapshotError


class GridModel:
    """Immutable map of coordinate to tile.

    The grid is total over its bounds: any coordinate the snapshot did not
    provide, and any coordinate outside the board, reads back as a tile of the
    configured default kind.
    """

    __slots__ = ("_rules", "_tiles")

    def __init__(
        self, tiles: Iterable[Tile] = (), *, rules: GridRules = DEFAULT_RULES.grid
    ) -> None:
        indexed: dict[Coord, Tile] = {}
        for tile in tiles:
            if not self._contains(rules, tile.x, tile.y):
                raise SnapshotError(f"tile ({tile.x}, {tile.y}) lies outside the grid")
            if tile.coord in indexed:
                raise SnapshotError(f"duplicate tile at ({tile.x}, {tile.y})")
            indexed[tile.coord] = tile
        self._rules = rules
        self._tiles: Mapping[Coord, Tile] = MappingProxyType(indexed)

    @property
    def width(self) -> int:
        return self._rules.width

    @property
    def height(self) -> int:
        return self._rules.height

    @property
    def rules(self) -> GridRules:
        return self._rules

    def in_bounds(self, x: int, y: int) -> bool:
        return self._contains(self._rules, x, y)

    def tile_at(self, x: int, y: int) -> Tile:
        """Return the tile at ``(x, y)``, synthesizing a default one for holes."""

        tile = self._tiles.get(Coord(x, y))
        if tile is None:
            return Tile(x=x, y=y, kind=self._rules.default_kind)
        return tile

    def is_blocking(self, kind: TileKind) -> bool:
        """Return True when ``kind`` can never be a movement destination."""

        return kind in self._rules.blocking_kinds

    def resource_for(self, kind: TileKind) -> ResourceKind | None:
        """Return the resource gatherable from ``kind``, if any."""

        return self._rules.resource_kinds.get(kind)

    def coordinates(self) -> Iterator[Coord]:
        """Iterate every coordinate of the board, row by row."""

        for y in range(self._rules.height):
            for x in range(self._rules.width):
                yield Coord(x, y)

    def tiles(self) -> Iterator[Tile]:
        """Iterate every tile of the board, holes included, row by row."""

        for coord in self.coordinates():
            yield self.tile_at(coord.x, coord.y)

    @staticmethod
    def _contains(rules: GridRules, x: int, y: int) -> bool:
        return 0 <= x < rules.width and 0 <= y < rules.height
