"""Tile grid world model.

The placement engine only needs a bounds-and-passability check and a cell
size from the world it places objects into. ``TileGrid`` is the minimal
in-repo implementation of that contract; any object satisfying
``WalkabilitySource`` can be used instead (a game's own map class, for example).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Protocol, Tuple, runtime_checkable

from .schemas import GridTileState, TileGridState


@runtime_checkable
class WalkabilitySource(Protocol):
    """Read-only world contract consumed by the coordinate system."""

    width: int
    height: int
    tile_size: int

    def is_walkable(self, x: int, y: int) -> bool:
        ...


@dataclass
class GridTile:
    """Metadata about a single tile in the grid."""

    collision: bool = False
    kind: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class TileGrid:
    """Sparse 2D tile map addressed by (x, y) cell coordinates.

    ``width`` and ``height`` are measured in cells, ``tile_size`` in world
    units per cell. Tiles missing from ``tiles`` are open floor.
    """

    width: int
    height: int
    tile_size: int = 32
    tiles: Dict[Tuple[int, int], GridTile] = field(default_factory=dict)

    @classmethod
    def walled(cls, width: int, height: int, tile_size: int = 32) -> "TileGrid":
        """Build a grid with a solid wall border and an open interior."""
        grid = cls(width=width, height=height, tile_size=tile_size)
        for x in range(width):
            for y in range(height):
                if x in (0, width - 1) or y in (0, height - 1):
                    grid.set_blocked(x, y)
        return grid

    @classmethod
    def from_ascii(cls, rows: Iterable[str], tile_size: int = 32) -> "TileGrid":
        """Build a grid from text rows where ``#`` marks a wall.

        Rows are read top to bottom, so row index is the y coordinate. Short
        rows are padded with floor up to the longest row.
        """
        lines = list(rows)
        width = max((len(line) for line in lines), default=0)
        grid = cls(width=width, height=len(lines), tile_size=tile_size)
        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                if char == "#":
                    grid.tiles[(x, y)] = GridTile(collision=True, kind="wall")
        return grid

    @classmethod
    def from_state(cls, state: TileGridState) -> "TileGrid":
        tiles = {
            coord: GridTile(
                collision=tile.collision,
                kind=tile.kind,
                metadata=dict(tile.metadata),
            )
            for coord, tile in state.tiles.items()
        }
        return cls(
            width=state.width,
            height=state.height,
            tile_size=state.tile_size,
            tiles=tiles,
        )

    def to_state(self) -> TileGridState:
        return TileGridState(
            width=self.width,
            height=self.height,
            tile_size=self.tile_size,
            tiles={
                coord: GridTileState(
                    collision=tile.collision,
                    kind=tile.kind,
                    metadata=dict(tile.metadata),
                )
                for coord, tile in self.tiles.items()
            },
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> GridTile | None:
        return self.tiles.get((x, y))

    def is_walkable(self, x: int, y: int) -> bool:
        # Outside the map counts as wall
        if not self.in_bounds(x, y):
            return False
        tile = self.get_tile(x, y)
        if tile is None:
            return True
        return not tile.collision

    def set_blocked(self, x: int, y: int, blocked: bool = True) -> None:
        tile = self.tiles.get((x, y))
        if tile is None:
            if not blocked:
                return
            tile = GridTile(kind="wall")
            self.tiles[(x, y)] = tile
        tile.collision = blocked

    def ensure_walkable(self, x: int, y: int) -> None:
        self.set_blocked(x, y, blocked=False)
