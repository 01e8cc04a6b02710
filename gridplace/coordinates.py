"""Grid coordinate system.

Converts between continuous world coordinates and integer grid cells and
answers validity questions about cells. All methods are pure functions of
the world model bound at construction.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import List, Tuple

from .environment.grid import WalkabilitySource

GridPosition = Tuple[int, int]
WorldPosition = Tuple[float, float]

# Up, right, down, left
NEIGHBOR_OFFSETS: Tuple[GridPosition, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


class GridSystem(ABC):
    """Interface for grid systems used by the spatial index and placement."""

    @abstractmethod
    def world_to_grid(self, x: float, y: float) -> GridPosition:
        """Convert world coordinates to the cell containing them."""

    @abstractmethod
    def grid_to_world(self, cell: GridPosition) -> WorldPosition:
        """Convert a cell to the world coordinates of its origin."""

    @abstractmethod
    def is_valid_position(self, cell: GridPosition) -> bool:
        """Return True if the cell is inside the world and passable."""

    @abstractmethod
    def get_cell_size(self) -> Tuple[int, int]:
        """Return (width, height) of one cell in world units."""

    @abstractmethod
    def get_grid_size(self) -> Tuple[int, int]:
        """Return (columns, rows) of the grid."""

    def get_neighbors(self, cell: GridPosition) -> List[GridPosition]:
        """Return the four axis-adjacent cells.

        No bounds or walkability filtering happens here; callers validate
        with ``is_valid_position`` when they need to.
        """
        cx, cy = cell
        return [(cx + dx, cy + dy) for dx, dy in NEIGHBOR_OFFSETS]


class TileGridSystem(GridSystem):
    """GridSystem bound to a tile world (``TileGrid`` or compatible)."""

    def __init__(self, world: WalkabilitySource):
        self.world = world

    def world_to_grid(self, x: float, y: float) -> GridPosition:
        cell_w, cell_h = self.get_cell_size()
        # math.floor keeps negative coordinates in the cell to their left/above
        return math.floor(x / cell_w), math.floor(y / cell_h)

    def grid_to_world(self, cell: GridPosition) -> WorldPosition:
        cell_w, cell_h = self.get_cell_size()
        return cell[0] * cell_w, cell[1] * cell_h

    def is_valid_position(self, cell: GridPosition) -> bool:
        cx, cy = cell
        if not (0 <= cx < self.world.width and 0 <= cy < self.world.height):
            return False
        return self.world.is_walkable(cx, cy)

    def get_cell_size(self) -> Tuple[int, int]:
        size = self.world.tile_size
        return size, size

    def get_grid_size(self) -> Tuple[int, int]:
        return self.world.width, self.world.height
