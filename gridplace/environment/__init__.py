"""Tile world model consumed by the placement engine."""

from .grid import GridTile, TileGrid, WalkabilitySource
from .schemas import GridTileState, TileGridState
from .helpers import render_occupancy_window

__all__ = [
    "GridTile",
    "TileGrid",
    "WalkabilitySource",
    "GridTileState",
    "TileGridState",
    "render_occupancy_window",
]
