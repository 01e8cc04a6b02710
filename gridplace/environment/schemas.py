"""Pydantic schemas for tile grids.

These models mirror the dataclasses in ``grid.py`` but keep grid snapshots
serializable, e.g. for layouts loaded from JSON.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field


class GridTileState(BaseModel):
    """Encodes metadata about a single grid tile."""

    collision: bool = False
    kind: Optional[str] = Field(None, description="Tile category (wall, floor, door, ...)")
    metadata: Dict[str, str] = Field(default_factory=dict)


class TileGridState(BaseModel):
    """Sparse representation of a 2D tile grid."""

    width: int = Field(..., gt=0, description="Grid width in cells")
    height: int = Field(..., gt=0, description="Grid height in cells")
    tile_size: int = Field(32, gt=0, description="World units per cell")
    tiles: Dict[Tuple[int, int], GridTileState] = Field(
        default_factory=dict,
        description="Sparse map: (x, y) → tile metadata",
    )
