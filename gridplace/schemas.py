"""
Pydantic schemas for gridplace.

Records exchanged between the spatial index, the controller and callers.

Design Philosophy:
- World units everywhere (positions and footprints), cells are derived
- Records are plain data; bookkeeping lives in the index
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class TrackedObject(BaseModel):
    """Positional record the spatial index keeps for one id.

    ``x``/``y`` is the anchor (top-left) of the footprint in world units.
    Width and height are world units too; values below one are clamped to
    one so that every tracked object covers at least one cell.
    """

    object_id: str = Field(..., description="Unique id of the tracked object")
    x: float = Field(..., description="Anchor x in world units")
    y: float = Field(..., description="Anchor y in world units")
    width: float = Field(1, description="Footprint width in world units")
    height: float = Field(1, description="Footprint height in world units")

    @field_validator("width", "height")
    @classmethod
    def _at_least_one_unit(cls, value: float) -> float:
        return max(value, 1)


class LayoutObject(BaseModel):
    """Object entry in a layout file, see ``gridplace.layout``."""

    id: str
    x: float = 0
    y: float = 0
    width: float = 1
    height: float = 1
    priority: int = 0
    preferred: Optional[Tuple[float, float]] = Field(
        None, description="Preferred world position tried before any search"
    )


class PlacementOutcome(BaseModel):
    """Result of placing one object, returned by ``PlacementController.place_many``."""

    object_id: str
    placed: bool
    x: Optional[float] = None
    y: Optional[float] = None
    strategy: Optional[str] = Field(None, description="Name of the strategy that ran")
