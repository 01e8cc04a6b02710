"""Placeable objects and their optional capabilities.

Anything with ``get_position``/``set_position`` can be placed. Extra behavior
is opted into through small capability protocols (preferred position,
priority, constraints, footprint, stable id, serialization); the helper
functions below check for a capability and fall back to a default when it
is absent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from .coordinates import WorldPosition
from .schemas import LayoutObject

if TYPE_CHECKING:
    from .constraints import PlacementConstraint


@runtime_checkable
class Placeable(Protocol):
    """Required capability: report and accept a world position."""

    def get_position(self) -> WorldPosition:
        ...

    def set_position(self, x: float, y: float) -> None:
        ...


@runtime_checkable
class HasPreferredPosition(Protocol):
    def get_preferred_position(self) -> Optional[WorldPosition]:
        ...


@runtime_checkable
class HasPlacementPriority(Protocol):
    """Higher numbers are placed first."""

    def get_placement_priority(self) -> int:
        ...


@runtime_checkable
class HasPlacementConstraints(Protocol):
    def get_placement_constraints(self) -> List["PlacementConstraint"]:
        ...


@runtime_checkable
class HasFootprint(Protocol):
    """Width and height in world units."""

    def get_footprint(self) -> Tuple[float, float]:
        ...


@runtime_checkable
class HasObjectId(Protocol):
    object_id: str


@runtime_checkable
class HasSerialization(Protocol):
    """Round-trips the object's placement data through a plain dict."""

    def serialize(self) -> Dict[str, Any]:
        ...

    def deserialize(self, data: Dict[str, Any]) -> None:
        ...


def preferred_position(obj: Placeable) -> Optional[WorldPosition]:
    if isinstance(obj, HasPreferredPosition):
        return obj.get_preferred_position()
    return None


def placement_priority(obj: Placeable) -> int:
    if isinstance(obj, HasPlacementPriority):
        return obj.get_placement_priority() or 0
    return 0


def placement_constraints(obj: Placeable) -> List["PlacementConstraint"]:
    if isinstance(obj, HasPlacementConstraints):
        return list(obj.get_placement_constraints() or [])
    return []


def footprint(obj: Placeable, default: Tuple[float, float] = (1, 1)) -> Tuple[float, float]:
    """Return the object's footprint, or ``default`` (one world unit, one cell)."""
    if isinstance(obj, HasFootprint):
        width, height = obj.get_footprint()
        return max(width, 1), max(height, 1)
    return default


def object_id(obj: Placeable) -> Optional[str]:
    if isinstance(obj, HasObjectId):
        return obj.object_id or None
    return None


def serialized_state(obj: Placeable) -> Optional[Dict[str, Any]]:
    if isinstance(obj, HasSerialization):
        return obj.serialize()
    return None


@dataclass(eq=False)
class PlacedObject:
    """Plain placeable with every optional capability.

    Useful for layouts, tests and callers without their own entity class.
    Compares by identity so two objects at the same spot stay distinct.
    """

    x: float = 0
    y: float = 0
    width: float = 1
    height: float = 1
    priority: int = 0
    preferred: Optional[WorldPosition] = None
    constraints: List["PlacementConstraint"] = field(default_factory=list)
    object_id: str = ""

    def get_position(self) -> WorldPosition:
        return self.x, self.y

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def get_preferred_position(self) -> Optional[WorldPosition]:
        return self.preferred

    def get_placement_priority(self) -> int:
        return self.priority

    def get_placement_constraints(self) -> List["PlacementConstraint"]:
        return list(self.constraints)

    def get_footprint(self) -> Tuple[float, float]:
        return self.width, self.height

    def serialize(self) -> Dict[str, Any]:
        """Placement data in layout-file form. Constraints are not included."""
        return LayoutObject(
            id=self.object_id,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            priority=self.priority,
            preferred=self.preferred,
        ).model_dump()

    def deserialize(self, data: Dict[str, Any]) -> None:
        """Restore fields from ``serialize()`` output.

        Raises:
            pydantic.ValidationError: If ``data`` is not a valid layout object
        """
        parsed = LayoutObject(**data)
        self.object_id = parsed.id
        self.x = parsed.x
        self.y = parsed.y
        self.width = parsed.width
        self.height = parsed.height
        self.priority = parsed.priority
        self.preferred = parsed.preferred
