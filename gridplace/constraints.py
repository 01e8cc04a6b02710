"""Placement constraints.

A constraint is a predicate over a candidate cell. Constraints read the grid
system and spatial index through a ``PlacementContext`` and never mutate
either. A list of constraints is satisfied when every member is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Protocol, Sequence

from .coordinates import GridPosition, GridSystem, WorldPosition
from .spatial_index import SpatialIndex


class PlacementContext(Protocol):
    """Read-only view of the placement state handed to constraints and strategies."""

    def get_grid_system(self) -> GridSystem:
        ...

    def get_spatial_index(self) -> SpatialIndex:
        ...


class PlacementConstraint(ABC):
    """Interface for constraints that decide whether a cell may hold an object."""

    @abstractmethod
    def is_satisfied(self, position: GridPosition, context: PlacementContext) -> bool:
        """Return True if ``position`` satisfies this constraint."""

    @abstractmethod
    def get_description(self) -> str:
        """Human-readable description for diagnostics."""

    def is_satisfied_at(self, position: WorldPosition, context: PlacementContext) -> bool:
        """Check an exact world anchor rather than a cell origin.

        Used when an object is committed at the position it asked for
        (``move``, preferred positions). The default checks the containing cell.
        """
        return self.is_satisfied(context.get_grid_system().world_to_grid(*position), context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_description()!r})"


class WalkableConstraint(PlacementConstraint):
    """Cell must be inside the world and passable."""

    def is_satisfied(self, position: GridPosition, context: PlacementContext) -> bool:
        return context.get_grid_system().is_valid_position(position)

    def get_description(self) -> str:
        return "Position must be walkable"


class NotOccupiedConstraint(PlacementConstraint):
    """Cell must hold no objects other than the excluded ids.

    ``exclude_ids`` usually carries the id of the object being placed so it
    does not collide with itself when moving. ``width``/``height`` (world
    units) widen the occupancy check to a whole footprint anchored at the
    cell; the default checks the single cell.
    """

    def __init__(self, exclude_ids: Iterable[str] = (), width: float = 1, height: float = 1):
        self.exclude_ids = frozenset(exclude_ids)
        self.width = width
        self.height = height

    def is_satisfied(self, position: GridPosition, context: PlacementContext) -> bool:
        return self.is_satisfied_at(context.get_grid_system().grid_to_world(position), context)

    def is_satisfied_at(self, position: WorldPosition, context: PlacementContext) -> bool:
        # Same cell range insert() will cover for a footprint anchored here
        occupants = context.get_spatial_index().query(position[0], position[1], self.width, self.height)
        return occupants <= self.exclude_ids

    def excluding(self, *object_ids: str) -> "NotOccupiedConstraint":
        """Copy of this constraint that also ignores ``object_ids``."""
        return NotOccupiedConstraint(self.exclude_ids.union(object_ids), self.width, self.height)

    def get_description(self) -> str:
        if self.exclude_ids:
            ignored = ", ".join(sorted(self.exclude_ids))
            return f"Position must not be occupied by another object (ignoring {ignored})"
        return "Position must not be occupied by another object"


class WithinBoundsConstraint(PlacementConstraint):
    """Cell must be inside the grid, walkable or not."""

    def is_satisfied(self, position: GridPosition, context: PlacementContext) -> bool:
        columns, rows = context.get_grid_system().get_grid_size()
        return 0 <= position[0] < columns and 0 <= position[1] < rows

    def get_description(self) -> str:
        return "Position must be inside the grid"


def constraints_satisfied(
    position: GridPosition,
    constraints: Sequence[PlacementConstraint],
    context: PlacementContext,
) -> bool:
    """Return True when every constraint accepts ``position`` (stops at the first failure)."""
    return all(constraint.is_satisfied(position, context) for constraint in constraints)


def constraints_satisfied_at(
    position: WorldPosition,
    constraints: Sequence[PlacementConstraint],
    context: PlacementContext,
) -> bool:
    """Like ``constraints_satisfied`` for an exact world anchor."""
    return all(constraint.is_satisfied_at(position, context) for constraint in constraints)


def describe_constraints(constraints: Sequence[PlacementConstraint]) -> str:
    if not constraints:
        return "no constraints"
    return "; ".join(constraint.get_description() for constraint in constraints)
