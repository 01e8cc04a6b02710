"""
Placement controller.

Owns the coordinate system and spatial index for one world, keeps a registry
of placeable objects and exposes place/move/remove to the rest of the
application. Strategies and constraints receive the controller as a
``PlacementContext`` and only use its read accessors; every index mutation
goes through the controller.

Usage:
    world = TileGrid.walled(10, 10)
    controller = PlacementController(world)
    chest = PlacedObject(x=64, y=64)
    if not controller.place(chest):
        controller.queue_placement(chest)  # try again later
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import Config
from .constraints import (
    NotOccupiedConstraint,
    PlacementConstraint,
    WalkableConstraint,
    constraints_satisfied,
    constraints_satisfied_at,
    describe_constraints,
)
from .coordinates import GridPosition, GridSystem, TileGridSystem, WorldPosition
from .environment.grid import WalkabilitySource
from .logging_utils import log_debug
from .placeable import (
    Placeable,
    footprint,
    object_id,
    placement_constraints,
    placement_priority,
)
from .schemas import PlacementOutcome
from .spatial_index import GridSpatialIndex, SpatialIndex
from .strategies import PlacementStrategy, get_strategy, ring_cells


class _ConstraintsOnly:
    """Stand-in placeable for position searches that are not tied to an object."""

    def __init__(self, constraints: Sequence[PlacementConstraint], preferred: Optional[WorldPosition] = None):
        self._constraints = list(constraints)
        self._preferred = preferred

    def get_position(self) -> WorldPosition:
        return self._preferred or (0, 0)

    def set_position(self, x: float, y: float) -> None:
        pass

    def get_preferred_position(self) -> Optional[WorldPosition]:
        return self._preferred

    def get_placement_constraints(self) -> List[PlacementConstraint]:
        return list(self._constraints)


class PlacementController:
    """Coordinates placement of objects on a tile world.

    Dependencies are injected where callers want to swap them and built from
    the world otherwise. The controller is the only writer of the spatial index.
    """

    def __init__(
        self,
        world: WalkabilitySource,
        strategy: Optional[PlacementStrategy] = None,
        grid_system: Optional[GridSystem] = None,
        spatial_index: Optional[SpatialIndex] = None,
    ):
        """Initialize controller.

        Args:
            world: Tile world supplying bounds, walkability and tile size
            strategy: Default placement strategy; Config.DEFAULT_STRATEGY if omitted
            grid_system: Coordinate system; a TileGridSystem over ``world`` if omitted
            spatial_index: Index to maintain; a GridSpatialIndex if omitted
        """
        self.world = world
        self._grid_system = grid_system or TileGridSystem(world)
        self._spatial_index = spatial_index or GridSpatialIndex(self._grid_system)
        self.default_strategy = strategy or get_strategy(Config.DEFAULT_STRATEGY)

        # id -> object and object identity -> id. Keyed on id() so placeables
        # do not need to be hashable.
        self._objects: Dict[str, Placeable] = {}
        self._ids: Dict[int, str] = {}
        self._pending: List[Placeable] = []
        self._id_counter = 0

    # ------------------------------------------------------------------
    # Read accessors (PlacementContext)
    # ------------------------------------------------------------------

    def get_grid_system(self) -> GridSystem:
        return self._grid_system

    def get_spatial_index(self) -> SpatialIndex:
        return self._spatial_index

    def get_world(self) -> WalkabilitySource:
        return self.world

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, obj: Placeable) -> str:
        """Register ``obj`` and return its id; repeat calls return the same id.

        Objects exposing ``object_id`` keep that id, others get ``obj_<n>``.

        Raises:
            ValueError: If a different object already holds the requested id
        """
        existing = self._ids.get(id(obj))
        if existing is not None:
            return existing

        requested = object_id(obj)
        if requested is not None:
            if requested in self._objects:
                raise ValueError(f"Object id '{requested}' is already registered")
            new_id = requested
        else:
            new_id = self._next_generated_id()

        self._ids[id(obj)] = new_id
        self._objects[new_id] = obj
        return new_id

    def unregister(self, obj: Placeable) -> None:
        """Forget ``obj``: drop it from the index, the registry and the pending queue."""
        object_key = self._ids.pop(id(obj), None)
        if object_key is None:
            return
        del self._objects[object_key]
        self._spatial_index.remove(object_key)
        self._pending = [pending for pending in self._pending if pending is not obj]

    def remove(self, obj: Placeable) -> None:
        self.unregister(obj)

    def get_id(self, obj: Placeable) -> Optional[str]:
        return self._ids.get(id(obj))

    def get_object(self, object_key: str) -> Optional[Placeable]:
        return self._objects.get(object_key)

    def objects(self) -> List[Placeable]:
        return list(self._objects.values())

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def constraints_for(self, obj: Placeable) -> List[PlacementConstraint]:
        """Return the constraints ``obj`` must satisfy.

        An object supplying its own non-empty constraint list gets that list,
        with its own id added to every ``NotOccupiedConstraint`` so it never
        blocks itself. Everything else must land on a walkable cell that no
        other object occupies.
        """
        own_id = self.get_id(obj)
        custom = placement_constraints(obj)
        if custom:
            if own_id is None:
                return custom
            return [
                constraint.excluding(own_id) if isinstance(constraint, NotOccupiedConstraint) else constraint
                for constraint in custom
            ]
        width, height = footprint(obj)
        return [
            WalkableConstraint(),
            NotOccupiedConstraint([own_id] if own_id else [], width, height),
        ]

    def place(self, obj: Placeable, strategy: Optional[PlacementStrategy] = None) -> bool:
        """Place ``obj`` using ``strategy`` (the default strategy if omitted).

        Returns:
            True if a position was found and the object now occupies it,
            False if no valid position exists (state unchanged apart from
            registration)
        """
        object_key = self.register(obj)
        strategy = strategy or self.default_strategy
        constraints = self.constraints_for(obj)

        position = strategy.find_position(self, obj, constraints)
        if position is None:
            log_debug(
                f"{object_key}: {strategy.get_name()} found no position "
                f"({describe_constraints(constraints)})"
            )
            return False

        self._commit(object_key, obj, position)
        log_debug(f"{object_key}: placed at {position} by {strategy.get_name()}")
        return True

    def place_many(self, objs: Iterable[Placeable]) -> List[PlacementOutcome]:
        """Place objects highest priority first; failures are queued for later.

        Objects with equal priority keep their input order.
        """
        ordered = sorted(objs, key=placement_priority, reverse=True)
        outcomes: List[PlacementOutcome] = []
        for obj in ordered:
            placed = self.place(obj)
            if not placed:
                self.queue_placement(obj)
            x, y = obj.get_position() if placed else (None, None)
            outcomes.append(
                PlacementOutcome(
                    object_id=self._ids[id(obj)],
                    placed=placed,
                    x=x,
                    y=y,
                    strategy=self.default_strategy.get_name(),
                )
            )
        return outcomes

    def move(self, obj: Placeable, x: float, y: float) -> bool:
        """Move ``obj`` to world position (x, y) if the target is valid.

        Constraints are checked at the exact anchor, so an off-grid target is
        tested against every cell its footprint will cover. The object's own
        id is excluded from occupancy checks, so a move that overlaps its
        current footprint is allowed. On failure nothing changes.
        """
        object_key = self.register(obj)
        if not constraints_satisfied_at((x, y), self.constraints_for(obj), self):
            log_debug(f"{object_key}: move to ({x}, {y}) rejected")
            return False
        self._commit(object_key, obj, (x, y))
        return True

    # ------------------------------------------------------------------
    # Pending queue
    # ------------------------------------------------------------------

    @property
    def pending(self) -> List[Placeable]:
        return list(self._pending)

    def queue_placement(self, obj: Placeable) -> None:
        if not any(pending is obj for pending in self._pending):
            self._pending.append(obj)

    def process_pending_placements(self) -> int:
        """Retry every queued object once; returns how many were placed."""
        queued, self._pending = self._pending, []
        placed = 0
        for obj in queued:
            if self.place(obj):
                placed += 1
            else:
                self._pending.append(obj)
        return placed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_position_valid(
        self,
        cell: GridPosition,
        constraints: Sequence[PlacementConstraint] = (),
    ) -> bool:
        return constraints_satisfied(cell, constraints, self)

    def is_position_occupied(self, cell: GridPosition) -> bool:
        world_x, world_y = self._grid_system.grid_to_world(cell)
        return bool(self._spatial_index.query(world_x, world_y))

    def find_valid_position(
        self,
        constraints: Sequence[PlacementConstraint],
        preferred: Optional[GridPosition] = None,
    ) -> Optional[WorldPosition]:
        """Find any position satisfying ``constraints``, trying ``preferred`` (a cell) first."""
        if preferred is not None and self.is_position_valid(preferred, constraints):
            return self._grid_system.grid_to_world(preferred)
        probe = _ConstraintsOnly(constraints)
        return self.default_strategy.find_position(self, probe, constraints)

    def find_valid_position_near(
        self,
        x: float,
        y: float,
        radius: float,
        constraints: Sequence[PlacementConstraint] = (),
    ) -> Optional[WorldPosition]:
        """Search expanding rings around world position (x, y), up to ``radius`` world units."""
        center = self._grid_system.world_to_grid(x, y)
        cell_width, _ = self._grid_system.get_cell_size()
        max_radius = max(int(-(-radius // cell_width)), 0)
        for cell in ring_cells(center, self._grid_system.get_grid_size(), max_radius):
            if self.is_position_valid(cell, constraints):
                return self._grid_system.grid_to_world(cell)
        return None

    def next_best_position(self, obj: Placeable) -> Optional[WorldPosition]:
        """Closest valid position to where ``obj`` currently is."""
        x, y = obj.get_position()
        cell_width, _ = self._grid_system.get_cell_size()
        return self.find_valid_position_near(
            x,
            y,
            Config.NEXT_BEST_RADIUS_CELLS * cell_width,
            self.constraints_for(obj),
        )

    # ------------------------------------------------------------------
    # Bulk maintenance
    # ------------------------------------------------------------------

    def invalidate_area(self, x: float, y: float, width: float, height: float) -> List[str]:
        """Queue every object overlapping the area for re-placement; returns their ids."""
        affected = sorted(self._spatial_index.query(x, y, width, height))
        for object_key in affected:
            obj = self._objects.get(object_key)
            if obj is not None:
                self.queue_placement(obj)
        return affected

    def recalculate_positions(self, area: Optional[Tuple[float, float, float, float]] = None) -> None:
        """Re-place objects in ``area`` (x, y, width, height) or, without an area, all of them."""
        if area is not None:
            self.invalidate_area(*area)
        else:
            everything = self.objects()
            self.reset()
            self.place_many(everything)
        self.process_pending_placements()

    def reset(self) -> None:
        """Clear the spatial index and the pending queue; registrations are kept."""
        self._spatial_index.clear()
        self._pending = []

    # ------------------------------------------------------------------

    def _commit(self, object_key: str, obj: Placeable, position: WorldPosition) -> None:
        width, height = footprint(obj)
        self._spatial_index.insert(object_key, position[0], position[1], width, height)
        obj.set_position(position[0], position[1])

    def _next_generated_id(self) -> str:
        while True:
            candidate = f"obj_{self._id_counter}"
            self._id_counter += 1
            if candidate not in self._objects:
                return candidate
