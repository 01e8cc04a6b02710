"""
Placement strategies: turn a constraint set into a concrete position.

Every strategy follows the same policy:
1. If the placeable reports a preferred position and that position satisfies
   every constraint, return it unchanged.
2. Otherwise walk a bounded, deterministic sequence of candidate cells and
   return the world origin of the first cell that satisfies every constraint.
3. If the candidates run out, return None. Running out of room is an
   expected outcome, not an error.

Creating a strategy
~~~~~~~~~~~~~~~~~~~
1. Subclass ``PlacementStrategy``, set ``name``, implement ``candidate_cells()``
2. Decorate with ``@register_strategy``
3. Select it by name via ``get_strategy()`` or ``GRIDPLACE_STRATEGY``
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Type

from .config import Config
from .constraints import (
    PlacementConstraint,
    PlacementContext,
    constraints_satisfied,
    constraints_satisfied_at,
)
from .coordinates import GridPosition, WorldPosition
from .logging_utils import log_debug
from .placeable import Placeable, placement_constraints, preferred_position


_STRATEGY_REGISTRY: Dict[str, Type["PlacementStrategy"]] = {}


def register_strategy(cls: Type["PlacementStrategy"]) -> Type["PlacementStrategy"]:
    """Class decorator adding a strategy to the by-name registry."""
    if cls.name in _STRATEGY_REGISTRY:
        raise ValueError(f"Strategy name '{cls.name}' is already registered")
    _STRATEGY_REGISTRY[cls.name] = cls
    return cls


def available_strategies() -> List[str]:
    return sorted(_STRATEGY_REGISTRY)


def get_strategy(name: str, **kwargs) -> "PlacementStrategy":
    """Instantiate a registered strategy by name.

    Raises:
        ValueError: If no strategy is registered under ``name``
    """
    try:
        strategy_cls = _STRATEGY_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown placement strategy '{name}'. "
            f"Available: {', '.join(available_strategies())}"
        ) from None
    return strategy_cls(**kwargs)


class PlacementStrategy(ABC):
    """Abstract base for placement strategies.

    Subclasses only decide the order in which cells are tried. Constraint
    checks, the preferred-position shortcut and failure reporting are shared.
    """

    name: str = "unnamed"

    def get_name(self) -> str:
        return self.name

    def find_position(
        self,
        context: PlacementContext,
        placeable: Placeable,
        constraints: Optional[Sequence[PlacementConstraint]] = None,
    ) -> Optional[WorldPosition]:
        """Find a valid world position for ``placeable``.

        Args:
            context: Source of the grid system and spatial index
            placeable: Object being placed
            constraints: Constraints to satisfy; defaults to the placeable's own

        Returns:
            World position, or None when no candidate satisfies the constraints
        """
        if constraints is None:
            constraints = placement_constraints(placeable)
        grid_system = context.get_grid_system()

        preferred = preferred_position(placeable)
        if preferred is not None and constraints_satisfied_at(preferred, constraints, context):
            return preferred

        for cell in self.candidate_cells(context, placeable):
            if constraints_satisfied(cell, constraints, context):
                return grid_system.grid_to_world(cell)

        log_debug(f"{self.name}: no cell satisfies constraints")
        return None

    @abstractmethod
    def candidate_cells(self, context: PlacementContext, placeable: Placeable) -> Iterator[GridPosition]:
        """Yield in-grid cells to try, in a deterministic order."""


@register_strategy
class ScanPlacementStrategy(PlacementStrategy):
    """Row-major scan from the grid origin (top row first, left to right)."""

    name = "scan"

    def __init__(self, max_candidates: Optional[int] = None):
        self.max_candidates = max_candidates

    def candidate_cells(self, context: PlacementContext, placeable: Placeable) -> Iterator[GridPosition]:
        columns, rows = context.get_grid_system().get_grid_size()
        tried = 0
        for y in range(rows):
            for x in range(columns):
                if self.max_candidates is not None and tried >= self.max_candidates:
                    return
                tried += 1
                yield x, y


@register_strategy
class NearestPlacementStrategy(PlacementStrategy):
    """Expanding square rings around the object's preferred or current cell.

    Ring ``r`` holds the cells at Chebyshev distance ``r``; within a ring,
    cells are visited column by column (dx outer, dy inner). ``max_radius`` of
    None searches until the ring covers the whole grid.
    """

    name = "nearest"

    def __init__(self, max_radius: Optional[int] = None):
        if max_radius is None and Config.SEARCH_RADIUS_CELLS > 0:
            max_radius = Config.SEARCH_RADIUS_CELLS
        self.max_radius = max_radius

    def candidate_cells(self, context: PlacementContext, placeable: Placeable) -> Iterator[GridPosition]:
        grid_system = context.get_grid_system()
        anchor = preferred_position(placeable) or placeable.get_position()
        center = grid_system.world_to_grid(*anchor)
        yield from ring_cells(center, grid_system.get_grid_size(), self.max_radius)


def ring_cells(
    center: GridPosition,
    grid_size: Tuple[int, int],
    max_radius: Optional[int] = None,
) -> Iterator[GridPosition]:
    """Yield in-grid cells in expanding rings around ``center``.

    Without ``max_radius`` the rings stop once they reach the far corner of
    the grid, so every in-grid cell is yielded exactly once.
    """
    columns, rows = grid_size
    cx, cy = center
    reach = max(abs(cx), abs(cx - (columns - 1)), abs(cy), abs(cy - (rows - 1)))
    limit = reach if max_radius is None else min(max_radius, reach)

    for radius in range(limit + 1):
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if abs(dx) != radius and abs(dy) != radius:
                    continue
                x, y = cx + dx, cy + dy
                if 0 <= x < columns and 0 <= y < rows:
                    yield x, y


@register_strategy
class RandomPlacementStrategy(PlacementStrategy):
    """Random cells from a seeded generator.

    A fresh ``random.Random(seed)`` is created for every search, so repeated
    calls against the same grid state try the same cells in the same order.
    """

    name = "random"

    def __init__(self, max_attempts: Optional[int] = None, seed: Optional[int] = None):
        self.max_attempts = Config.MAX_ATTEMPTS if max_attempts is None else max_attempts
        self.seed = Config.RANDOM_SEED if seed is None else seed

    def candidate_cells(self, context: PlacementContext, placeable: Placeable) -> Iterator[GridPosition]:
        columns, rows = context.get_grid_system().get_grid_size()
        if columns <= 0 or rows <= 0:
            return
        rng = random.Random(self.seed)
        for _ in range(self.max_attempts):
            yield rng.randrange(columns), rng.randrange(rows)
