"""Grid-based spatial index.

Tracks which cells every object covers and, in reverse, which objects cover
every cell. Footprints are expanded into an inclusive cell range on insert so
that area queries only touch the cells in the query rectangle instead of
scanning every tracked object.

Re-inserting a known id is the only way to move it: the old cells are
released first, so the cell map always reflects current positions exactly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Set

from .config import Config
from .coordinates import GridPosition, GridSystem
from .schemas import TrackedObject


class IndexInvariantError(AssertionError):
    """Raised when object records and cell occupancy disagree.

    This always points at a bug in the index itself, never at caller input.
    """

    def __init__(self, object_id: str, detail: str) -> None:
        self.object_id = object_id
        self.detail = detail
        super().__init__(f"Spatial index out of sync for '{object_id}': {detail}")


def cell_range(
    grid_system: GridSystem,
    x: float,
    y: float,
    width: float = 1,
    height: float = 1,
) -> Iterator[GridPosition]:
    """Yield every cell covered by a rectangle, inclusive on both ends.

    The start cell holds the anchor, the end cell holds the last world unit
    of the footprint (``x + width - 1``). Footprints below one unit cover a
    single cell.
    """
    start_x, start_y = grid_system.world_to_grid(x, y)
    end_x, end_y = grid_system.world_to_grid(
        x + max(width - 1, 0),
        y + max(height - 1, 0),
    )
    for cell_x in range(start_x, end_x + 1):
        for cell_y in range(start_y, end_y + 1):
            yield cell_x, cell_y


class SpatialIndex(ABC):
    """Interface for spatial indexes tracking object positions by id."""

    @abstractmethod
    def insert(self, object_id: str, x: float, y: float, width: float = 1, height: float = 1) -> None:
        """Track ``object_id`` at (x, y); re-inserting an id moves it."""

    @abstractmethod
    def remove(self, object_id: str) -> None:
        """Stop tracking ``object_id``. Unknown ids are ignored."""

    @abstractmethod
    def query(self, x: float, y: float, width: float = 1, height: float = 1) -> Set[str]:
        """Return ids whose footprint shares a cell with the rectangle."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every tracked object."""


class GridSpatialIndex(SpatialIndex):
    """Uniform-grid SpatialIndex bound to a GridSystem."""

    def __init__(self, grid_system: GridSystem, check_invariants: Optional[bool] = None):
        self.grid_system = grid_system
        self.check_invariants_on_write = (
            Config.CHECK_INVARIANTS if check_invariants is None else check_invariants
        )
        # id -> positional record
        self._objects: Dict[str, TrackedObject] = {}
        # cell -> ids covering it. Empty sets are pruned, never stored.
        self._cells: Dict[GridPosition, Set[str]] = {}

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    def insert(self, object_id: str, x: float, y: float, width: float = 1, height: float = 1) -> None:
        record = TrackedObject(object_id=object_id, x=x, y=y, width=width, height=height)
        if object_id in self._objects:
            self.remove(object_id)

        for cell in self._cells_of(record):
            self._cells.setdefault(cell, set()).add(object_id)
        self._objects[object_id] = record

        if self.check_invariants_on_write:
            self.check_invariants()

    def remove(self, object_id: str) -> None:
        record = self._objects.get(object_id)
        if record is None:
            return

        cells = list(self._cells_of(record))
        # Verify every cell before mutating any
        for cell in cells:
            if object_id not in self._cells.get(cell, ()):
                raise IndexInvariantError(object_id, f"missing from cell {cell}")

        for cell in cells:
            occupants = self._cells[cell]
            occupants.discard(object_id)
            if not occupants:
                del self._cells[cell]

        del self._objects[object_id]

        if self.check_invariants_on_write:
            self.check_invariants()

    def query(self, x: float, y: float, width: float = 1, height: float = 1) -> Set[str]:
        found: Set[str] = set()
        for cell in cell_range(self.grid_system, x, y, width, height):
            occupants = self._cells.get(cell)
            if occupants:
                found.update(occupants)
        return found

    def clear(self) -> None:
        # Rebind both maps together so no half-cleared state is ever visible
        self._objects, self._cells = {}, {}

    def get_record(self, object_id: str) -> Optional[TrackedObject]:
        return self._objects.get(object_id)

    def object_ids(self) -> List[str]:
        return list(self._objects)

    def cells_for(self, object_id: str) -> List[GridPosition]:
        """Return the cells ``object_id`` covers, or an empty list if unknown."""
        record = self._objects.get(object_id)
        if record is None:
            return []
        return list(self._cells_of(record))

    def occupants(self, cell: GridPosition) -> Set[str]:
        """Return a copy of the ids covering ``cell``."""
        return set(self._cells.get(cell, ()))

    def occupied_cells(self) -> List[GridPosition]:
        return sorted(self._cells)

    def check_invariants(self) -> None:
        """Verify cell occupancy matches the object records exactly.

        Raises:
            IndexInvariantError: on stale, missing or empty cell entries
        """
        expected: Dict[GridPosition, Set[str]] = {}
        for object_id, record in self._objects.items():
            for cell in self._cells_of(record):
                expected.setdefault(cell, set()).add(object_id)

        for cell, occupants in self._cells.items():
            if not occupants:
                raise IndexInvariantError("<none>", f"empty occupancy set retained at {cell}")
            stale = occupants - expected.get(cell, set())
            if stale:
                raise IndexInvariantError(sorted(stale)[0], f"stale membership in cell {cell}")

        for cell, ids in expected.items():
            missing = ids - self._cells.get(cell, set())
            if missing:
                raise IndexInvariantError(sorted(missing)[0], f"missing from cell {cell}")

    def _cells_of(self, record: TrackedObject) -> Iterator[GridPosition]:
        return cell_range(self.grid_system, record.x, record.y, record.width, record.height)
