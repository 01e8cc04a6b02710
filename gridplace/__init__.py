"""
Gridplace - grid spatial index and object placement for tile worlds.

Track multi-cell objects on a uniform grid, answer "what is here" queries,
and find valid positions for new or moved objects through pluggable
constraints and search strategies.

The world model, grid system and index are injected by the caller; only
``LayoutLoader`` touches the filesystem.
"""

__version__ = "0.1.0"

# Main entry point
from .controller import PlacementController

# Coordinates and indexing
from .coordinates import GridSystem, TileGridSystem, GridPosition, WorldPosition
from .spatial_index import SpatialIndex, GridSpatialIndex, IndexInvariantError, cell_range

# Constraints
from .constraints import (
    PlacementConstraint,
    PlacementContext,
    WalkableConstraint,
    NotOccupiedConstraint,
    WithinBoundsConstraint,
    constraints_satisfied,
    constraints_satisfied_at,
    describe_constraints,
)

# Strategies
from .strategies import (
    PlacementStrategy,
    ScanPlacementStrategy,
    NearestPlacementStrategy,
    RandomPlacementStrategy,
    register_strategy,
    get_strategy,
    available_strategies,
)

# Placeables
from .placeable import (
    Placeable,
    PlacedObject,
    HasPreferredPosition,
    HasPlacementPriority,
    HasPlacementConstraints,
    HasFootprint,
    HasObjectId,
    HasSerialization,
)

# World model
from .environment import (
    GridTile,
    TileGrid,
    GridTileState,
    TileGridState,
    WalkabilitySource,
    render_occupancy_window,
)

# Schemas
from .schemas import TrackedObject, PlacementOutcome, LayoutObject

# Layout loader helpers
from .layout import LayoutLoader, load_layout

__all__ = [
    # Main class
    "PlacementController",
    # Coordinates and indexing
    "GridSystem",
    "TileGridSystem",
    "GridPosition",
    "WorldPosition",
    "SpatialIndex",
    "GridSpatialIndex",
    "IndexInvariantError",
    "cell_range",
    # Constraints
    "PlacementConstraint",
    "PlacementContext",
    "WalkableConstraint",
    "NotOccupiedConstraint",
    "WithinBoundsConstraint",
    "constraints_satisfied",
    "constraints_satisfied_at",
    "describe_constraints",
    # Strategies
    "PlacementStrategy",
    "ScanPlacementStrategy",
    "NearestPlacementStrategy",
    "RandomPlacementStrategy",
    "register_strategy",
    "get_strategy",
    "available_strategies",
    # Placeables
    "Placeable",
    "PlacedObject",
    "HasPreferredPosition",
    "HasPlacementPriority",
    "HasPlacementConstraints",
    "HasFootprint",
    "HasObjectId",
    "HasSerialization",
    # World model
    "GridTile",
    "TileGrid",
    "GridTileState",
    "TileGridState",
    "WalkabilitySource",
    "render_occupancy_window",
    # Schemas
    "TrackedObject",
    "PlacementOutcome",
    "LayoutObject",
    # Layout helpers
    "LayoutLoader",
    "load_layout",
]
