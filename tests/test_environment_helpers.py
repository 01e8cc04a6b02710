"""Tests for the tile grid world model and diagnostic helpers."""

from gridplace.environment import (
    GridTile,
    GridTileState,
    TileGrid,
    TileGridState,
    WalkabilitySource,
    render_occupancy_window,
)
from gridplace import GridSpatialIndex, TileGridSystem


def test_walled_grid_has_open_interior():
    grid = TileGrid.walled(4, 3)

    assert isinstance(grid, WalkabilitySource)
    assert grid.is_walkable(1, 1) is True
    assert grid.is_walkable(2, 1) is True
    assert grid.is_walkable(0, 1) is False
    assert grid.is_walkable(3, 2) is False
    # Out of bounds is never walkable
    assert grid.is_walkable(4, 1) is False
    assert grid.is_walkable(-1, 1) is False


def test_missing_tiles_are_floor():
    grid = TileGrid(width=3, height=3, tiles={(1, 1): GridTile(collision=True)})

    assert grid.is_walkable(0, 0) is True
    assert grid.is_walkable(1, 1) is False
    assert grid.get_tile(2, 2) is None


def test_set_blocked_and_ensure_walkable():
    grid = TileGrid(width=3, height=3)

    grid.set_blocked(1, 2)
    assert grid.is_walkable(1, 2) is False
    assert grid.get_tile(1, 2).kind == "wall"

    grid.ensure_walkable(1, 2)
    assert grid.is_walkable(1, 2) is True

    # Clearing an untouched tile does not create an entry
    grid.ensure_walkable(0, 0)
    assert grid.get_tile(0, 0) is None


def test_from_ascii():
    grid = TileGrid.from_ascii(
        [
            "#####",
            "#..#",
            "#####",
        ],
        tile_size=16,
    )

    assert (grid.width, grid.height, grid.tile_size) == (5, 3, 16)
    assert grid.is_walkable(1, 1) is True
    assert grid.is_walkable(3, 1) is False
    # Short row padded with floor
    assert grid.is_walkable(4, 1) is True


def test_state_conversion_preserves_walls():
    grid = TileGrid.walled(3, 3)
    grid.tiles[(1, 1)] = GridTile(kind="door", metadata={"locked": "no"})

    state = grid.to_state()
    assert isinstance(state, TileGridState)
    assert state.tiles[(0, 0)].collision is True

    restored = TileGrid.from_state(state)
    assert restored.is_walkable(0, 0) is False
    assert restored.is_walkable(1, 1) is True
    assert restored.get_tile(1, 1).metadata == {"locked": "no"}

    built = TileGrid.from_state(
        TileGridState(width=2, height=1, tiles={(1, 0): GridTileState(collision=True)})
    )
    assert built.is_walkable(0, 0) is True
    assert built.is_walkable(1, 0) is False


def test_render_occupancy_window_outputs_symbols():
    grid = TileGrid.from_ascii(["#####", "#...#", "#####"])
    system = TileGridSystem(grid)
    index = GridSpatialIndex(system)
    index.insert("a", 32, 32)
    index.insert("b", 64, 32)
    index.insert("c", 70, 40)

    window = render_occupancy_window(index, system, (2, 1), radius=2)

    assert window.splitlines() == [
        "██" * 5,
        "██" + "[]" + "<>" + ". " + "██",
        "██" * 5,
    ]


def test_render_occupancy_window_custom_symbols_and_clipping():
    grid = TileGrid.from_ascii(["...", "..."])
    system = TileGridSystem(grid)
    index = GridSpatialIndex(system)
    index.insert("a", 0, 0)

    window = render_occupancy_window(
        index, system, (0, 0), radius=1, symbols={"occupied": "A ", "floor": "  "}
    )

    assert window.splitlines() == ["A   ", "    "]
