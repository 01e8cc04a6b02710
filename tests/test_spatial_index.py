"""Tests for GridSpatialIndex bookkeeping."""

import pytest

from gridplace import (
    GridSpatialIndex,
    IndexInvariantError,
    TileGrid,
    TileGridSystem,
    cell_range,
)

TILE = 32


def make_index() -> GridSpatialIndex:
    system = TileGridSystem(TileGrid.walled(10, 10, tile_size=TILE))
    return GridSpatialIndex(system, check_invariants=True)


def test_insert_and_query_single_cell():
    index = make_index()
    index.insert("obj1", 32, 32)

    assert index.query(32, 32) == {"obj1"}
    # Anywhere inside the same cell
    assert index.query(63, 63) == {"obj1"}
    assert "obj1" in index
    assert len(index) == 1


def test_remove_clears_object():
    index = make_index()
    index.insert("obj1", 32, 32)
    index.remove("obj1")

    assert index.query(32, 32) == set()
    assert "obj1" not in index
    assert index.occupied_cells() == []


def test_remove_unknown_id_is_noop():
    index = make_index()
    index.insert("obj1", 32, 32)

    index.remove("ghost")
    index.remove("ghost")

    assert index.query(32, 32) == {"obj1"}


def test_query_points_and_empty_area():
    index = make_index()
    index.insert("obj1", 32, 32)
    index.insert("obj2", 64, 64)
    index.insert("obj3", 32, 64)

    assert index.query(32, 32) == {"obj1"}
    assert index.query(64, 64) == {"obj2"}
    assert index.query(32, 64) == {"obj3"}
    assert index.query(100, 100) == set()


def test_area_query_returns_each_id_once():
    index = make_index()
    index.insert("obj1", 32, 32)
    index.insert("obj2", 64, 64)
    index.insert("obj3", 32, 64)
    index.insert("far", 256, 256)

    results = index.query(32, 32, 64, 64)

    assert results == {"obj1", "obj2", "obj3"}


def test_multi_cell_footprint_occupies_every_covered_cell():
    index = make_index()
    index.insert("obj1", 32, 32, TILE * 2, TILE * 2)

    for point in [(32, 32), (64, 32), (32, 64), (64, 64)]:
        assert "obj1" in index.query(*point)
    assert "obj1" not in index.query(96, 96)
    assert sorted(index.cells_for("obj1")) == [(1, 1), (1, 2), (2, 1), (2, 2)]


def test_every_point_inside_footprint_finds_object():
    index = make_index()
    footprints = {
        "crate": (40, 40, 10, 10),
        "table": (64, 96, 96, 32),
        "rug": (70, 150, 50, 70),
    }
    for object_id, (x, y, w, h) in footprints.items():
        index.insert(object_id, x, y, w, h)

    for object_id, (x, y, w, h) in footprints.items():
        for px in range(int(x), int(x + w), 8):
            for py in range(int(y), int(y + h), 8):
                assert object_id in index.query(px, py)

    for object_id, (x, y, w, h) in footprints.items():
        covered = index.cells_for(object_id)
        index.remove(object_id)
        for cell in covered:
            assert object_id not in index.occupants(cell)


def test_offset_anchor_spills_into_next_cell():
    index = make_index()
    # 40..71 spans cells 1 and 2 on both axes
    index.insert("obj1", 40, 40, TILE, TILE)

    assert sorted(index.cells_for("obj1")) == [(1, 1), (1, 2), (2, 1), (2, 2)]
    assert "obj1" in index.query(64, 64)


def test_reinsert_moves_object():
    index = make_index()
    index.insert("obj1", 32, 32)
    index.insert("obj1", 64, 64)

    assert index.query(32, 32) == set()
    assert index.query(64, 64) == {"obj1"}
    assert len(index) == 1
    assert index.get_record("obj1").x == 64


def test_reinsert_with_smaller_footprint_releases_old_cells():
    index = make_index()
    index.insert("obj1", 32, 32, TILE * 3, TILE * 3)
    index.insert("obj1", 32, 32)

    assert index.cells_for("obj1") == [(1, 1)]
    assert index.query(64, 64) == set()
    assert index.occupied_cells() == [(1, 1)]


def test_clear_removes_everything():
    index = make_index()
    index.insert("obj1", 32, 32)
    index.insert("obj2", 64, 64, TILE * 2, TILE)
    index.clear()

    assert index.query(32, 32) == set()
    assert index.query(64, 64) == set()
    assert index.query(0, 0, TILE * 10, TILE * 10) == set()
    assert len(index) == 0
    assert index.occupied_cells() == []


def test_degenerate_footprint_normalized_to_one_cell():
    index = make_index()
    index.insert("flat", 40, 40, 0, -5)

    assert index.cells_for("flat") == [(1, 1)]
    record = index.get_record("flat")
    assert record.width == 1
    assert record.height == 1
    assert index.query(40, 40, 0, 0) == {"flat"}


def test_empty_cells_are_pruned():
    index = make_index()
    index.insert("a", 32, 32)
    index.insert("b", 40, 40)

    assert index.occupants((1, 1)) == {"a", "b"}

    index.remove("a")
    assert index.occupants((1, 1)) == {"b"}

    index.remove("b")
    assert index.occupied_cells() == []


def test_occupants_returns_copy():
    index = make_index()
    index.insert("a", 32, 32)

    snapshot = index.occupants((1, 1))
    snapshot.add("intruder")

    assert index.occupants((1, 1)) == {"a"}


def test_corrupted_cell_fails_fast_on_remove():
    index = make_index()
    index.insert("obj1", 32, 32)

    # Simulate a bookkeeping bug
    index._cells[(1, 1)].discard("obj1")

    with pytest.raises(IndexInvariantError):
        index.remove("obj1")


def test_failed_remove_leaves_earlier_cells_untouched():
    index = make_index()
    index.insert("wide", 32, 32, 64, 32)

    # Second covered cell loses the id; the first must survive the failed remove
    index._cells[(2, 1)].discard("wide")

    with pytest.raises(IndexInvariantError, match=r"missing from cell \(2, 1\)"):
        index.remove("wide")

    assert index.occupants((1, 1)) == {"wide"}
    assert "wide" in index


def test_check_invariants_detects_stale_membership():
    index = make_index()
    index.insert("obj1", 32, 32)
    index._cells.setdefault((5, 5), set()).add("obj1")

    with pytest.raises(AssertionError, match="stale membership"):
        index.check_invariants()


def test_check_invariants_detects_empty_set():
    index = make_index()
    index._cells[(2, 2)] = set()

    with pytest.raises(IndexInvariantError, match="empty occupancy set"):
        index.check_invariants()


def test_cell_range_is_inclusive():
    system = TileGridSystem(TileGrid(width=4, height=4, tile_size=TILE))

    assert list(cell_range(system, 0, 0)) == [(0, 0)]
    assert list(cell_range(system, 0, 0, TILE * 2, TILE)) == [(0, 0), (1, 0)]
    assert list(cell_range(system, 0, 0, TILE + 1, 1)) == [(0, 0), (1, 0)]
