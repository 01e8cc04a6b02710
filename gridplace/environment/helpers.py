"""Diagnostic helpers for tile grids and spatial indexes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from ..coordinates import GridSystem
    from ..spatial_index import GridSpatialIndex


_DEFAULT_CELL_SYMBOLS: Dict[str, str] = {
    "wall": "██",
    "floor": ". ",
    "occupied": "[]",
    "crowded": "<>",
}


def render_occupancy_window(
    index: "GridSpatialIndex",
    grid_system: "GridSystem",
    center: Tuple[int, int],
    *,
    radius: int,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render an ASCII window of walls and occupied cells around ``center``.

    Each cell is two characters wide. Cells holding more than one id use the
    ``crowded`` symbol; blocked cells use ``wall``. Rows run top to bottom in
    increasing y, matching ``TileGrid.from_ascii``.
    """

    radius = max(int(radius), 0)

    mapping = {**_DEFAULT_CELL_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    columns, rows = grid_system.get_grid_size()
    cx, cy = center
    min_x = max(0, cx - radius)
    max_x = min(columns - 1, cx + radius)
    min_y = max(0, cy - radius)
    max_y = min(rows - 1, cy + radius)

    lines: List[str] = []
    for y in range(min_y, max_y + 1):
        row_chars: List[str] = []
        for x in range(min_x, max_x + 1):
            occupants = index.occupants((x, y))
            if len(occupants) > 1:
                row_chars.append(mapping["crowded"])
            elif occupants:
                row_chars.append(mapping["occupied"])
            elif not grid_system.is_valid_position((x, y)):
                row_chars.append(mapping["wall"])
            else:
                row_chars.append(mapping["floor"])
        lines.append("".join(row_chars))

    return "\n".join(lines)
