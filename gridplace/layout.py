"""
Layout loading for JSON-defined tile worlds.

A layout file describes a tile map as ASCII rows plus an optional list of
objects to place on it. ``LayoutLoader`` turns it into a ``TileGrid`` and a
list of ``PlacedObject`` ready for ``PlacementController.place_many``.

Layout file structure:
```json
{
  "name": "Storeroom",
  "tile_size": 32,
  "rows": [
    "#######",
    "#.....#",
    "#######"
  ],
  "objects": [
    {"id": "chest", "x": 32, "y": 32, "width": 64, "height": 32, "priority": 2}
  ]
}
```

Usage:
    loader = LayoutLoader()
    world, objects = loader.load("storeroom")
    controller = PlacementController(world)
    controller.place_many(objects)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .config import Config
from .environment import TileGrid
from .placeable import PlacedObject
from .schemas import LayoutObject


class LayoutLoader:
    """Load and validate layouts from JSON files.

    Directory structure:
    - Default: Config.LAYOUTS_DIR ({PROJECT_ROOT}/examples/layouts/)
    - Override via constructor: LayoutLoader(Path("/custom/layouts"))
    - Layout files: {layout_name}.json

    Validation:
    - Required fields: name, rows
    - Rows must be a non-empty list of strings
    - Object entries must match ``LayoutObject`` and use unique ids
    - Raises ValueError if validation fails
    """

    def __init__(self, layouts_dir: Optional[Path] = None):
        self.layouts_dir = layouts_dir or Config.LAYOUTS_DIR

    def load(self, layout_name: str) -> Tuple[TileGrid, List[PlacedObject]]:
        """Load a layout by name (without the .json extension).

        Raises:
            FileNotFoundError: If the layout file doesn't exist in layouts_dir
            ValueError: If the layout is missing fields or malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        layout_path = self.layouts_dir / f"{layout_name}.json"

        if not layout_path.exists():
            raise FileNotFoundError(
                f"Layout '{layout_name}' not found at {layout_path}"
            )

        data = json.loads(layout_path.read_text())
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> Tuple[TileGrid, List[PlacedObject]]:
        """Build the world and objects from already-decoded layout data."""
        self._validate_layout(data)

        tile_size = int(data.get("tile_size", Config.TILE_SIZE))
        world = TileGrid.from_ascii(data["rows"], tile_size=tile_size)
        objects = self._parse_objects(data.get("objects", []))
        return world, objects

    def _validate_layout(self, data: Dict) -> None:
        required = ["name", "rows"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Layout missing required fields: {missing}")

        rows = data["rows"]
        if not isinstance(rows, list) or not rows:
            raise ValueError("Layout 'rows' must be a non-empty list of strings")

        if not all(isinstance(row, str) for row in rows):
            raise ValueError("Layout 'rows' must contain only strings")

        if "tile_size" in data and int(data["tile_size"]) <= 0:
            raise ValueError("Layout 'tile_size' must be positive")

    def _parse_objects(self, entries: List[Dict[str, Any]]) -> List[PlacedObject]:
        objects: List[PlacedObject] = []
        seen: set[str] = set()

        for entry in entries:
            try:
                parsed = LayoutObject(**entry)
            except ValidationError as exc:
                raise ValueError(f"Invalid layout object {entry!r}: {exc}") from exc

            if parsed.id in seen:
                raise ValueError(f"Duplicate layout object id '{parsed.id}'")
            seen.add(parsed.id)

            objects.append(
                PlacedObject(
                    x=parsed.x,
                    y=parsed.y,
                    width=parsed.width,
                    height=parsed.height,
                    priority=parsed.priority,
                    preferred=parsed.preferred,
                    object_id=parsed.id,
                )
            )

        return objects


def load_layout(path: Path) -> Tuple[TileGrid, List[PlacedObject]]:
    """Load a layout from an explicit file path."""
    path = Path(path)
    loader = LayoutLoader(layouts_dir=path.parent)
    return loader.load(path.stem)
