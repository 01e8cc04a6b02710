"""
Storeroom placement demo

Loads the storeroom layout, places its objects by priority, moves one of
them, and prints the occupancy map after each step.

Run: python examples/storeroom/run.py [strategy]
"""

import sys

from gridplace import (
    LayoutLoader,
    PlacementController,
    get_strategy,
    render_occupancy_window,
)
from gridplace.config import Config
from gridplace.logging_utils import log_error, log_info, log_success


def print_map(controller: PlacementController) -> None:
    columns, rows = controller.get_grid_system().get_grid_size()
    radius = max(columns, rows)
    print(
        render_occupancy_window(
            controller.get_spatial_index(),
            controller.get_grid_system(),
            (columns // 2, rows // 2),
            radius=radius,
        )
    )


def main() -> None:
    strategy_name = sys.argv[1] if len(sys.argv) > 1 else Config.DEFAULT_STRATEGY
    Config.validate()
    log_info(Config.display())

    world, objects = LayoutLoader().load("storeroom")
    controller = PlacementController(world, strategy=get_strategy(strategy_name))

    for outcome in controller.place_many(objects):
        if outcome.placed:
            log_success(f"{outcome.object_id} placed at ({outcome.x}, {outcome.y})")
        else:
            log_error(f"{outcome.object_id} could not be placed, queued for later")

    print_map(controller)

    barrel = controller.get_object("barrel")
    if barrel is not None:
        if controller.move(barrel, 32, 192):
            log_success("barrel moved to (32, 192)")
        else:
            log_error("barrel cannot move to (32, 192)")
        print_map(controller)


if __name__ == '__main__':
    main()
