"""
Gridplace Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    # Grid defaults
    TILE_SIZE: int = int(os.getenv("GRIDPLACE_TILE_SIZE", "32"))

    # Placement search
    # Name of a registered strategy ("nearest", "scan", "random")
    DEFAULT_STRATEGY: str = os.getenv("GRIDPLACE_STRATEGY", "nearest")
    MAX_ATTEMPTS: int = int(os.getenv("GRIDPLACE_MAX_ATTEMPTS", "100"))
    # Ring radius in cells for the nearest strategy; 0 means the whole grid
    SEARCH_RADIUS_CELLS: int = int(os.getenv("GRIDPLACE_SEARCH_RADIUS", "0"))
    NEXT_BEST_RADIUS_CELLS: int = int(os.getenv("GRIDPLACE_NEXT_BEST_RADIUS", "5"))
    RANDOM_SEED: int = int(os.getenv("GRIDPLACE_RANDOM_SEED", "0"))

    # Debugging
    CHECK_INVARIANTS: bool = _env_flag("GRIDPLACE_CHECK_INVARIANTS")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LAYOUTS_DIR: Path = PROJECT_ROOT / "examples" / "layouts"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.TILE_SIZE <= 0:
            raise ValueError(
                f"GRIDPLACE_TILE_SIZE must be positive, got {cls.TILE_SIZE}"
            )

        if cls.MAX_ATTEMPTS <= 0:
            raise ValueError(
                f"GRIDPLACE_MAX_ATTEMPTS must be positive, got {cls.MAX_ATTEMPTS}"
            )

        if cls.SEARCH_RADIUS_CELLS < 0 or cls.NEXT_BEST_RADIUS_CELLS < 0:
            raise ValueError(
                "GRIDPLACE_SEARCH_RADIUS and GRIDPLACE_NEXT_BEST_RADIUS must not be negative"
            )

        # Imported lazily: strategies reads Config at import time
        from .strategies import available_strategies

        if cls.DEFAULT_STRATEGY not in available_strategies():
            raise ValueError(
                f"GRIDPLACE_STRATEGY '{cls.DEFAULT_STRATEGY}' is not a registered strategy. "
                f"Choose one of: {', '.join(available_strategies())}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Gridplace Configuration:",
            f"  Tile Size: {cls.TILE_SIZE}",
            f"  Strategy: {cls.DEFAULT_STRATEGY}",
            f"  Max Attempts: {cls.MAX_ATTEMPTS}",
            f"  Search Radius: {cls.SEARCH_RADIUS_CELLS or 'whole grid'}",
            f"  Next-best Radius: {cls.NEXT_BEST_RADIUS_CELLS}",
            f"  Check Invariants: {cls.CHECK_INVARIANTS}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
