"""Logging utilities for gridplace.

Provides color-coded output to distinguish placement outcomes in the console.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Placement search and index mutations
    RED = "\033[91m"       # Failures and invariant problems
    GREEN = "\033[92m"     # Successful placements
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if GRIDPLACE_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("GRIDPLACE_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def verbose_enabled() -> bool:
    """Return True when GRIDPLACE_VERBOSE is truthy or LOG_LEVEL is DEBUG."""
    if os.getenv("LOG_LEVEL", "").upper() == "DEBUG":
        return True
    return os.getenv("GRIDPLACE_VERBOSE", "").lower() in ("1", "true", "yes")


def log_deterministic(message: str) -> None:
    """Log a placement or index operation (blue)."""
    print(colored(f"{LOG_TAG_PLACEMENT} {message}", Color.BLUE))


def log_error(message: str) -> None:
    """Log a failure (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


def log_debug(message: str) -> None:
    """Log a placement trace line, only when GRIDPLACE_VERBOSE is enabled."""
    if verbose_enabled():
        log_deterministic(message)


# Markers for operation types (color-blind accessible)
LOG_TAG_PLACEMENT = "[•]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
