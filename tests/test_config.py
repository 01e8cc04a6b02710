"""Tests for Config validation and display."""

import pytest

from gridplace.config import Config


def test_defaults_validate():
    Config.validate()


@pytest.mark.parametrize(
    "attribute, value, message",
    [
        ("TILE_SIZE", 0, "GRIDPLACE_TILE_SIZE"),
        ("MAX_ATTEMPTS", -1, "GRIDPLACE_MAX_ATTEMPTS"),
        ("SEARCH_RADIUS_CELLS", -2, "must not be negative"),
        ("DEFAULT_STRATEGY", "teleport", "not a registered strategy"),
    ],
)
def test_invalid_values_raise(monkeypatch, attribute, value, message):
    monkeypatch.setattr(Config, attribute, value)

    with pytest.raises(ValueError, match=message):
        Config.validate()


def test_display_lists_settings(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_STRATEGY", "scan")
    monkeypatch.setattr(Config, "SEARCH_RADIUS_CELLS", 0)

    text = Config.display()

    assert text.splitlines()[0] == "Gridplace Configuration:"
    assert "  Strategy: scan" in text
    assert "  Search Radius: whole grid" in text
    assert "  Log Level:" in text
