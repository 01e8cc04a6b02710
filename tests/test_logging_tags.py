"""Tests for console logging tags and verbosity gating."""

from __future__ import annotations

import pytest

from gridplace import PlacedObject, PlacementController, TileGrid
from gridplace.logging_utils import (
    Color,
    LOG_TAG_ERROR,
    LOG_TAG_PLACEMENT,
    colored,
    log_debug,
    log_error,
    log_info,
    log_success,
)


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("GRIDPLACE_VERBOSE", raising=False)
    monkeypatch.setenv("GRIDPLACE_NO_COLOR", "1")


def test_colored_respects_no_color(monkeypatch):
    assert colored("crate", Color.GREEN) == "crate"

    monkeypatch.delenv("GRIDPLACE_NO_COLOR")
    assert colored("crate", Color.GREEN) == "\033[92mcrate\033[0m"
    assert colored("crate", Color.RED, bold=True).startswith("\033[1m\033[91m")


def test_log_helpers_prefix_tags(capsys):
    log_success("shelf placed")
    log_error("barrel has nowhere to go")
    log_info("4 objects loaded")

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "[✓] shelf placed",
        "[!] barrel has nowhere to go",
        "[i] 4 objects loaded",
    ]


def test_log_debug_requires_verbose(monkeypatch, capsys):
    log_debug("hidden")
    assert capsys.readouterr().out == ""

    monkeypatch.setenv("GRIDPLACE_VERBOSE", "true")
    log_debug("shown")
    assert capsys.readouterr().out == f"{LOG_TAG_PLACEMENT} shown\n"

    monkeypatch.delenv("GRIDPLACE_VERBOSE")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    log_debug("shown again")
    assert "shown again" in capsys.readouterr().out


def test_controller_traces_placements_when_verbose(monkeypatch, capsys):
    world = TileGrid.walled(4, 4)
    controller = PlacementController(world)
    crate = PlacedObject(x=32, y=32, object_id="crate")

    controller.place(crate)
    assert capsys.readouterr().out == ""

    monkeypatch.setenv("GRIDPLACE_VERBOSE", "1")
    controller.move(crate, 0, 0)
    out = capsys.readouterr().out
    assert out.startswith(LOG_TAG_PLACEMENT)
    assert "crate: move to (0, 0) rejected" in out
    assert LOG_TAG_ERROR not in out
