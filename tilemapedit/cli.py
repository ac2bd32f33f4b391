"""Command-line entry point for the tile map editor."""

from __future__ import annotations

import contextlib
import curses
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from tilemapedit.errors import CommandError
from tilemapedit.state import State
from tilemapedit.tiles import TileSet, load_tiles
from tilemapedit.ui import run

NAME = "tilemapedit"
VERSION = "0.1.0"
HELP = "Usage: tilemapedit --help|--version|<path>"
TILES_VARIABLE = "TILEMAPEDIT_TILES"


def launch(path: str | None, tiles: TileSet) -> None:
    """Open the editor in the terminal, starting with the map at ``path`` if given."""
    state = State(tiles=tiles)
    if path is not None:
        if Path(path).exists():
            with contextlib.suppress(CommandError):
                state.open([path])
        else:
            state.path = path
    curses.wrapper(run, state)


def _tile_set() -> TileSet:
    location = os.environ.get(TILES_VARIABLE)
    if not location:
        return TileSet(())
    return load_tiles(location)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if "--help" in args or "-h" in args:
        print(HELP)
        return 0
    if "--version" in args or "-V" in args:
        print(f"{NAME} {VERSION}")
        return 0
    try:
        tiles = _tile_set()
    except (OSError, ValueError) as err:
        print(f"Could not load tiles: {err}.", file=sys.stderr)
        return 1
    try:
        launch(args[0] if args else None, tiles)
    except OSError as err:
        print(f"An IO error has occurred: {err}.", file=sys.stderr)
    return 0