"""Tile definitions: id, display name and background colour."""

import re
import tomllib
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Iterator

from tilemapedit.errors import CommandError

_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class Tile:
    id: int
    name: str
    color: int


@dataclass(frozen=True)
class TileSet:
    """An ordered collection of tiles."""

    tiles: tuple[Tile, ...]

    def __init__(self, tiles: Iterable[Tile]) -> None:
        object.__setattr__(self, "tiles", tuple(tiles))

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def by_name(self, name: str) -> Tile | None:
        """First tile whose name matches, ignoring case."""
        wanted = name.lower()
        return next((t for t in self.tiles if t.name.lower() == wanted), None)

    def by_id(self, tile_id: int) -> Tile | None:
        return next((t for t in self.tiles if t.id == tile_id), None)

    def parse(self, text: str) -> int:
        """Resolve a tile name or number to a tile id.

        Raises CommandError when neither names a known tile.
        """
        tile = self.by_name(text)
        if tile is not None:
            return tile.id
        if not _UNSIGNED.fullmatch(text):
            raise CommandError(f"Parse error: {text} is not a valid tile.")
        number = int(text)
        if self.by_id(number) is None:
            raise CommandError(f"Parse error: invalid tile number {number}.")
        return number


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _tile_from_entry(entry: object) -> Tile:
    if not isinstance(entry, list) or len(entry) != 3:
        raise ValueError(f"tile entry must be [id, name, color], got {entry!r}")
    tile_id, name, color = entry
    if not _is_int(tile_id) or not isinstance(name, str) or not _is_int(color):
        raise ValueError(f"tile entry must be [id, name, color], got {entry!r}")
    if not 0 <= color <= 0xFFFFFFFF:
        raise ValueError(f"tile colour out of range in {entry!r}")
    return Tile(tile_id, name, color)


def loads_tiles(text: str) -> TileSet:
    """Read a tile set from TOML text holding a ``tiles`` array of [id, name, color]."""
    data = tomllib.loads(text)
    entries = data.get("tiles")
    if not isinstance(entries, list):
        raise ValueError("tile data must have a 'tiles' array")
    return TileSet(_tile_from_entry(entry) for entry in entries)


def load_tiles(path: str | PathLike[str]) -> TileSet:
    """Read a tile set from a TOML file."""
    with open(path, "rb") as handle:
        data = handle.read()
    return loads_tiles(data.decode("utf-8"))