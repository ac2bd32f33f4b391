"""Argument parsing and the cell sets covered by the drawing shapes."""

import re
from collections.abc import Sequence
from enum import Enum

from tilemapedit.errors import CommandError

_UNSIGNED = re.compile(r"\+?[0-9]+")
_USIZE_MAX = 2**64 - 1

Position = tuple[int, int]


class Direction(Enum):
    LEFT = "left"
    DOWN = "down"
    UP = "up"
    RIGHT = "right"


_DIRECTIONS = {
    "left": Direction.LEFT,
    "h": Direction.LEFT,
    "down": Direction.DOWN,
    "j": Direction.DOWN,
    "up": Direction.UP,
    "k": Direction.UP,
    "right": Direction.RIGHT,
    "l": Direction.RIGHT,
}


def parse_direction(arg: str) -> Direction:
    """Read a direction name or its vi key, ignoring case."""
    try:
        return _DIRECTIONS[arg.lower()]
    except KeyError:
        raise CommandError(
            f"Parse error: {arg} is not a direction, options are Left, Down, Up, Right."
        ) from None


def parse_usize(arg: str) -> int:
    """Read a non-negative integer that fits in 64 bits."""
    if _UNSIGNED.fullmatch(arg):
        value = int(arg)
        if value <= _USIZE_MAX:
            return value
    raise CommandError(f"Parse error: {arg} is not an integer.")


def parse_fill(args: Sequence[str]) -> bool:
    """Read the optional fifth argument of a shape command."""
    if len(args) <= 4:
        return False
    if args[4] in ("fill", "true"):
        return True
    raise CommandError("Invalid argument, the only option is fill (optional).")


_NEIGHBOURS = ((-1, 0), (0, -1), (1, 0), (0, 1))


def fuzzy_positions(
    grid: list[list[int]], row: int, col: int, steps: int | None = None
) -> set[Position]:
    """Cells connected to (row, col) through cells of the same tile.

    With ``steps`` set, the search stops after that many rings of cells;
    without it, the whole connected region is returned.
    """
    tile = grid[row][col]
    height = len(grid)
    width = len(grid[0])
    reached: set[Position] = set()
    frontier: set[Position] = {(row, col)}
    remaining = -1 if steps is None else steps
    while frontier and remaining != 0:
        remaining -= 1
        reached |= frontier
        frontier = {
            (ni, nj)
            for i, j in frontier
            for di, dj in _NEIGHBOURS
            for ni, nj in ((i + di, j + dj),)
            if 0 <= ni < height
            and 0 <= nj < width
            and (ni, nj) not in reached
            and grid[ni][nj] == tile
        }
    return reached


def box_positions(x0: int, y0: int, x1: int, y1: int, fill: bool) -> list[Position]:
    """Cells of a rectangle as (row, column), outline or filled."""
    if fill:
        return [(y, x) for y in range(y0, y1 + 1) for x in range(x0, x1 + 1)]
    rows = range(y0, y1 + 1)
    inner = range(x0 + 1, x1)
    return (
        [(y, x0) for y in rows]
        + [(y, x1) for y in rows]
        + [(y0, x) for x in inner]
        + [(y1, x) for x in inner]
    )


def ellipse_positions(
    x0: int, y0: int, x1: int, y1: int, fill: bool
) -> list[Position]:
    """Cells of the ellipse inscribed in a bounding box, by midpoint stepping."""
    a = abs(x1 - x0)
    b = abs(y1 - y0)
    bp = b & 1
    dx = 4 * (1 - a) * b * b
    dy = 4 * (bp + 1) * a * a
    err = dx + dy + bp * a * a
    if x0 > x1:
        x0, x1 = x1, x0
    top = min(y0, y1) + (b + 1) // 2
    bottom = top - bp
    step_a = 8 * a * a
    step_b = 8 * b * b
    positions: list[Position] = []
    while x0 <= x1:
        if fill:
            span = range(x0, x1 + 1)
            positions.extend((x, top) for x in span)
            positions.extend((x, bottom) for x in span)
        else:
            positions.extend([(x1, top), (x0, top), (x0, bottom), (x1, bottom)])
        e2 = 2 * err
        if e2 <= dy:
            top += 1
            bottom -= 1
            dy += step_a
            err += dy
        if e2 >= dx or 2 * err > dy:
            x0 += 1
            x1 -= 1
            dx += step_b
            err += dx
    return positions