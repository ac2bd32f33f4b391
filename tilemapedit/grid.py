"""Operations on a map stored as a list of rows of tile ids."""

from collections.abc import Iterable

Grid = list[list[int]]


def validate(grid: Grid) -> None:
    """Raise ValueError unless the map is non-empty and rectangular."""
    if not grid:
        raise ValueError("Maps cannot be empty.")
    width = len(grid[0])
    if any(len(row) != width for row in grid[1:]):
        raise ValueError("Maps must be rectangular.")


def dot(grid: Grid, x: int, y: int, tile: int) -> bool:
    """Set one cell; return whether it changed."""
    if grid[x][y] == tile:
        return False
    grid[x][y] = tile
    return True


def draw_all(grid: Grid, positions: Iterable[tuple[int, int]], tile: int) -> bool:
    """Set every given cell; return whether any of them changed."""
    changed = False
    for x, y in positions:
        changed = dot(grid, x, y, tile) or changed
    return changed


def create(x: int, y: int, tile: int) -> Grid:
    """Build a map of x rows, each holding y copies of tile."""
    return [[tile] * y for _ in range(x)]


def in_bounds(lx: int, ly: int, x: int, y: int) -> bool:
    return 0 <= x < lx and 0 <= y < ly