"""Copied tiles, kept relative to the cursor position at the time of copying."""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class Clipboard:
    """Tiles keyed by (row, column) with the cursor column and row they were copied at."""

    content: dict[tuple[int, int], int] = field(default_factory=dict)
    offsetx: int = 0
    offsety: int = 0

    def __len__(self) -> int:
        return len(self.content)

    def _remap(self, move) -> None:
        self.content = {move(i, j): tile for (i, j), tile in self.content.items()}

    def rotate_anticlockwise(self) -> None:
        ox, oy = self.offsetx, self.offsety
        self._remap(lambda i, j: (j - ox + oy, -i + ox + oy))

    def rotate_clockwise(self) -> None:
        ox, oy = self.offsetx, self.offsety
        self._remap(lambda i, j: (-j + ox + oy, i - ox + oy))

    def reflect_horizontal(self) -> None:
        """Mirror columns about the copy column."""
        ox = self.offsetx
        self._remap(lambda i, j: (i, -j + 2 * ox))

    def reflect_vertical(self) -> None:
        """Mirror rows about the copy row."""
        oy = self.offsety
        self._remap(lambda i, j: (-i + 2 * oy, j))

    def placements(self, row: int, col: int) -> Iterator[tuple[int, int, int]]:
        """Yield (row, column, tile) for pasting with the cursor at (row, col)."""
        drow = row - self.offsety
        dcol = col - self.offsetx
        for (i, j), tile in self.content.items():
            yield i + drow, j + dcol, tile