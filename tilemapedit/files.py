"""Reading and writing maps as comma-separated text."""

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _parse_cell(cell: str) -> int:
    if not _INTEGER.fullmatch(cell):
        raise ValueError(f"invalid integer {cell!r}")
    value = int(cell)
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(f"integer {cell!r} out of range")
    return value


def parse_map(text: str) -> list[list[int]]:
    """Parse rows separated by newlines with cells separated by commas.

    Raises ValueError when a cell is not a 32-bit integer.
    """
    return [
        [_parse_cell(cell) for cell in line.split(",")]
        for line in text.strip().split("\n")
    ]


def export_map(grid: list[list[int]]) -> str:
    """Render a map in the format read by parse_map."""
    return "\n".join(",".join(str(tile) for tile in row) for row in grid)