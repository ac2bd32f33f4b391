"""Terminal drawing and key handling for the editor."""

from __future__ import annotations

import contextlib
import curses
from dataclasses import dataclass

from tilemapedit.errors import CommandError
from tilemapedit.state import Bar, BarKind, State

SELECT_COLOR = 0x0000FF
CURSOR_COLOR = 0xFF0000
ERROR_COLOR = 0xFF0000


@dataclass(frozen=True)
class Pixel:
    """Two characters of the map view with optional 24-bit colours."""

    text: str
    background: int | None = None
    foreground: int | None = None


def pixel(state: State, x: int, y: int) -> Pixel | None:
    """The cell at view column x and row y, counting the border; None outside it."""
    canvas = state.canvas
    last_x = canvas.width + 1
    last_y = canvas.height + 1
    if x > last_x or y > last_y:
        return None
    left, top, right, bottom = x == 0, y == 0, x == last_x, y == last_y
    if (left and top) or (left and bottom):
        return Pixel("|-")
    if (top and right) or (right and bottom):
        return Pixel("-|")
    if (not left and top and not right) or (not left and not right and bottom):
        return Pixel("--")
    if left:
        return Pixel("| ")
    if right:
        return Pixel(" |")
    i, j = y - 1, x - 1
    selected = (i, j) in canvas.select
    if j == state.cursorx and i == state.cursory:
        text = "<>"
    elif selected:
        text = "\\\\"
    else:
        text = "  "
    tile = state.tiles.by_id(canvas.grid[i][j])
    background = tile.color & 0xFFFFFF if tile is not None else None
    return Pixel(text, background, SELECT_COLOR if selected else CURSOR_COLOR)


def render_map(state: State, width: int, height: int) -> list[tuple[int, int, Pixel]]:
    """Pixels of a view of the given size as (screen column, screen row, pixel).

    The view scrolls so that the cursor stays a few cells away from the
    right and bottom edges.
    """
    cells = width // 2
    start_x = max(state.cursorx - max(cells - 3, 0), 0)
    start_y = max(state.cursory - max(height - 3, 0), 0)
    columns = min(cells, state.canvas.width + 2)
    rows = min(height, state.canvas.height + 2)
    rendered = []
    for x in range(columns):
        for y in range(rows):
            cell = pixel(state, start_x + x, start_y + y)
            if cell is not None:
                rendered.append((2 * x, y, cell))
    return rendered


def receive_key(state: State, key: str) -> None:
    """Handle one key, by name as described in State.receive_key_closed."""
    bar = state.bar
    if bar.kind is BarKind.INPUT and bar.entry is not None:
        entry = bar.entry
        match key:
            case "Right":
                entry.move_right()
            case "Left":
                entry.move_left()
            case "Backspace":
                entry.backspace()
            case "Delete":
                entry.delete()
            case "Esc":
                state.bar = Bar.closed()
            case "Enter":
                try:
                    message = state.parse_command(entry.text)
                except CommandError as err:
                    state.bar = Bar.error(err.message)
                else:
                    state.bar = Bar.closed() if message is None else Bar.ok(message)
            case _ if len(key) == 1:
                entry.write(key)
        return
    if bar.kind in (BarKind.ERR, BarKind.OK):
        state.bar = Bar.closed()
    state.receive_key_closed(key)


_SPECIAL_KEYS = {
    curses.KEY_LEFT: "Left",
    curses.KEY_RIGHT: "Right",
    curses.KEY_UP: "Up",
    curses.KEY_DOWN: "Down",
    curses.KEY_BACKSPACE: "Backspace",
    curses.KEY_DC: "Delete",
    curses.KEY_ENTER: "Enter",
}

_CONTROL_KEYS = {
    "\x1b": "Esc",
    "\n": "Enter",
    "\r": "Enter",
    "\x7f": "Backspace",
    "\b": "Backspace",
}


def translate_key(code: int | str) -> str | None:
    """Turn a curses key code or character into a key name, or None if unused."""
    if isinstance(code, int):
        return _SPECIAL_KEYS.get(code)
    if code in _CONTROL_KEYS:
        return _CONTROL_KEYS[code]
    if len(code) == 1 and code.isprintable():
        return code
    return None


_BASIC_COLOURS = (
    (curses.COLOR_BLACK, (0, 0, 0)),
    (curses.COLOR_RED, (255, 0, 0)),
    (curses.COLOR_GREEN, (0, 255, 0)),
    (curses.COLOR_YELLOW, (255, 255, 0)),
    (curses.COLOR_BLUE, (0, 0, 255)),
    (curses.COLOR_MAGENTA, (255, 0, 255)),
    (curses.COLOR_CYAN, (0, 255, 255)),
    (curses.COLOR_WHITE, (255, 255, 255)),
)

_pairs: dict[tuple[int, int], int] = {}


def _colours_enabled() -> bool:
    try:
        return curses.has_colors()
    except curses.error:
        return False


def _terminal_colour(rgb: int | None) -> int:
    if rgb is None:
        return -1
    red, green, blue = (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF
    if curses.COLORS >= 256:
        r, g, b = (round(c * 5 / 255) for c in (red, green, blue))
        return 16 + 36 * r + 6 * g + b
    return min(
        _BASIC_COLOURS,
        key=lambda entry: sum(
            (a - b) ** 2 for a, b in zip(entry[1], (red, green, blue))
        ),
    )[0]


def _attribute(foreground: int | None, background: int | None) -> int:
    if not _colours_enabled():
        return 0
    key = (_terminal_colour(foreground), _terminal_colour(background))
    pair = _pairs.get(key)
    if pair is None:
        pair = len(_pairs) + 1
        if pair >= curses.COLOR_PAIRS:
            return 0
        try:
            curses.init_pair(pair, *key)
        except curses.error:
            return 0
        _pairs[key] = pair
    return curses.color_pair(pair)


def _put(screen, row: int, col: int, text: str, attr: int, width: int) -> None:
    text = text[: max(width - col, 0)]
    if row < 0 or not text:
        return
    with contextlib.suppress(curses.error):
        screen.addstr(row, col, text, attr)


def draw(state: State, screen) -> None:
    """Paint the map, the information line and the command bar."""
    height, width = screen.getmaxyx()
    screen.erase()
    for col, row, cell in render_map(state, width, max(height - 2, 0)):
        _put(screen, row, col, cell.text, _attribute(cell.foreground, cell.background), width)
    info_row = max(height, 2) - 2
    bar_row = max(height, 1) - 1
    _put(screen, info_row, 0, state.info_bar(), 0, width)
    bar = state.bar
    cursor = None
    if bar.kind is BarKind.INPUT and bar.entry is not None:
        _put(screen, bar_row, 0, ":" + bar.entry.text, 0, width)
        cursor = (bar_row, bar.entry.cursor + 1)
    elif bar.kind is BarKind.ERR:
        _put(screen, bar_row, 0, bar.message, _attribute(ERROR_COLOR, None), width)
    elif bar.kind is BarKind.OK:
        _put(screen, bar_row, 0, bar.message, 0, width)
    with contextlib.suppress(curses.error):
        curses.curs_set(1 if cursor else 0)
    if cursor is not None:
        with contextlib.suppress(curses.error):
            screen.move(*cursor)
    screen.refresh()


def run(state: State, screen) -> None:
    """Draw and handle keys until the state asks to exit."""
    with contextlib.suppress(curses.error):
        curses.set_escdelay(25)
    with contextlib.suppress(curses.error):
        curses.use_default_colors()
    screen.keypad(True)
    while not state.exit:
        draw(state, screen)
        try:
            code = screen.get_wch()
        except curses.error:
            continue
        key = translate_key(code)
        if key is not None:
            receive_key(state, key)