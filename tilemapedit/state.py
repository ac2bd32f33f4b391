"""Editor state and the commands that act on it."""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from itertools import product
from pathlib import Path

from tilemapedit.bar import Input
from tilemapedit.clipboard import Clipboard
from tilemapedit.errors import CommandError
from tilemapedit.files import export_map, parse_map
from tilemapedit.grid import create as create_grid
from tilemapedit.grid import dot as set_tile
from tilemapedit.grid import draw_all, in_bounds, validate
from tilemapedit.shapes import (
    Direction,
    box_positions,
    ellipse_positions,
    fuzzy_positions,
    parse_direction,
    parse_fill,
    parse_usize,
)
from tilemapedit.tiles import TileSet

_USIZE_MAX = 2**64 - 1

Position = tuple[int, int]
Args = Sequence[str]


class Pen(Enum):
    UP = "Up"
    DOWN = "Down"


class BrushMode(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    TILE = "tile"


@dataclass(frozen=True)
class Brush:
    """What drawing does: grow the selection, shrink it, or paint a tile."""

    mode: BrushMode
    tile: int = 0

    @classmethod
    def add(cls) -> Brush:
        return cls(BrushMode.ADD)

    @classmethod
    def subtract(cls) -> Brush:
        return cls(BrushMode.SUBTRACT)

    @classmethod
    def of_tile(cls, tile: int) -> Brush:
        return cls(BrushMode.TILE, tile)


class BarKind(Enum):
    CLOSED = "closed"
    INPUT = "input"
    ERR = "err"
    OK = "ok"


@dataclass
class Bar:
    """The bottom line: closed, editing a command, or showing a message."""

    kind: BarKind = BarKind.CLOSED
    entry: Input | None = None
    message: str = ""

    @classmethod
    def closed(cls) -> Bar:
        return cls()

    @classmethod
    def editing(cls) -> Bar:
        return cls(BarKind.INPUT, Input())

    @classmethod
    def error(cls, message: str) -> Bar:
        return cls(BarKind.ERR, message=message)

    @classmethod
    def ok(cls, message: str) -> Bar:
        return cls(BarKind.OK, message=message)


@dataclass
class Canvas:
    """The tile grid together with the set of selected (row, column) cells."""

    grid: list[list[int]]
    select: set[Position] = field(default_factory=set)

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0])

    def copy(self) -> Canvas:
        return Canvas([row[:] for row in self.grid], set(self.select))


def _new_canvas() -> Canvas:
    return Canvas(create_grid(11, 11, 0))


@dataclass(eq=False)
class State:
    """Everything the editor knows; commands return a message or None and raise CommandError."""

    tiles: TileSet = field(default_factory=lambda: TileSet(()))
    canvas: Canvas = field(default_factory=_new_canvas)
    argument: int = 0
    bar: Bar = field(default_factory=Bar.closed)
    current_brush: Brush = field(default_factory=lambda: Brush.of_tile(0))
    clipboard: Clipboard | None = None
    cursorx: int = 0
    cursory: int = 0
    exit: bool = False
    last_saved: list[list[int]] | None = None
    path: str | None = None
    current_pen: Pen = Pen.UP
    _undo_stack: list[Canvas] = field(default_factory=list, init=False, repr=False)
    _redo_stack: list[Canvas] = field(default_factory=list, init=False, repr=False)

    def modified(self) -> bool:
        """Whether the map differs from the last saved or opened one."""
        return self.last_saved is not None and self.canvas.grid != self.last_saved

    def _push_undo(self, snapshot: Canvas) -> None:
        self._undo_stack.append(snapshot)
        self._redo_stack.clear()

    def append_argument(self, digit: int) -> None:
        """Append a decimal digit to the repeat count, unless it would overflow."""
        value = self.argument * 10 + digit
        if value <= _USIZE_MAX:
            self.argument = value

    # --- files and exiting -------------------------------------------------

    def open(self, args: Args) -> str | None:
        if self.modified():
            raise CommandError(
                "Unsaved changes (use :o! to discard them and open another file "
                "or :w to save them)."
            )
        return self.open_force(args)

    def open_force(self, args: Args) -> str | None:
        path = args[0]
        try:
            text = Path(path).read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError):
            raise CommandError(f"Could not open file {path}.") from None
        try:
            grid = parse_map(text)
        except ValueError:
            raise CommandError("Could not parse map.") from None
        try:
            validate(grid)
        except ValueError as err:
            raise CommandError(f"Could not validate map: {err}") from None
        self.canvas = Canvas([row[:] for row in grid])
        self.path = path
        self.last_saved = grid
        return f"Opened {path}."

    def write(self, args: Args) -> str | None:
        if args:
            self.path = args[0]
        if self.path is None:
            raise CommandError("No path set (use :w <path>).")
        Path(self.path).write_bytes(export_map(self.canvas.grid).encode("utf-8"))
        self.last_saved = [row[:] for row in self.canvas.grid]
        return f"Written to {self.path}."

    def quit(self, args: Args) -> str | None:
        if self.modified():
            raise CommandError(
                "Unsaved changes (use :q! to discard them and quit or :wq to save and quit)."
            )
        self.exit = True
        return None

    def quit_force(self, args: Args) -> str | None:
        self.exit = True
        return None

    def write_quit(self, args: Args) -> str | None:
        self.write(args)
        self.quit_force(())
        return None

    # --- drawing -----------------------------------------------------------

    def bucket(self, args: Args) -> str | None:
        """Paint every selected cell with the brush tile."""
        if self.current_brush.mode is BrushMode.TILE:
            snapshot = self.canvas.copy()
            if draw_all(self.canvas.grid, list(self.canvas.select), self.current_brush.tile):
                self._push_undo(snapshot)
        return None

    def dot(self, args: Args) -> str | None:
        """Apply the brush to the cell under the cursor."""
        snapshot = self.canvas.copy()
        position = (self.cursory, self.cursorx)
        select = self.canvas.select
        mode = self.current_brush.mode
        if mode is BrushMode.TILE:
            changed = set_tile(self.canvas.grid, *position, self.current_brush.tile)
        elif mode is BrushMode.ADD:
            changed = position not in select
            select.add(position)
        else:
            changed = position in select
            select.discard(position)
        if changed:
            self._push_undo(snapshot)
        return None

    def brush(self, args: Args) -> str | None:
        choice = args[0].lower()
        if choice == "add":
            self.current_brush = Brush.add()
        elif choice == "subtract":
            self.current_brush = Brush.subtract()
        else:
            self.current_brush = Brush.of_tile(self.tiles.parse(choice))
        return None

    def pen(self, args: Args) -> str | None:
        choice = args[0].lower()
        if choice == "up":
            self.current_pen = Pen.UP
        elif choice == "down":
            self.current_pen = Pen.DOWN
        else:
            raise CommandError(f"Pen mode {args[0]} not found, options are up, down.")
        return None

    def move(self, args: Args) -> str | None:
        distance = parse_usize(args[1]) if len(args) > 1 else 1
        self.move_cursor(parse_direction(args[0]), distance)
        return None

    def move_cursor(self, direction: Direction, distance: int) -> None:
        """Move the cursor, clamped to the map; with the pen down, brush the cells passed."""
        x, y = self.cursorx, self.cursory
        nx, ny = x, y
        if direction is Direction.LEFT:
            nx = max(x - distance, 0)
            positions = [(y, col) for col in range(nx, x)]
        elif direction is Direction.DOWN:
            ny = min(y + distance, self.canvas.height - 1)
            positions = [(row, x) for row in range(y + 1, ny + 1)]
        elif direction is Direction.UP:
            ny = max(y - distance, 0)
            positions = [(row, x) for row in range(ny, y)]
        else:
            nx = min(x + distance, self.canvas.width - 1)
            positions = [(y, col) for col in range(x + 1, nx + 1)]
        self.cursorx, self.cursory = nx, ny
        if self.current_pen is Pen.DOWN:
            snapshot = self.canvas.copy()
            self._apply_brush(positions)
            if self.canvas != snapshot:
                self._push_undo(snapshot)

    def _apply_brush(self, positions: Iterable[Position]) -> bool:
        """Brush the given cells; return whether the grid changed."""
        mode = self.current_brush.mode
        if mode is BrushMode.TILE:
            return draw_all(self.canvas.grid, positions, self.current_brush.tile)
        if mode is BrushMode.ADD:
            self.canvas.select.update(positions)
        else:
            self.canvas.select.difference_update(positions)
        return False

    def edge(self, args: Args) -> str | None:
        direction = parse_direction(args[0])
        width = self.canvas.width
        if direction is Direction.LEFT:
            distance = self.cursorx
        elif direction is Direction.DOWN:
            distance = max(width - self.cursory, 0)
        elif direction is Direction.UP:
            distance = self.cursory
        else:
            distance = max(width - self.cursorx, 0)
        self.move_cursor(direction, distance)
        return None

    def goto(self, args: Args) -> str | None:
        i = parse_usize(args[0])
        j = parse_usize(args[1])
        if not in_bounds(self.canvas.height, self.canvas.width, i, j):
            raise CommandError("Out of bounds.")
        self.cursorx = i
        self.cursory = j
        return None

    def pick(self, args: Args) -> str | None:
        """Take the tile under the cursor as the brush."""
        self.current_brush = Brush.of_tile(self.canvas.grid[self.cursory][self.cursorx])
        return None

    def _all_cells(self) -> list[Position]:
        return list(product(range(self.canvas.height), range(self.canvas.width)))

    def select(self, args: Args) -> str | None:
        snapshot = self.canvas.copy()
        canvas = self.canvas
        choice = args[0].lower()
        if choice == "all":
            canvas.select = set(self._all_cells())
        elif choice == "none":
            canvas.select.clear()
        elif choice == "invert":
            canvas.select = {p for p in self._all_cells() if p not in canvas.select}
        else:
            try:
                tile = self.tiles.parse(choice)
            except CommandError:
                raise CommandError(
                    "Invalid selection argument, options are all, none, invert and <tile>."
                ) from None
            matches = [(i, j) for i, j in self._all_cells() if canvas.grid[i][j] == tile]
            mode = self.current_brush.mode
            if mode is BrushMode.ADD:
                canvas.select.update(matches)
            elif mode is BrushMode.SUBTRACT:
                canvas.select.difference_update(matches)
            else:
                canvas.select = set(matches)
        if canvas.select != snapshot.select:
            self._push_undo(snapshot)
        return None

    def draw_shape(
        self, args: Args, shape: Callable[[Args], Iterable[Position]]
    ) -> str | None:
        """Brush the in-bounds cells that ``shape`` yields for the arguments."""
        height, width = self.canvas.height, self.canvas.width
        positions = [p for p in shape(args) if in_bounds(height, width, *p)]
        snapshot = self.canvas.copy()
        if self.current_brush.mode is BrushMode.TILE:
            if self._apply_brush(positions):
                self._push_undo(snapshot)
        else:
            self._apply_brush(positions)
            if self.canvas.select != snapshot.select:
                self._push_undo(snapshot)
        return None

    def fuzzy(self, args: Args) -> str | None:
        grid = [row[:] for row in self.canvas.grid]
        row, col = self.cursory, self.cursorx

        def shape(shape_args: Args) -> set[Position]:
            steps = parse_usize(shape_args[0]) if shape_args else None
            return fuzzy_positions(grid, row, col, steps)

        return self.draw_shape(args, shape)

    def box(self, args: Args) -> str | None:
        def shape(shape_args: Args) -> list[Position]:
            x0, y0, x1, y1 = (parse_usize(arg) for arg in shape_args[:4])
            return box_positions(x0, y0, x1, y1, parse_fill(shape_args))

        return self.draw_shape(args, shape)

    def ellipse(self, args: Args) -> str | None:
        def shape(shape_args: Args) -> list[Position]:
            x0, y0, x1, y1 = (parse_usize(arg) for arg in shape_args[:4])
            try:
                fill = parse_fill(shape_args)
            except CommandError:
                raise CommandError(
                    "Invalid argument, the only option is fill (optional)"
                ) from None
            return ellipse_positions(x0, y0, x1, y1, fill)

        return self.draw_shape(args, shape)

    def create(self, args: Args) -> str | None:
        rows = parse_usize(args[1])
        cols = parse_usize(args[0])
        fresh = Canvas(create_grid(rows, cols, 0))
        if self.canvas != fresh:
            self._push_undo(self.canvas)
            self.canvas = fresh
        self.reset_cursor()
        return f"Created empty {cols}x{rows} map."

    def reset_cursor(self) -> None:
        """Return the cursor to the origin when it has fallen off the map."""
        if not in_bounds(self.canvas.width, self.canvas.height, self.cursorx, self.cursory):
            self.cursorx = 0
            self.cursory = 0

    def undo(self, args: Args) -> str | None:
        if not self._undo_stack:
            raise CommandError("Undo stack is empty.")
        self._redo_stack.append(self.canvas)
        self.canvas = self._undo_stack.pop()
        self.reset_cursor()
        return None

    def redo(self, args: Args) -> str | None:
        if not self._redo_stack:
            raise CommandError("Redo stack is empty")
        self._undo_stack.append(self.canvas)
        self.canvas = self._redo_stack.pop()
        self.reset_cursor()
        return None

    # --- command line ------------------------------------------------------

    def parse_command(self, text: str) -> str | None:
        """Run a command line such as ``box 1 1 4 4 fill``."""
        words = [word for word in text.split(" ") if word]
        if not words:
            return None
        name, *rest = words
        command = next((c for c in _COMMANDS if c.matches(name)), None)
        if command is None:
            raise CommandError(f"Command {name} not found.")
        if not command.argsmin <= len(rest) <= command.argsmax:
            expected = (
                str(command.argsmin)
                if command.argsmin == command.argsmax
                else f"{command.argsmin}-{command.argsmax}"
            )
            raise CommandError(
                f"Incorrect number of arguments for {command.name}: "
                f"expected {expected}, found {len(rest)}."
            )
        return command.action(self, rest)

    def info_bar(self) -> str:
        path = self.path if self.path is not None else "[-]"
        star = "(*)" if self.modified() else ""
        if self.current_brush.mode is BrushMode.TILE:
            tile = self.tiles.by_id(self.current_brush.tile)
            brush = tile.name if tile is not None else str(self.current_brush.tile)
        else:
            brush = self.current_brush.mode.value
        argument = str(self.argument) if self.argument > 0 else ""
        return (
            f"Path: {path}{star}, Pen: {self.current_pen.value}, Brush: {brush}, "
            f"Cursor: ({self.cursorx},{self.cursory}), Argument: {argument}"
        )

    # --- clipboard ---------------------------------------------------------

    def copy(self, args: Args) -> str | None:
        grid = self.canvas.grid
        self.clipboard = Clipboard(
            {(i, j): grid[i][j] for i, j in self.canvas.select},
            self.cursorx,
            self.cursory,
        )
        return f"Copied {len(self.canvas.select)} tiles to clipboard."

    def paste(self, args: Args) -> str | None:
        if self.clipboard is None:
            raise CommandError("Clipboard is empty")
        snapshot = self.canvas.copy()
        height, width = self.canvas.height, self.canvas.width
        for i, j, tile in self.clipboard.placements(self.cursory, self.cursorx):
            if in_bounds(height, width, i, j):
                self.canvas.grid[i][j] = tile
        if self.canvas.grid != snapshot.grid:
            self._push_undo(snapshot)
        return None

    def clipboard_command(self, args: Args) -> str | None:
        """Rotate or reflect the clipboard contents."""
        clipboard = self.clipboard
        if clipboard is None:
            return None
        choice = args[0].lower()
        if choice in ("rotate anticlockwise", "a"):
            clipboard.rotate_anticlockwise()
            return "Rotated the clipboard anticlockwise"
        if choice in ("rotate clockwise", "c"):
            clipboard.rotate_clockwise()
            return "Rotated the clipboard clockwise"
        if choice in ("reflect horizontal", "h"):
            clipboard.reflect_horizontal()
            return "Reflected the clipboard horizontally"
        if choice in ("reflect vertical", "v"):
            clipboard.reflect_vertical()
            return "Reflected the clipboard vertically."
        raise CommandError(
            "Invalid options, the only options are rotate|reflect horizontal|vertical."
        )

    # --- keys --------------------------------------------------------------

    def _move_with(self, direction: Direction) -> None:
        self.move_cursor(direction, max(self.argument, 1))
        self.argument = 0

    def receive_key_closed(self, key: str) -> None:
        """Handle a key while the command bar is closed.

        Characters are one-character strings; other keys are named
        ``Left``, ``Right``, ``Up``, ``Down``, ``Esc``, ``Enter``,
        ``Backspace`` and ``Delete``. Command errors are ignored here.
        """
        with contextlib.suppress(CommandError):
            match key:
                case ":":
                    self.bar = Bar.editing()
                case "h" | "Left":
                    self._move_with(Direction.LEFT)
                case "j" | "Down":
                    self._move_with(Direction.DOWN)
                case "k" | "Up":
                    self._move_with(Direction.UP)
                case "l" | "Right":
                    self._move_with(Direction.RIGHT)
                case "H":
                    self.edge(["left"])
                case "J":
                    self.edge(["down"])
                case "K":
                    self.edge(["up"])
                case "L":
                    self.edge(["right"])
                case "d":
                    self.dot(())
                case "a":
                    self.brush(["add"])
                case "s":
                    self.brush(["subtract"])
                case "i":
                    self.pen(["down"])
                case "I":
                    self.pen(["up"])
                case "A":
                    self.select(["all"])
                case "S":
                    self.select(["none"])
                case "F":
                    self.select(["invert"])
                case "Esc":
                    self.argument = 0
                case "f":
                    self.bucket(())
                case "p":
                    self.pick(())
                case "u":
                    self.undo(())
                case "U":
                    self.redo(())
                case "o":
                    self.copy(())
                case "O":
                    self.paste(())
                case _ if len(key) == 1 and key in "0123456789":
                    self.append_argument(int(key))


@dataclass(frozen=True)
class _Command:
    name: str
    aliases: tuple[str, ...]
    argsmin: int
    argsmax: int
    action: Callable[[State, Args], str | None]

    def matches(self, word: str) -> bool:
        return word == self.name or word in self.aliases


_COMMANDS: tuple[_Command, ...] = (
    _Command("open", ("o",), 1, 1, State.open),
    _Command("open!", ("o!",), 1, 1, State.open_force),
    _Command("write", ("w",), 0, 1, State.write),
    _Command("quit", ("q",), 0, 0, State.quit),
    _Command("quit!", ("q!",), 0, 0, State.quit_force),
    _Command("write-quit", ("wq",), 0, 1, State.write_quit),
    _Command("brush", ("tile", "t"), 1, 1, State.brush),
    _Command("dot", (), 0, 0, State.dot),
    _Command("bucket", (), 0, 0, State.bucket),
    _Command("move", (), 1, 2, State.move),
    _Command("pick", (), 0, 0, State.pick),
    _Command("pen", (), 1, 1, State.pen),
    _Command("edge", (), 1, 1, State.edge),
    _Command("goto", ("g",), 2, 2, State.goto),
    _Command("select", ("s",), 1, 1, State.select),
    _Command("undo", (), 0, 0, State.undo),
    _Command("redo", (), 0, 0, State.redo),
    _Command("create", ("n",), 2, 2, State.create),
    _Command("box", ("b",), 4, 5, State.box),
    _Command("ellipse", ("e",), 4, 5, State.ellipse),
    _Command("fuzzy", ("f",), 0, 1, State.fuzzy),
    _Command("copy", (), 0, 0, State.copy),
    _Command("paste", (), 0, 0, State.paste),
    _Command("clipboard", ("c",), 1, 1, State.clipboard_command),
)