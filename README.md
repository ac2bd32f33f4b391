# tilemapedit

A modal, keyboard-driven terminal editor for rectangular tile maps. Maps are
grids of integer tile ids, drawn as coloured cells in a curses screen, and
edited with vi-style movement keys and `:` commands.

## Installing

```
pip install .
```

The editor uses the standard `curses` module, so it needs a terminal and a
Python build that provides `curses` (as on Linux and macOS).

To run the test suite:

```
pip install .[test]
pytest
```

## Running

```
tilemapedit --help
tilemapedit --version
tilemapedit <path>
```

If `<path>` exists it is opened; otherwise it becomes the path that `:write`
will save to. Without a path the editor starts with an empty 11x11 map of
tile 0. If the file exists but cannot be read or parsed, the editor starts
with the empty map.

## Tile sets

Tile names and colours come from a TOML file named by the environment
variable `TILEMAPEDIT_TILES`. The file holds a `tiles` array whose entries
are `[id, name, colour]`, the colour being a 24-bit RGB value:

```toml
tiles = [
    [0, "grass", 0x00AA00],
    [1, "water", 0x0000FF],
    [2, "rock", 0x808080],
]
```

```
TILEMAPEDIT_TILES=tiles.toml tilemapedit level.map
```

If the file cannot be read or is malformed, `tilemapedit` prints
`Could not load tiles: ...` and exits with status 1. Colours are shown as
the nearest entry of the terminal's 256-colour palette, or of the eight
basic colours on terminals with fewer.

Brush and selection commands accept a tile by name (case is ignored) or by
number, and only tiles in the tile set are accepted.

## Map files

A map file is plain text: one line per row, tile ids separated by commas.

```
0,0,1
0,2,1
```

Every row must have the same length, a map cannot be empty, and every cell
must be a 32-bit integer.

## Keys

| Key | Action |
| --- | --- |
| `h` `j` `k` `l` / arrows | move left, down, up, right (a typed number repeats the move) |
| `H` `J` `K` `L` | move to the edge in that direction |
| `0`–`9` | build a repeat count; `Esc` clears it |
| `d` | apply the brush at the cursor |
| `i` / `I` | pen down / pen up (with the pen down, moving applies the brush) |
| `a` / `s` | brush adds to / subtracts from the selection |
| `A` / `S` / `F` | select all / select none / invert selection |
| `f` | fill the selection with the current tile |
| `p` | pick the tile under the cursor as the brush |
| `u` / `U` | undo / redo |
| `o` / `O` | copy the selection / paste at the cursor |
| `:` | open the command bar |

In the command bar, Left and Right move the text cursor, Backspace and
Delete remove characters, Esc closes the bar and Enter runs the command.
An error or message from a command stays on the bottom line until the next
key, which is then handled as usual.

The line above the command bar shows the path (with `(*)` when there are
unsaved changes), the pen, the brush, the cursor position and the repeat
count.

## Commands

Type `:` followed by a command and press Enter. Aliases are in brackets.

| Command | Arguments |
| --- | --- |
| `open` (`o`), `open!` (`o!`) | `<path>`; `!` discards unsaved changes |
| `write` (`w`) | `[path]` |
| `quit` (`q`), `quit!` (`q!`) | none; `!` discards unsaved changes |
| `write-quit` (`wq`) | `[path]` |
| `brush` (`tile`, `t`) | `add`, `subtract`, a tile name or a tile number |
| `dot`, `bucket`, `pick` | none |
| `move` | `<direction> [distance]` |
| `edge` | `<direction>` |
| `pen` | `up` or `down` |
| `goto` (`g`) | `<x> <y>` |
| `select` (`s`) | `all`, `none`, `invert` or a tile |
| `undo`, `redo` | none |
| `create` (`n`) | `<width> <height>`, a new map of tile 0 |
| `box` (`b`) | `<x0> <y0> <x1> <y1> [fill]` |
| `ellipse` (`e`) | `<x0> <y0> <x1> <y1> [fill]` |
| `fuzzy` (`f`) | `[steps]`, the connected area of the tile under the cursor |
| `copy`, `paste` | none |
| `clipboard` (`c`) | `a` (rotate anticlockwise), `c` (rotate clockwise), `h` (reflect horizontally), `v` (reflect vertically) |

Directions are `left`, `down`, `up`, `right`, or `h`, `j`, `k`, `l`. The
optional last argument of `box` and `ellipse` may be `fill` or `true`.

Movement and shapes respect the brush: a tile brush paints, while `add` and
`subtract` grow or shrink the selection. Selecting by tile with an `add` or
`subtract` brush grows or shrinks the current selection; with a tile brush it
replaces it.

## Using it from Python

`tilemapedit.state.State` holds the map, cursor, selection, clipboard and
undo history. `State.parse_command` runs a command line such as
`"box 1 1 4 4 fill"` and returns a message or `None`; failures raise
`tilemapedit.errors.CommandError`, whose `message` is meant for the user.

```python
from tilemapedit.state import State
from tilemapedit.tiles import loads_tiles

state = State(tiles=loads_tiles('tiles = [[0, "grass", 0x00AA00], [1, "water", 0x0000FF]]'))
state.parse_command("brush water")
state.parse_command("box 1 1 4 4")
print(state.canvas.grid)
```

`tilemapedit.files` reads and writes the map file format, `tilemapedit.grid`
holds the operations on a bare grid, and `tilemapedit.shapes` computes the
cells of boxes, ellipses and connected areas.

## What it does not do

No tile set ships with the package. Without `TILEMAPEDIT_TILES` the tile set
is empty: cells are drawn without background colours, and `brush` and
`select` reject every tile name and number, so only tile 0 (the starting
brush) and tiles taken with `pick` can be painted.