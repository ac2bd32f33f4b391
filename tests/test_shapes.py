import pytest

from tilemapedit.errors import CommandError
from tilemapedit.shapes import (
    Direction,
    box_positions,
    ellipse_positions,
    fuzzy_positions,
    parse_direction,
    parse_fill,
    parse_usize,
)


@pytest.mark.parametrize(
    "arg, expected",
    [
        ("left", Direction.LEFT),
        ("H", Direction.LEFT),
        ("Down", Direction.DOWN),
        ("j", Direction.DOWN),
        ("UP", Direction.UP),
        ("k", Direction.UP),
        ("right", Direction.RIGHT),
        ("l", Direction.RIGHT),
    ],
)
def test_parse_direction(arg, expected):
    assert parse_direction(arg) is expected


def test_parse_direction_error_message():
    with pytest.raises(CommandError) as info:
        parse_direction("sideways")
    assert info.value.message == (
        "Parse error: sideways is not a direction, options are Left, Down, Up, Right."
    )


@pytest.mark.parametrize("arg, expected", [("0", 0), ("42", 42), ("+7", 7)])
def test_parse_usize_accepts(arg, expected):
    assert parse_usize(arg) == expected


@pytest.mark.parametrize("arg", ["", "-1", "1.5", "abc", " 3", str(2**64)])
def test_parse_usize_rejects(arg):
    with pytest.raises(CommandError) as info:
        parse_usize(arg)
    assert info.value.message == f"Parse error: {arg} is not an integer."


def test_parse_fill_defaults_to_outline():
    assert parse_fill(["0", "0", "1", "1"]) is False


@pytest.mark.parametrize("word", ["fill", "true"])
def test_parse_fill_accepts(word):
    assert parse_fill(["0", "0", "1", "1", word]) is True


@pytest.mark.parametrize("word", ["FILL", "yes"])
def test_parse_fill_rejects(word):
    with pytest.raises(CommandError) as info:
        parse_fill(["0", "0", "1", "1", word])
    assert "the only option is fill" in info.value.message


GRID = [
    [1, 1, 0, 2],
    [0, 1, 0, 2],
    [0, 1, 1, 1],
    [2, 0, 0, 1],
]


def test_fuzzy_whole_region():
    region = fuzzy_positions(GRID, 0, 0)
    assert region == {(0, 0), (0, 1), (1, 1), (2, 1), (2, 2), (2, 3), (3, 3)}
    assert all(GRID[i][j] == 1 for i, j in region)


def test_fuzzy_zero_steps_is_empty():
    assert fuzzy_positions(GRID, 0, 0, 0) == set()


def test_fuzzy_one_step_is_start():
    assert fuzzy_positions(GRID, 1, 1, 1) == {(1, 1)}


def test_fuzzy_two_steps_adds_same_tile_neighbours():
    assert fuzzy_positions(GRID, 1, 1, 2) == {(1, 1), (0, 1), (2, 1)}


def test_fuzzy_steps_grow_monotonically():
    previous = set()
    for steps in range(1, 8):
        current = fuzzy_positions(GRID, 0, 0, steps)
        assert previous <= current
        previous = current
    assert previous == fuzzy_positions(GRID, 0, 0)


def test_fuzzy_isolated_cell():
    assert fuzzy_positions(GRID, 3, 0) == {(3, 0)}


def test_box_outline_single_row():
    assert set(box_positions(1, 0, 3, 0, False)) == {(0, 1), (0, 2), (0, 3)}


def test_box_fill_covers_rectangle():
    cells = box_positions(1, 2, 3, 5, True)
    assert set(cells) == {(y, x) for y in range(2, 6) for x in range(1, 4)}
    assert len(cells) == len(set(cells))


def test_box_outline_is_border_of_fill():
    outline = set(box_positions(1, 2, 4, 6, False))
    filled = set(box_positions(1, 2, 4, 6, True))
    assert outline <= filled
    assert outline == {(y, x) for y, x in filled if y in (2, 6) or x in (1, 4)}


def test_box_reversed_fill_is_empty():
    assert box_positions(3, 3, 1, 1, True) == []


def test_ellipse_small_circle():
    assert set(ellipse_positions(0, 0, 2, 2, False)) == {(2, 1), (0, 1), (1, 2), (1, 0)}


@pytest.mark.parametrize("box", [(0, 0, 6, 4), (1, 2, 8, 9), (2, 2, 5, 3)])
def test_ellipse_inside_bounding_box(box):
    x0, y0, x1, y1 = box
    for fill in (False, True):
        for x, y in ellipse_positions(x0, y0, x1, y1, fill):
            assert x0 <= x <= x1
            assert y0 <= y <= y1


@pytest.mark.parametrize("box", [(0, 0, 6, 4), (1, 2, 8, 9), (0, 0, 4, 4)])
def test_ellipse_is_symmetric(box):
    x0, y0, x1, y1 = box
    cells = set(ellipse_positions(x0, y0, x1, y1, False))
    assert {(x0 + x1 - x, y) for x, y in cells} == cells
    assert {(x, y0 + y1 - y) for x, y in cells} == cells


def test_ellipse_fill_contains_outline():
    outline = set(ellipse_positions(0, 0, 8, 6, False))
    filled = set(ellipse_positions(0, 0, 8, 6, True))
    assert outline <= filled
    assert len(filled) > len(outline)


def test_ellipse_corner_order_does_not_matter():
    assert set(ellipse_positions(7, 5, 1, 0, False)) == set(
        ellipse_positions(1, 0, 7, 5, False)
    )


def test_ellipse_touches_all_sides():
    cells = set(ellipse_positions(0, 0, 6, 4, False))
    xs = {x for x, _ in cells}
    ys = {y for _, y in cells}
    assert min(xs) == 0 and max(xs) == 6
    assert min(ys) == 0 and max(ys) == 4