from unittest.mock import patch

from tilemapedit import cli
from tilemapedit.ui import run


def launched_state(mock):
    func, state = mock.call_args.args
    assert func is run
    return state


def test_help(capsys):
    assert cli.main(["--help"]) == 0
    assert capsys.readouterr().out == cli.HELP + "\n"


def test_short_help_wins_over_version(capsys):
    cli.main(["-V", "-h"])
    assert capsys.readouterr().out == cli.HELP + "\n"


def test_version(capsys):
    assert cli.main(["-V"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("tilemapedit ")
    assert cli.VERSION in out


@patch("tilemapedit.cli.curses.wrapper")
def test_launch_opens_existing_file(wrapper, tmp_path):
    target = tmp_path / "level.csv"
    target.write_text("1,2\n3,4\n")
    cli.launch(str(target), cli.TileSet(()))
    state = launched_state(wrapper)
    assert state.canvas.grid == [[1, 2], [3, 4]]
    assert state.path == str(target)
    assert state.modified() is False


@patch("tilemapedit.cli.curses.wrapper")
def test_launch_new_path_is_remembered(wrapper, tmp_path):
    target = tmp_path / "new.csv"
    cli.launch(str(target), cli.TileSet(()))
    state = launched_state(wrapper)
    assert state.path == str(target)
    assert len(state.canvas.grid) == 11
    assert not target.exists()


@patch("tilemapedit.cli.curses.wrapper")
def test_launch_ignores_unreadable_map(wrapper, tmp_path):
    target = tmp_path / "bad.csv"
    target.write_text("a,b\n")
    cli.launch(str(target), cli.TileSet(()))
    state = launched_state(wrapper)
    assert state.canvas.grid == [[0] * 11 for _ in range(11)]
    assert state.canvas.select == set()
    assert state.path is None
    assert state.modified() is False
    assert target.read_text() == "a,b\n"


@patch("tilemapedit.cli.curses.wrapper", side_effect=OSError("boom"))
def test_main_reports_io_error(wrapper, capsys):
    assert cli.main([]) == 0
    assert capsys.readouterr().err == "An IO error has occurred: boom.\n"


@patch("tilemapedit.cli.curses.wrapper")
def test_main_loads_tiles_from_environment(wrapper, tmp_path, monkeypatch):
    tiles = tmp_path / "tiles.toml"
    tiles.write_text('tiles = [[0, "grass", 65280], [1, "water", 255]]\n')
    monkeypatch.setenv(cli.TILES_VARIABLE, str(tiles))
    assert cli.main([]) == 0
    state = launched_state(wrapper)
    assert state.tiles.by_name("water").id == 1
    assert state.tiles.by_name("grass").id == 0
    assert state.canvas.grid == [[0] * 11 for _ in range(11)]


def test_main_reports_missing_tiles(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv(cli.TILES_VARIABLE, str(tmp_path / "missing.toml"))
    assert cli.main([]) == 1
    assert capsys.readouterr().err.startswith("Could not load tiles:")