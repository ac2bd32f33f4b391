import pytest

from tilemapedit.errors import CommandError


def test_message_is_kept():
    err = CommandError("Out of bounds.")
    assert err.message == "Out of bounds."
    assert str(err) == "Out of bounds."


def test_can_be_raised_and_caught():
    err = CommandError("Undo stack is empty.")
    with pytest.raises(CommandError) as info:
        raise err
    assert info.value is err
    assert err.message == "Undo stack is empty."
    assert str(err) == "Undo stack is empty."


def test_caught_as_plain_exception():
    err = CommandError("Command foo not found.")
    assert not isinstance(err, ValueError)
    with pytest.raises(Exception) as info:
        raise err
    assert info.value is err
    assert err.message == "Command foo not found."
    assert err.args == ("Command foo not found.",)