"""Errors raised by editor commands."""


class CommandError(Exception):
    """A command could not be carried out; the message is meant for the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message