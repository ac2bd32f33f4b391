"""Single-line text input used by the command bar."""

from dataclasses import dataclass


@dataclass
class Input:
    """Editable text with a cursor position between characters."""

    text: str = ""
    cursor: int = 0

    def move_right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def move_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def write(self, char: str) -> None:
        """Insert a character at the cursor and step past it."""
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += 1

    def backspace(self) -> None:
        """Remove the character before the cursor."""
        if self.cursor > 0:
            self.cursor -= 1
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def delete(self) -> None:
        """Remove the character under the cursor."""
        if self.cursor < len(self.text):
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]