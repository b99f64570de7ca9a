"""Single-line, length-capped text input driven by key messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..constants import KEY_BACKSPACE, KEY_CLEAR_INPUT, MAX_QUERY_LENGTH


@dataclass
class TextInput:
    value: str = ""
    char_limit: int = MAX_QUERY_LENGTH
    focused: bool = False

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def set_value(self, value: str) -> None:
        self.value = value[: self.char_limit]

    def handle_key(self, key: str, character: Optional[str]) -> bool:
        """Apply an editing key; returns True when the value changed."""
        before = self.value
        if key == KEY_BACKSPACE:
            self.value = self.value[:-1]
        elif key == KEY_CLEAR_INPUT:
            self.value = ""
        elif character and character.isprintable() and len(self.value) < self.char_limit:
            self.value += character
        return self.value != before
