"""Single-line text field."""

from dataclasses import dataclass

from ..styles import HELP, Line


@dataclass
class TextInput:
    value: str = ""
    placeholder: str = ""
    char_limit: int = 100
    focused: bool = False

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def set_value(self, value: str) -> None:
        self.value = value[:self.char_limit]

    def handle_key(self, key: str) -> bool:
        """
        Apply an editing key.

        Returns:
            True if the value changed
        """
        if key == "backspace":
            if not self.value:
                return False
            self.value = self.value[:-1]
            return True
        if key == "ctrl+u":
            changed = bool(self.value)
            self.value = ""
            return changed
        if key == "space":
            key = " "
        if len(key) == 1 and key.isprintable() and len(self.value) < self.char_limit:
            self.value += key
            return True
        return False

    def render(self, style: str = "") -> Line:
        if not self.value and self.placeholder:
            line = Line.of(self.placeholder, HELP)
        else:
            line = Line.of(self.value, style)
        if self.focused:
            line.add("█", style)
        return line
