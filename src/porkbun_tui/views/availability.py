"""Availability checker: one input, a short history of results."""

from typing import Optional

from ..config import config
from ..models import AvailabilityResult
from ..styles import ERROR, HELP, SEARCH, SPINNER, SUCCESS, TITLE, Line
from .base import View
from .textinput import TextInput


class AvailabilityView(View):

    def __init__(self, history_size: Optional[int] = None):
        super().__init__()
        self.history_size = history_size or config.ui.availability_history
        self.input = TextInput(placeholder="example.com", char_limit=100, focused=True)
        self.results: list[AvailabilityResult] = []
        self.loading = False
        self.error: Optional[BaseException] = None

    @property
    def captures_text(self) -> bool:
        return True

    @property
    def query(self) -> str:
        return self.input.value.strip()

    def focus(self) -> None:
        self.input.focus()

    def start_check(self) -> Optional[str]:
        """
        Take the typed domain for checking.

        Returns:
            The domain, or None when busy or the input is empty
        """
        if self.loading or not self.query:
            return None
        domain = self.query
        self.loading = True
        self.error = None
        self.input.set_value("")
        return domain

    def set_result(self, result: AvailabilityResult) -> None:
        """Most recent first, capped at history_size."""
        self.loading = False
        self.error = None
        self.results = [result] + self.results[:self.history_size - 1]

    def set_error(self, error: BaseException) -> None:
        self.loading = False
        self.error = error

    def handle_input(self, key: str) -> None:
        self.input.handle_key(key)

    def render(self) -> list[Line]:
        lines = [
            Line.of(" Domain Availability Checker ", TITLE),
            Line(),
            Line.of("  Enter domain to check:"),
            Line(),
            Line.of("  ").extend(self.input.render(SEARCH)),
            Line(),
        ]

        if self.loading:
            lines.append(Line.of("  Checking availability...", SPINNER))

        if self.error is not None:
            lines.append(Line.of(f"  Error: {self.error}", ERROR))
            lines.append(Line())

        if self.results:
            lines.append(Line.of("  Recent checks:"))
            lines.append(Line())
            for r in self.results:
                row = Line.of(f"  {r.domain:<30}  ")
                if r.available:
                    row.add("AVAILABLE", SUCCESS)
                    if r.price:
                        row.add(f"  {r.price}{' (premium)' if r.premium else ''}", HELP)
                else:
                    row.add("TAKEN", ERROR)
                lines.append(row)

        return lines

    def status_text(self) -> str:
        return "Domain availability checker"

    def help_text(self) -> list[tuple[str, str]]:
        return [("enter", "check"), ("esc", "back"), ("ctrl+c", "quit")]
