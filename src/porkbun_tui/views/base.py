"""
Common view contract

The controller keeps one instance per view and talks to all of them
through this interface; it never switches on a view's concrete type.
"""

from abc import ABC, abstractmethod

from ..styles import Line

# Rows taken by title bar, status bar, help bar and padding
CHROME_HEIGHT = 4


class View(ABC):
    """
    A full-screen panel.

    Views mutate only their own state in handle_input(); anything that needs
    the network is decided by the controller, which inspects view state.
    """

    def __init__(self):
        self.width = 0
        self.height = 0

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    @property
    def captures_text(self) -> bool:
        """True while a text field has focus and wants printable keys."""
        return False

    @abstractmethod
    def handle_input(self, key: str) -> None:
        pass

    @abstractmethod
    def render(self) -> list[Line]:
        pass

    @abstractmethod
    def status_text(self) -> str:
        pass

    @abstractmethod
    def help_text(self) -> list[tuple[str, str]]:
        """(key, description) pairs for the footer."""
        pass
