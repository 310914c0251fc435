"""
Key bindings

Keys arrive as names: "up", "enter", "esc", "ctrl+s", or the printable
character itself. Bindings group the names that trigger one action.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    keys: tuple[str, ...]
    help_key: str
    help_desc: str

    def matches(self, key: str) -> bool:
        return key in self.keys

    @property
    def help(self) -> tuple[str, str]:
        """(key, description) pair for footers."""
        return self.help_key, self.help_desc


@dataclass(frozen=True)
class KeyMap:
    up: KeyBinding = KeyBinding(("up", "k", "ctrl+k"), "↑/k", "up")
    down: KeyBinding = KeyBinding(("down", "j", "ctrl+j"), "↓/j", "down")
    enter: KeyBinding = KeyBinding(("enter",), "enter", "select")
    back: KeyBinding = KeyBinding(("esc",), "esc", "back")
    search: KeyBinding = KeyBinding(("/",), "/", "search")
    refresh: KeyBinding = KeyBinding(("r",), "r", "refresh")
    help: KeyBinding = KeyBinding(("?",), "?", "help")
    quit: KeyBinding = KeyBinding(("q", "ctrl+c"), "q", "quit")
    dns: KeyBinding = KeyBinding(("d",), "d", "dns")
    nameservers: KeyBinding = KeyBinding(("n",), "n", "ns")
    availability: KeyBinding = KeyBinding(("a",), "a", "avail")
    tld: KeyBinding = KeyBinding(("t",), "t", "tld")
    calendar: KeyBinding = KeyBinding(("c",), "c", "cal")
    sort_name: KeyBinding = KeyBinding(("1",), "1", "sort by name")
    sort_expiration: KeyBinding = KeyBinding(("2",), "2", "sort by expiration")
    tab: KeyBinding = KeyBinding(("tab",), "tab", "next field")
    save: KeyBinding = KeyBinding(("ctrl+s",), "ctrl+s", "save")
    edit: KeyBinding = KeyBinding(("e",), "e", "edit")
    presets: KeyBinding = KeyBinding(("p",), "p", "presets")

    # Quits even while a text field has focus
    force_quit: KeyBinding = KeyBinding(("ctrl+c",), "ctrl+c", "quit")


keys = KeyMap()
