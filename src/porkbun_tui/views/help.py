"""Keyboard shortcut reference."""

from ..styles import HELP, LABEL, TABLE_HEADER, TITLE, VALUE, Line
from .base import View

SECTIONS = [
    ("Navigation", [
        ("j / k / Up / Down", "Move up/down in lists"),
        ("Enter", "Select / open details"),
        ("Esc", "Go back / cancel"),
        ("Tab", "Next field (in forms)"),
    ]),
    ("Domain List", [
        ("/", "Search/filter domains"),
        ("1", "Sort by name"),
        ("2", "Sort by expiration date"),
        ("r", "Refresh domain list"),
    ]),
    ("Views", [
        ("d", "View DNS records"),
        ("n", "View/edit nameservers"),
        ("a", "Domain availability checker"),
        ("t", "TLD breakdown (costs by TLD)"),
        ("c", "Calendar view (by expiration)"),
    ]),
    ("Nameserver Edit", [
        ("e", "Edit nameservers"),
        ("p", "Apply preset (Cloudflare, etc.)"),
        ("Ctrl+S", "Save changes"),
    ]),
    ("General", [
        ("?", "Toggle this help"),
        ("q / Ctrl+C", "Quit"),
    ]),
]


class HelpView(View):

    def handle_input(self, key: str) -> None:
        return None

    def render(self) -> list[Line]:
        lines = [Line.of(" Keyboard Shortcuts ", TITLE), Line()]
        for title, items in SECTIONS:
            lines.append(Line.of(f" {title} ", TABLE_HEADER))
            for key, desc in items:
                lines.append(Line.of("  ").add(f"{key:<20}", LABEL).add(" ").add(desc, VALUE))
            lines.append(Line())
        lines.append(Line.of("  Press ? or Esc to close", HELP))
        return lines

    def status_text(self) -> str:
        return "Help"

    def help_text(self) -> list[tuple[str, str]]:
        return [("? or esc", "close")]
