"""
Domain list view

Sortable, filterable table of every domain on the account. "/" enters a
search sub-mode where typing narrows the list live.
"""

from datetime import datetime
from typing import Optional

from ..keys import keys
from ..models import DATE_FORMAT, Domain
from ..styles import (
    HELP, SEARCH, SELECTED, TABLE_HEADER, Line, expiration_style, flag_style, truncate, yes_no,
)
from .base import CHROME_HEIGHT, View
from .listing import ListEngine
from .textinput import TextInput

SORT_NAME = "name"
SORT_EXPIRATION = "expiration"

NAME_WIDTH = 35
EXPIRES_WIDTH = 12
DAYS_WIDTH = 8
AUTO_WIDTH = 10
STATUS_WIDTH = 10


def _expiration_key(domain: Domain) -> datetime:
    return domain.expire_date or datetime.min


class DomainsView(View):
    """The landing view."""

    def __init__(self):
        super().__init__()
        self.list: ListEngine[Domain] = ListEngine(
            filter_key=lambda d: d.name,
            sort_keys={SORT_NAME: lambda d: d.name, SORT_EXPIRATION: _expiration_key},
            sort_field=SORT_EXPIRATION,
        )
        self.search = TextInput(placeholder="type to filter...", char_limit=50)
        self.searching = False

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        # header row plus the optional filter line
        self.list.set_height(height - CHROME_HEIGHT - 2)

    @property
    def captures_text(self) -> bool:
        return self.searching

    @property
    def domains(self) -> list[Domain]:
        return self.list.items

    @property
    def selected(self) -> Optional[Domain]:
        return self.list.selected

    def set_domains(self, domains: list[Domain]) -> None:
        self.list.set_items(domains)

    def handle_input(self, key: str) -> None:
        if self.searching:
            self._handle_search(key)
            return

        if keys.up.matches(key):
            self.list.move_up()
        elif keys.down.matches(key):
            self.list.move_down()
        elif keys.search.matches(key):
            self.searching = True
            self.search.focus()
        elif keys.back.matches(key):
            if self.search.value:
                self.search.set_value("")
                self.list.apply_filter("")
        elif keys.sort_name.matches(key):
            self.list.set_sort(SORT_NAME)
        elif keys.sort_expiration.matches(key):
            self.list.set_sort(SORT_EXPIRATION)

    def _handle_search(self, key: str) -> None:
        # Letters are filter text here, so only arrows and ctrl chords navigate
        if key in ("enter", "esc"):
            self.searching = False
            self.search.blur()
        elif key in ("up", "ctrl+k"):
            self.list.move_up()
        elif key in ("down", "ctrl+j"):
            self.list.move_down()
        elif self.search.handle_key(key):
            self.list.apply_filter(self.search.value)

    def _sort_label(self, label: str, field: str) -> str:
        if self.list.sort_field != field:
            return label
        return f"{label} {'▲' if self.list.ascending else '▼'}"

    def render(self) -> list[Line]:
        lines = [Line()]

        if self.searching:
            lines.append(Line.of("  Search: ").extend(self.search.render(SEARCH)))
        elif self.search.value:
            lines.append(Line.of(f'  Filter: "{self.search.value}" (/ to edit, esc to clear)', HELP))

        if not self.list.filtered:
            if self.search.value:
                lines.append(Line.of("  No domains match your search."))
            else:
                lines.append(Line.of("  No domains found."))
            return lines

        header = "  {:<{}}  {:<{}}  {:<{}}  {:<{}}  {:<{}}".format(
            self._sort_label("Domain", SORT_NAME), NAME_WIDTH,
            self._sort_label("Expires", SORT_EXPIRATION), EXPIRES_WIDTH,
            "Days", DAYS_WIDTH,
            "AutoRenew", AUTO_WIDTH,
            "Status", STATUS_WIDTH,
        )
        lines.append(Line.of(header, TABLE_HEADER))

        now = datetime.now()
        for index, domain in self.list.visible():
            row = self._row(domain, now)
            lines.append(row.restyle(SELECTED) if index == self.list.cursor else row)

        if self.list.scrollable:
            first, last, total = self.list.window
            lines.append(Line.of(f" {first}-{last} of {total} ", HELP))

        return lines

    def _row(self, domain: Domain, now: datetime) -> Line:
        days = domain.days_until_expiry(now)
        expires = domain.expire_date.strftime(DATE_FORMAT) if domain.expire_date else "-"
        days_text = "EXPIRED" if days < 0 else str(days)

        row = Line.of("  ")
        row.add(f"{truncate(domain.name, NAME_WIDTH):<{NAME_WIDTH}}")
        row.add("  ")
        row.add(f"{expires:<{EXPIRES_WIDTH}}")
        row.add("  ")
        row.add(f"{days_text:<{DAYS_WIDTH}}", expiration_style(days))
        row.add("  ")
        row.add(f"{yes_no(domain.auto_renew):<{AUTO_WIDTH}}", flag_style(domain.auto_renew))
        row.add("  ")
        row.add(f"{domain.status or 'Active':<{STATUS_WIDTH}}")
        return row

    def status_text(self) -> str:
        total = len(self.list.items)
        if self.search.value:
            return f"{len(self.list.filtered)}/{total} domains"
        return f"{total} domains"

    def help_text(self) -> list[tuple[str, str]]:
        if self.searching:
            return [("enter/esc", "done"), ("↑/↓", "navigate")]
        return [("j/k", "navigate"), ("enter", "details")] + [
            binding.help for binding in (
                keys.search, keys.dns, keys.nameservers, keys.availability,
                keys.tld, keys.calendar, keys.refresh, keys.help, keys.quit,
            )
        ]
