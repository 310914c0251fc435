"""DNS record table for one domain."""

from typing import Optional

from ..keys import keys
from ..models import DNSRecord
from ..registrar.base import is_api_access_error
from ..styles import ERROR, HELP, LABEL, SELECTED, TABLE_HEADER, TITLE, Line, truncate
from .base import CHROME_HEIGHT, View
from .listing import ListEngine

TYPE_WIDTH = 8
NAME_WIDTH = 30
CONTENT_WIDTH = 40
TTL_WIDTH = 8


def api_access_hint(domain: str) -> list[Line]:
    return [
        Line.of("  This domain needs API access enabled.", HELP),
        Line.of(f"  Go to porkbun.com → Domain Management → {domain} → API Access → ON", HELP),
    ]


class DNSView(View):

    def __init__(self):
        super().__init__()
        self.domain = ""
        self.records: ListEngine[DNSRecord] = ListEngine()
        self.loading = False
        self.error: Optional[BaseException] = None

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        # title, blank, header and the detail box below the table
        self.records.set_height(height - CHROME_HEIGHT - 12)

    def set_domain(self, domain: str) -> None:
        """Start showing a domain; records arrive later."""
        self.domain = domain
        self.records.set_items([])
        self.loading = True
        self.error = None

    def set_records(self, records: list[DNSRecord]) -> None:
        self.records.set_items(records)
        self.loading = False

    def set_error(self, error: BaseException) -> None:
        self.error = error
        self.loading = False

    def handle_input(self, key: str) -> None:
        if keys.up.matches(key):
            self.records.move_up()
        elif keys.down.matches(key):
            self.records.move_down()

    def render(self) -> list[Line]:
        lines = [Line.of(f" DNS Records: {self.domain} ", TITLE), Line()]

        if self.loading:
            lines.append(Line.of("  Loading DNS records..."))
            return lines

        if self.error is not None:
            lines.append(Line.of(f"  Error: {self.error}", ERROR))
            if is_api_access_error(self.error):
                lines.append(Line())
                lines.extend(api_access_hint(self.domain))
            return lines

        if not len(self.records):
            lines.append(Line.of("  No DNS records found."))
            return lines

        header = "  {:<{}}  {:<{}}  {:<{}}  {:<{}}".format(
            "Type", TYPE_WIDTH, "Name", NAME_WIDTH, "Content", CONTENT_WIDTH, "TTL", TTL_WIDTH,
        )
        lines.append(Line.of(header, TABLE_HEADER))

        for index, r in self.records.visible():
            row = Line.of("  {:<{}}  {:<{}}  {:<{}}  {:<{}}".format(
                r.type, TYPE_WIDTH,
                truncate(r.name, NAME_WIDTH), NAME_WIDTH,
                truncate(r.content, CONTENT_WIDTH), CONTENT_WIDTH,
                r.ttl, TTL_WIDTH,
            ))
            lines.append(row.restyle(SELECTED) if index == self.records.cursor else row)

        selected = self.records.selected
        if selected is not None:
            lines.append(Line())
            lines.extend(self._detail(selected))

        return lines

    def _detail(self, r: DNSRecord) -> list[Line]:
        fields = [("ID", r.id), ("Type", r.type), ("Name", r.name), ("Content", r.content), ("TTL", r.ttl)]
        if r.priority and r.priority != "0":
            fields.append(("Priority", r.priority))
        if r.notes:
            fields.append(("Notes", r.notes))
        return [Line.of("  ").add(f"{label}:", LABEL).add(f" {value}") for label, value in fields]

    def status_text(self) -> str:
        return f"{len(self.records)} records"

    def help_text(self) -> list[tuple[str, str]]:
        return [("j/k", "navigate"), keys.back.help, keys.quit.help]
