"""
Expiration calendar

Domains grouped by the month they expire, earliest month first. The
nearest month starts expanded since that is where attention is needed.
Domains without an expiration date share one group after the last month.
"""

import calendar as _calendar
from dataclasses import dataclass
from datetime import datetime

from ..keys import keys
from ..models import Domain
from ..styles import HELP, SELECTED, TITLE, Line, expiration_style, truncate
from .base import CHROME_HEIGHT, View
from .grouped import Group, GroupedViewport

# Group key for domains with no expiration date
UNDATED = (0, 0)


@dataclass
class MonthGroup(Group[Domain]):
    """Domains expiring in one (year, month)."""

    @property
    def year(self) -> int:
        return self.key[0]

    @property
    def month(self) -> int:
        return self.key[1]

    @property
    def month_name(self) -> str:
        return _calendar.month_name[self.month]

    @property
    def undated(self) -> bool:
        return self.key == UNDATED

    @property
    def label(self) -> str:
        if self.undated:
            return "No expiration date"
        return f"{self.month_name} {self.year}"


def month_key(domain: Domain) -> tuple[int, int]:
    if domain.expire_date is None:
        return UNDATED
    return domain.expire_date.year, domain.expire_date.month


def _expiration(domain: Domain) -> datetime:
    return domain.expire_date or datetime.min


def build_month_viewport() -> GroupedViewport[Domain, MonthGroup]:
    return GroupedViewport(
        group_key=month_key,
        group_order=lambda g: (g.undated, g.key),
        make_group=lambda key, items: MonthGroup(key=key, items=items),
        item_order=_expiration,
        expand_first=True,
    )


class CalendarView(View):

    def __init__(self):
        super().__init__()
        self.viewport = build_month_viewport()

    @property
    def groups(self) -> list[MonthGroup]:
        return self.viewport.groups

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self.viewport.set_height(height - CHROME_HEIGHT - 3)

    def set_domains(self, domains: list[Domain]) -> None:
        self.viewport.set_items(domains)

    def handle_input(self, key: str) -> None:
        if keys.up.matches(key):
            self.viewport.move_up()
        elif keys.down.matches(key):
            self.viewport.move_down()
        elif keys.enter.matches(key):
            self.viewport.toggle()

    def render(self) -> list[Line]:
        lines = [Line.of(" Expiration Calendar ", TITLE), Line()]

        if not self.groups:
            lines.append(Line.of("  No domains to display."))
            return lines

        now = datetime.now()

        def header(index: int, group: MonthGroup) -> Line:
            marker = "▼" if group.expanded else "▶"
            text = f"{marker} {group.label} ({len(group.items)} domains)"
            if index == self.viewport.cursor:
                return Line.of(f"  {text}", SELECTED)
            if group.undated:
                return Line.of(f"  {text}", HELP)
            urgency = expiration_style(group.items[0].days_until_expiry(now))
            return Line.of("  ").add(text, urgency)

        def member(group: MonthGroup, domain: Domain) -> Line:
            if domain.expire_date is None:
                return Line.of(f"      {truncate(domain.name, 30):<30}  -", HELP)
            days = domain.days_until_expiry(now)
            day = domain.expire_date.strftime("%b %d")
            days_text = "EXPIRED" if days < 0 else f"{days} days"
            return Line.of(f"      {truncate(domain.name, 30):<30}  {day}  {days_text}", expiration_style(days))

        lines.extend(self.viewport.visible_lines(header, member))

        if self.viewport.scrollable:
            first, last, total = self.viewport.window
            lines.append(Line.of(f" {first}-{last} of {total} lines ", HELP))

        return lines

    def status_text(self) -> str:
        months = sum(1 for g in self.groups if not g.undated)
        return f"{months} months, {self.viewport.item_count} domains"

    def help_text(self) -> list[tuple[str, str]]:
        return [("j/k", "navigate"), ("enter", "expand"), keys.back.help, keys.quit.help]
