"""
Cost breakdown by TLD

Domains grouped by TLD with yearly renewal cost per group, most expensive
first. Groups start collapsed.
"""

from dataclasses import dataclass

from ..keys import keys
from ..models import Domain, TLDPricing
from ..styles import HELP, SELECTED, TABLE_HEADER, TITLE, VALUE, Line
from .base import CHROME_HEIGHT, View
from .grouped import Group, GroupedViewport

TLD_WIDTH = 12
COUNT_WIDTH = 8
RENEWAL_WIDTH = 12
TOTAL_WIDTH = 14


@dataclass
class TLDGroup(Group[Domain]):
    """Domains sharing a TLD plus what renewing them all costs."""
    renewal_price: float = 0.0

    @property
    def tld(self) -> str:
        return self.key

    @property
    def total_cost(self) -> float:
        return self.renewal_price * len(self.items)


def cost_order(group: TLDGroup) -> tuple[float, str]:
    """Highest yearly total first; equal totals fall back to TLD name."""
    return -group.total_cost, group.tld


def build_tld_viewport(pricing: dict[str, TLDPricing]) -> GroupedViewport[Domain, TLDGroup]:
    def make_group(tld: str, items: list[Domain]) -> TLDGroup:
        price = pricing.get(tld)
        return TLDGroup(key=tld, items=items, renewal_price=price.renewal_price if price else 0.0)

    return GroupedViewport(
        group_key=lambda d: d.tld,
        group_order=cost_order,
        make_group=make_group,
    )


class TLDView(View):

    def __init__(self):
        super().__init__()
        self.pricing: dict[str, TLDPricing] = {}
        self.viewport = build_tld_viewport(self.pricing)

    @property
    def groups(self) -> list[TLDGroup]:
        return self.viewport.groups

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self.viewport.set_height(height - CHROME_HEIGHT - 6)

    def set_data(self, domains: list[Domain], pricing: dict[str, TLDPricing]) -> None:
        height = self.viewport.height
        self.pricing = dict(pricing or {})
        self.viewport = build_tld_viewport(self.pricing)
        self.viewport.height = height
        self.viewport.set_items(domains)

    @property
    def grand_total(self) -> float:
        return sum(g.total_cost for g in self.groups)

    def handle_input(self, key: str) -> None:
        if keys.up.matches(key):
            self.viewport.move_up()
        elif keys.down.matches(key):
            self.viewport.move_down()
        elif keys.enter.matches(key):
            self.viewport.toggle()

    def render(self) -> list[Line]:
        lines = [Line.of(" TLD Breakdown ", TITLE), Line()]

        if not self.groups:
            lines.append(Line.of("  No domains to display."))
            return lines

        header = "  {:<{}}  {:>{}}  {:>{}}  {:>{}}".format(
            "TLD", TLD_WIDTH, "Count", COUNT_WIDTH, "Renewal", RENEWAL_WIDTH, "Total/Year", TOTAL_WIDTH,
        )
        lines.append(Line.of(header, TABLE_HEADER))

        def group_row(index: int, group: TLDGroup) -> Line:
            marker = "▼" if group.expanded else "▶"
            if group.renewal_price > 0:
                renewal = f"{'$%.2f' % group.renewal_price:>{RENEWAL_WIDTH}}"
                total = f"{'$%.2f' % group.total_cost:>{TOTAL_WIDTH}}"
            else:
                renewal = f"{'N/A':>{RENEWAL_WIDTH}}"
                total = f"{'N/A':>{TOTAL_WIDTH}}"
            text = f"{marker} {group.tld:<{TLD_WIDTH}}  {len(group.items):>{COUNT_WIDTH}}  {renewal}  {total}"
            return Line.of(text, SELECTED if index == self.viewport.cursor else "")

        def member(group: TLDGroup, domain: Domain) -> Line:
            return Line.of(f"    {domain.name}", HELP)

        lines.extend(self.viewport.visible_lines(group_row, member))

        if self.viewport.scrollable:
            first, last, total = self.viewport.window
            lines.append(Line.of(f" {first}-{last} of {total} lines ", HELP))

        lines.append(Line())
        lines.append(Line.of(
            f"  Total: {self.viewport.item_count} domains, ${self.grand_total:.2f}/year", VALUE,
        ))
        return lines

    def status_text(self) -> str:
        return f"{len(self.groups)} TLDs"

    def help_text(self) -> list[tuple[str, str]]:
        return [("j/k", "navigate"), ("enter", "expand"), keys.back.help, keys.quit.help]
