"""
Grouped viewport engine

Partitions items into ordered, independently expandable groups and scrolls
over the resulting lines: one header line per group plus one line per
member of each expanded group. The cursor addresses groups, not lines.

Shared by the expiration calendar (groups per month) and the cost
breakdown (groups per TLD).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Group(Generic[T]):
    """A partition bucket: key, ordered members, expanded flag."""
    key: Hashable
    items: list[T] = field(default_factory=list)
    expanded: bool = False

    @property
    def line_count(self) -> int:
        return 1 + (len(self.items) if self.expanded else 0)


G = TypeVar("G", bound=Group)


class GroupedViewport(Generic[T, G]):
    """
    Group/scroll state for a grouped, collapsible list.

    Groups are rebuilt from scratch by set_items(); expanded flags do not
    survive a rebuild. Only expand_first decides what starts open.
    """

    def __init__(
        self,
        group_key: Callable[[T], Hashable],
        group_order: Callable[[G], Any],
        make_group: Callable[[Hashable, list[T]], G],
        item_order: Optional[Callable[[T], Any]] = None,
        expand_first: bool = False,
        height: int = 1,
    ):
        """
        Args:
            group_key: Maps an item to its group key
            group_order: Sort key for groups (ascending)
            make_group: Builds a group record from its key and members
            item_order: Sort key for members within a group (stable)
            expand_first: Open the first group after each rebuild
            height: Lines visible in the viewport
        """
        self.group_key = group_key
        self.group_order = group_order
        self.make_group = make_group
        self.item_order = item_order
        self.expand_first = expand_first
        self.height = max(1, height)

        self.groups: list[G] = []
        self.cursor = 0
        self.offset = 0

    def set_items(self, items: list[T]) -> None:
        """Partition items into groups and reset cursor and scroll."""
        buckets: dict[Hashable, list[T]] = {}
        for item in items:
            buckets.setdefault(self.group_key(item), []).append(item)

        groups = []
        for key, members in buckets.items():
            if self.item_order is not None:
                members.sort(key=self.item_order)
            groups.append(self.make_group(key, members))
        groups.sort(key=self.group_order)

        # Full reset of expansion state on every rebuild
        for group in groups:
            group.expanded = False
        if self.expand_first and groups:
            groups[0].expanded = True

        self.groups = groups
        self.cursor = 0
        self.offset = 0

    def set_height(self, height: int) -> None:
        self.height = max(1, height)
        self.adjust_offset()

    @property
    def selected(self) -> Optional[G]:
        if 0 <= self.cursor < len(self.groups):
            return self.groups[self.cursor]
        return None

    @property
    def item_count(self) -> int:
        return sum(len(g.items) for g in self.groups)

    def line_for_cursor(self, index: Optional[int] = None) -> int:
        """Line number of a group's header (defaults to the cursor's group)."""
        index = self.cursor if index is None else index
        line = 0
        for group in self.groups[:max(0, index)]:
            line += group.line_count
        return line

    def total_lines(self) -> int:
        return sum(g.line_count for g in self.groups)

    def adjust_offset(self) -> None:
        """Scroll so the cursor's header line is visible, then clamp."""
        cursor_line = self.line_for_cursor()
        if cursor_line < self.offset:
            self.offset = cursor_line
        if cursor_line >= self.offset + self.height:
            self.offset = cursor_line - self.height + 1
        self.offset = max(0, min(self.offset, self.total_lines() - self.height))

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
            self.adjust_offset()

    def move_down(self) -> None:
        if self.cursor < len(self.groups) - 1:
            self.cursor += 1
            self.adjust_offset()

    def toggle(self) -> None:
        group = self.selected
        if group is not None:
            group.expanded = not group.expanded
            self.adjust_offset()

    def lines(self, header: Callable[[int, G], Any], member: Callable[[G, T], Any]) -> list[Any]:
        """Every line, header then members, before viewport slicing."""
        out = []
        for i, group in enumerate(self.groups):
            out.append(header(i, group))
            if group.expanded:
                out.extend(member(group, item) for item in group.items)
        return out

    def visible_lines(self, header: Callable[[int, G], Any], member: Callable[[G, T], Any]) -> list[Any]:
        every = self.lines(header, member)
        return every[self.offset:self.offset + self.height]

    @property
    def window(self) -> tuple[int, int, int]:
        """1-based first line, last line and total, for "a-b of n lines"."""
        total = self.total_lines()
        return self.offset + 1, min(self.offset + self.height, total), total

    @property
    def scrollable(self) -> bool:
        return self.total_lines() > self.height
