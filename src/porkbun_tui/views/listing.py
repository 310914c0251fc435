"""
List engine

A flat, filterable, sortable sequence with a cursor and a scrolling
viewport. The domain list uses every feature; the DNS table only uses the
cursor and viewport.
"""

from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class ListEngine(Generic[T]):
    """
    Cursor/viewport bookkeeping over a filtered, sorted view of items.

    Invariants after every operation:
      0 <= cursor < len(filtered)   (cursor == 0 when filtered is empty)
      0 <= offset <= max(0, len(filtered) - height)
      offset <= cursor < offset + height
    """

    def __init__(
        self,
        filter_key: Optional[Callable[[T], str]] = None,
        sort_keys: Optional[dict[str, Callable[[T], Any]]] = None,
        sort_field: Optional[str] = None,
        ascending: bool = True,
        height: int = 1,
    ):
        """
        Args:
            filter_key: Text a query is matched against (case-insensitive)
            sort_keys: Sort field name -> key function
            sort_field: Initial sort field (must be in sort_keys)
            ascending: Initial direction
            height: Rows visible in the viewport
        """
        self.filter_key = filter_key
        self.sort_keys = sort_keys or {}
        if sort_field is not None and sort_field not in self.sort_keys:
            raise ValueError(f"Unknown sort field: {sort_field}")
        self.sort_field = sort_field
        self.ascending = ascending
        self.height = max(1, height)

        self.items: list[T] = []
        self.filtered: list[T] = []
        self.query = ""
        self.cursor = 0
        self.offset = 0

    def __len__(self) -> int:
        return len(self.filtered)

    def __iter__(self) -> Iterator[T]:
        return iter(self.filtered)

    @property
    def selected(self) -> Optional[T]:
        if not self.filtered or self.cursor >= len(self.filtered):
            return None
        return self.filtered[self.cursor]

    def set_items(self, items: list[T]) -> None:
        """Replace the backing collection and start again from the top."""
        self.items = list(items)
        self.cursor = 0
        self.offset = 0
        self._recompute()

    def select(self, predicate: Callable[[T], bool]) -> bool:
        """Move the cursor to the first visible item matching predicate. False if none does."""
        for index, item in enumerate(self.filtered):
            if predicate(item):
                self.cursor = index
                self._clamp()
                return True
        return False

    def apply_filter(self, query: str) -> None:
        """Keep items whose filter key contains query, ignoring case."""
        self.query = query
        self._recompute()

    def set_sort(self, field: str) -> None:
        """
        Sort by field. Choosing the active field again flips the direction;
        choosing a different one starts ascending.
        """
        if field not in self.sort_keys:
            raise ValueError(f"Unknown sort field: {field}")
        if field == self.sort_field:
            self.ascending = not self.ascending
        else:
            self.sort_field = field
            self.ascending = True
        self._sort()
        self._clamp()

    def set_height(self, height: int) -> None:
        self.height = max(1, height)
        self._clamp()

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
            if self.cursor < self.offset:
                self.offset = self.cursor

    def move_down(self) -> None:
        if self.cursor < len(self.filtered) - 1:
            self.cursor += 1
            if self.cursor >= self.offset + self.height:
                self.offset = self.cursor - self.height + 1

    def visible(self) -> list[tuple[int, T]]:
        """(index, item) pairs inside the viewport."""
        end = min(self.offset + self.height, len(self.filtered))
        return [(i, self.filtered[i]) for i in range(self.offset, end)]

    @property
    def window(self) -> tuple[int, int, int]:
        """1-based first row, last row and total, for "a-b of n" indicators."""
        end = min(self.offset + self.height, len(self.filtered))
        return self.offset + 1, end, len(self.filtered)

    @property
    def scrollable(self) -> bool:
        return len(self.filtered) > self.height

    def _recompute(self) -> None:
        query = self.query.lower()
        if not query or self.filter_key is None:
            self.filtered = list(self.items)
        else:
            self.filtered = [item for item in self.items if query in self.filter_key(item).lower()]
        self._sort()
        self._clamp()

    def _sort(self) -> None:
        if self.sort_field is None:
            return
        # list.sort is stable in both directions
        self.filtered.sort(key=self.sort_keys[self.sort_field], reverse=not self.ascending)

    def _clamp(self) -> None:
        count = len(self.filtered)
        if self.cursor >= count:
            self.cursor = max(0, count - 1)
        self.offset = max(0, min(self.offset, count - self.height))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.height:
            self.offset = self.cursor - self.height + 1
