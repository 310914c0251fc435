"""
Tests for the flat list engine.
"""

import pytest

from porkbun_tui.views.listing import ListEngine


def make_engine(height: int = 3) -> ListEngine:
    return ListEngine(
        filter_key=lambda item: item[0],
        sort_keys={"name": lambda item: item[0], "rank": lambda item: item[1]},
        sort_field="name",
        height=height,
    )


ITEMS = [
    ("Bravo.com", 2),
    ("alpha.io", 1),
    ("charlie.dev", 2),
    ("delta.com", 3),
    ("echo.net", 1),
]


class TestFiltering:
    """Tests for case-insensitive substring filtering."""

    def test_filter_is_case_insensitive_substring(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.apply_filter("COM")

        assert [item[0] for item in engine.filtered] == ["Bravo.com", "delta.com"]

    def test_empty_query_returns_everything(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.apply_filter("alpha")
        engine.apply_filter("")

        assert len(engine) == len(ITEMS)

    def test_filter_to_nothing_resets_cursor(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.move_down()
        engine.move_down()
        engine.apply_filter("zzz")

        assert engine.cursor == 0
        assert engine.offset == 0
        assert engine.selected is None

    def test_set_items_keeps_query(self):
        engine = make_engine()
        engine.apply_filter("net")
        engine.set_items(ITEMS)

        assert [item[0] for item in engine.filtered] == ["echo.net"]


class TestSorting:
    """Tests for stable sorting and direction toggling."""

    def test_initial_sort_ascending(self):
        engine = make_engine()
        engine.set_items(ITEMS)

        # plain string ordering: uppercase sorts first
        assert engine.filtered[0][0] == "Bravo.com"
        assert engine.ascending is True

    def test_same_field_flips_direction(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.set_sort("name")

        assert engine.ascending is False
        assert engine.filtered[0][0] == "echo.net"

    def test_new_field_resets_to_ascending(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.set_sort("name")
        engine.set_sort("rank")

        assert engine.sort_field == "rank"
        assert engine.ascending is True

    def test_sort_is_stable(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.set_sort("rank")

        # equal ranks keep the name order they had before
        assert [item[0] for item in engine.filtered] == [
            "alpha.io", "echo.net", "Bravo.com", "charlie.dev", "delta.com",
        ]

    def test_descending_sort_is_stable(self):
        engine = make_engine()
        engine.set_items(ITEMS)
        engine.set_sort("rank")
        engine.set_sort("rank")

        assert [item[0] for item in engine.filtered] == [
            "delta.com", "Bravo.com", "charlie.dev", "alpha.io", "echo.net",
        ]

    def test_unknown_field_raises(self):
        engine = make_engine()
        with pytest.raises(ValueError):
            engine.set_sort("price")


class TestViewport:
    """Tests for cursor and scroll offset bookkeeping."""

    def test_move_down_past_viewport_advances_offset(self):
        engine = make_engine(height=3)
        engine.set_items(ITEMS)
        for _ in range(3):
            engine.move_down()

        assert engine.cursor == 3
        assert engine.offset == 1

    def test_move_up_past_offset_retreats(self):
        engine = make_engine(height=2)
        engine.set_items(ITEMS)
        for _ in range(4):
            engine.move_down()
        assert engine.offset == 3

        for _ in range(2):
            engine.move_up()

        assert engine.cursor == 2
        assert engine.offset == 2

    def test_cursor_stops_at_ends(self):
        engine = make_engine(height=2)
        engine.set_items(ITEMS)
        engine.move_up()
        assert engine.cursor == 0

        for _ in range(10):
            engine.move_down()
        assert engine.cursor == len(ITEMS) - 1
        assert engine.offset == len(ITEMS) - 2

    def test_set_items_resets_position(self):
        engine = make_engine(height=2)
        engine.set_items(ITEMS)
        for _ in range(4):
            engine.move_down()

        engine.set_items(ITEMS[:2])

        assert engine.cursor == 0
        assert engine.offset == 0

    def test_growing_height_clamps_offset(self):
        engine = make_engine(height=2)
        engine.set_items(ITEMS)
        for _ in range(4):
            engine.move_down()

        engine.set_height(10)

        assert engine.offset == 0
        assert not engine.scrollable

    def test_visible_and_window(self):
        engine = make_engine(height=2)
        engine.set_items(ITEMS)
        engine.move_down()
        engine.move_down()

        assert [i for i, _ in engine.visible()] == [1, 2]
        assert engine.window == (2, 3, 5)
        assert engine.scrollable
