"""
Tests for individual views and their widgets.
"""

from datetime import datetime, timedelta

from porkbun_tui.models import AvailabilityResult, DNSRecord
from porkbun_tui.registrar.base import APIResponseError
from porkbun_tui.styles import (
    CRITICAL, EXPIRED, HEALTHY, SOON, WARNING, Line, expiration_style, help_line, plain,
)
from porkbun_tui.views.availability import AvailabilityView
from porkbun_tui.views.detail import DetailView
from porkbun_tui.views.dns import DNSView
from porkbun_tui.views.domains import DomainsView
from porkbun_tui.views.nameservers import NameserversView, NSMode, PRESETS
from porkbun_tui.views.textinput import TextInput


class TestStyles:
    """Tests for styling helpers."""

    def test_expiration_thresholds(self):
        assert expiration_style(-1) == EXPIRED
        assert expiration_style(0) == CRITICAL
        assert expiration_style(6) == CRITICAL
        assert expiration_style(7) == WARNING
        assert expiration_style(29) == WARNING
        assert expiration_style(30) == SOON
        assert expiration_style(89) == SOON
        assert expiration_style(90) == HEALTHY

    def test_clip_keeps_styles(self):
        line = Line.of("abc", "x").add("defg", "y")

        clipped = line.clip(5)

        assert clipped.segments == [("abc", "x"), ("de", "y")]

    def test_help_line(self):
        assert help_line([("q", "quit"), ("?", "help")]).plain == "q quit  ? help"


class TestTextInput:
    """Tests for the single-line text field."""

    def test_typing_and_backspace(self):
        field = TextInput()
        for key in ("a", "b", "space", "c", "backspace"):
            field.handle_key(key)

        assert field.value == "ab "

    def test_char_limit(self):
        field = TextInput(char_limit=3)
        for key in "abcdef":
            field.handle_key(key)

        assert field.value == "abc"

    def test_named_keys_are_not_text(self):
        field = TextInput()

        assert field.handle_key("up") is False
        assert field.handle_key("ctrl+s") is False
        assert field.value == ""


class TestDomainsView:
    """Tests for the domain list view."""

    def test_default_sort_is_expiration(self, sample_domains):
        view = DomainsView()
        view.set_domains(sample_domains)

        assert view.selected.name == "alpha.io"

    def test_search_mode_filters_live(self, sample_domains):
        view = DomainsView()
        view.set_domains(sample_domains)

        view.handle_input("/")
        assert view.captures_text
        for key in "ZETA":
            view.handle_input(key)

        assert [d.name for d in view.list.filtered] == ["zeta.com"]
        assert view.status_text() == "1/3 domains"

    def test_enter_keeps_filter_esc_clears(self, sample_domains):
        view = DomainsView()
        view.set_domains(sample_domains)
        view.handle_input("/")
        view.handle_input("m")
        view.handle_input("enter")

        assert not view.searching
        assert view.search.value == "m"

        view.handle_input("esc")

        assert view.search.value == ""
        assert len(view.list) == 3

    def test_letters_navigate_outside_search(self, sample_domains):
        view = DomainsView()
        view.resize(100, 40)
        view.set_domains(sample_domains)

        view.handle_input("j")

        assert view.list.cursor == 1
        assert view.search.value == ""

    def test_sort_keys(self, sample_domains):
        view = DomainsView()
        view.set_domains(sample_domains)

        view.handle_input("1")
        assert view.selected.name == "alpha.io"
        view.handle_input("1")
        assert view.selected.name == "zeta.com"

        view.handle_input("2")
        assert view.list.sort_field == "expiration"
        assert view.list.ascending

    def test_render_columns(self, sample_domains):
        view = DomainsView()
        view.resize(120, 40)
        view.set_domains(sample_domains)

        text = plain(view.render())

        assert "Domain" in text
        assert "Expires ▲" in text
        assert "2030-01-15" in text

    def test_render_empty_search(self, sample_domains):
        view = DomainsView()
        view.set_domains(sample_domains)
        view.handle_input("/")
        view.handle_input("x")

        assert "No domains match your search." in plain(view.render())


class TestDetailView:
    """Tests for the detail panel."""

    def test_render_fields(self, domain_factory):
        view = DetailView()
        view.set_domain(domain_factory(
            "example.com", datetime.now() + timedelta(days=40, hours=1), labels=["work"],
        ))

        text = plain(view.render())

        assert "example.com" in text
        assert "Days Left:" in text
        assert " 40" in text
        assert "Labels:" in text
        assert view.status_text() == "example.com"


class TestDNSView:
    """Tests for the DNS table."""

    def test_loading_then_records(self):
        view = DNSView()
        view.resize(120, 40)
        view.set_domain("example.com")
        assert "Loading DNS records..." in plain(view.render())

        view.set_records([
            DNSRecord(id="1", name="example.com", type="A", content="1.2.3.4", ttl="600"),
            DNSRecord(id="2", name="example.com", type="MX", content="mx.example.com", ttl="600", priority="10"),
        ])
        view.handle_input("j")

        text = plain(view.render())
        assert "Priority: 10" in text
        assert view.status_text() == "2 records"

    def test_api_access_hint(self):
        view = DNSView()
        view.set_domain("example.com")
        view.set_error(APIResponseError("Domain is not opted in to API access."))

        text = plain(view.render())

        assert "Error: Domain is not opted in" in text
        assert "API Access → ON" in text


class TestNameserversView:
    """Tests for the nameserver editor."""

    def make_view(self) -> NameserversView:
        view = NameserversView(field_count=4)
        view.set_domain("example.com")
        view.set_nameservers(["ns1.old.net", "ns2.old.net"])
        return view

    def test_fields_filled_from_current(self):
        view = self.make_view()

        assert [f.value for f in view.inputs] == ["ns1.old.net", "ns2.old.net", "", ""]
        assert view.mode == NSMode.VIEW
        assert view.at_top_level

    def test_edit_focus_cycles(self):
        view = self.make_view()
        view.handle_input("e")
        assert view.captures_text

        for _ in range(4):
            view.handle_input("tab")
        assert view.focus == 0

        view.handle_input("up")
        assert view.focus == 3

    def test_letters_are_text_in_edit_mode(self):
        view = self.make_view()
        view.handle_input("e")
        view.handle_input("ctrl+u")
        for key in "ns.jk":
            view.handle_input(key)

        assert view.inputs[0].value == "ns.jk"
        assert view.focus == 0

    def test_esc_leaves_edit_mode(self):
        view = self.make_view()
        view.handle_input("e")
        assert not view.at_top_level

        view.handle_input("esc")

        assert view.mode == NSMode.VIEW

    def test_preset_overwrites_all_fields(self):
        view = self.make_view()
        view.handle_input("p")
        view.handle_input("j")
        view.handle_input("enter")

        assert PRESETS[1].name == "Cloudflare"
        assert [f.value for f in view.inputs] == ["ns1.cloudflare.com", "ns2.cloudflare.com", "", ""]
        assert view.mode == NSMode.EDIT

    def test_save_request(self):
        view = self.make_view()
        view.handle_input("e")
        view.handle_input("ctrl+s")

        assert view.saving
        assert view.take_save_request() == ["ns1.old.net", "ns2.old.net"]
        assert view.take_save_request() is None

    def test_success_returns_to_view_mode(self):
        view = self.make_view()
        view.handle_input("e")
        view.handle_input("ctrl+s")
        view.set_success("Nameservers updated successfully!")

        assert view.mode == NSMode.VIEW
        assert not view.saving
        assert "Nameservers updated successfully!" in plain(view.render())

    def test_keys_ignored_while_loading(self):
        view = NameserversView(field_count=4)
        view.set_domain("example.com")

        view.handle_input("e")

        assert view.mode == NSMode.VIEW


class TestAvailabilityView:
    """Tests for the availability checker."""

    def test_history_is_capped_most_recent_first(self):
        view = AvailabilityView(history_size=10)
        for i in range(12):
            view.set_result(AvailabilityResult(domain=f"d{i}.com", available=i % 2 == 0))

        assert len(view.results) == 10
        assert view.results[0].domain == "d11.com"
        assert view.results[-1].domain == "d2.com"

    def test_start_check_takes_input(self):
        view = AvailabilityView()
        for key in " new.com ":
            view.handle_input("space" if key == " " else key)

        assert view.start_check() == "new.com"
        assert view.loading
        assert view.input.value == ""
        assert view.start_check() is None

    def test_empty_input_does_nothing(self):
        view = AvailabilityView()

        assert view.start_check() is None
        assert not view.loading

    def test_render_results(self):
        view = AvailabilityView()
        view.set_result(AvailabilityResult(domain="taken.com", available=False))
        view.set_result(AvailabilityResult(domain="free.dev", available=True, price="12.00", premium=True))

        text = plain(view.render())

        assert "AVAILABLE  12.00 (premium)" in text
        assert "TAKEN" in text
        assert view.status_text() == "Domain availability checker"
