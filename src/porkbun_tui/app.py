"""
Application controller

The top-level state machine. It owns one instance of every view, turns
key presses into view changes, and turns registrar work into commands
that the frontend runs as background tasks. Results come back as
messages through update(), which is the only place shared state changes.

Nothing here touches the terminal: render() returns styled lines and the
frontend decides how to draw them.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from . import demo
from .cache import CacheError, SnapshotCache
from .keys import keys
from .models import Domain, TLDPricing
from .registrar.base import FetchError, RegistrarClient
from .styles import ERROR, HELP, SPINNER, STATUS_BAR, TITLE, WARNING, Line, help_line
from .tasks import (
    AvailabilityChecked,
    Command,
    DNSLoaded,
    DomainsLoaded,
    FetchFailed,
    KeyPressed,
    Message,
    NameserversLoaded,
    NameserversSaved,
    Operation,
    PricingLoaded,
    Resized,
    Tick,
    tagged,
)
from .views.availability import AvailabilityView
from .views.base import CHROME_HEIGHT, View
from .views.calendar import CalendarView
from .views.detail import DetailView
from .views.dns import DNSView
from .views.domains import DomainsView
from .views.help import HelpView
from .views.nameservers import NameserversView
from .views.tld import TLDView

logger = logging.getLogger(__name__)

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
DEMO_NOTICE = "Not available in demo mode"


class ViewName(str, Enum):
    DOMAINS = "domains"
    DETAIL = "detail"
    DNS = "dns"
    NAMESERVERS = "nameservers"
    AVAILABILITY = "availability"
    TLD = "tld"
    CALENDAR = "calendar"
    HELP = "help"


class App:
    """
    View controller for the dashboard.

    Usage:
        app = App(registrar=client, cache=cache, domains=cached)
        commands = app.init()
        ...
        commands = app.update(message)
        lines = app.render()
    """

    def __init__(
        self,
        registrar: Optional[RegistrarClient] = None,
        cache: Optional[SnapshotCache] = None,
        domains: Optional[list[Domain]] = None,
        pricing: Optional[dict[str, TLDPricing]] = None,
        demo_mode: bool = False,
        domains_updated_at: Optional[datetime] = None,
    ):
        if not demo_mode and registrar is None:
            raise ValueError("a registrar client is required outside demo mode")

        self.registrar = registrar
        self.cache = cache
        self.demo_mode = demo_mode

        if demo_mode:
            domains = demo.domains()
            pricing = demo.pricing()

        self.domains: list[Domain] = list(domains or [])
        self.pricing: dict[str, TLDPricing] = dict(pricing or {})
        self.domains_updated_at = domains_updated_at

        # loading: nothing to show yet. refreshing: showing a snapshot while live data arrives.
        self.loading = not demo_mode and not self.domains
        self.refreshing = not demo_mode and bool(self.domains)
        self.error: Optional[BaseException] = None
        self.notice = ""
        self.running = True
        self.spinner_frame = 0
        self.width = 0
        self.height = 0

        self.views: dict[ViewName, View] = {
            ViewName.DOMAINS: DomainsView(),
            ViewName.DETAIL: DetailView(),
            ViewName.DNS: DNSView(),
            ViewName.NAMESERVERS: NameserversView(),
            ViewName.AVAILABILITY: AvailabilityView(),
            ViewName.TLD: TLDView(),
            ViewName.CALENDAR: CalendarView(),
            ViewName.HELP: HelpView(),
        }
        self.current = ViewName.DOMAINS
        self.prev_view = ViewName.DOMAINS
        # where esc from DNS / nameservers goes back to
        self.origin = ViewName.DOMAINS

        self._key_handlers: dict[ViewName, Callable[[str], list[Command]]] = {
            ViewName.DOMAINS: self._keys_domains,
            ViewName.DETAIL: self._keys_detail,
            ViewName.DNS: self._keys_dns,
            ViewName.NAMESERVERS: self._keys_nameservers,
            ViewName.AVAILABILITY: self._keys_availability,
            ViewName.TLD: self._keys_grouped,
            ViewName.CALENDAR: self._keys_grouped,
            ViewName.HELP: self._keys_help,
        }

        self._apply_domains(self.domains)
        self._apply_pricing(self.pricing)

    # Typed accessors for the views the controller reaches into

    @property
    def domains_view(self) -> DomainsView:
        return self.views[ViewName.DOMAINS]

    @property
    def detail_view(self) -> DetailView:
        return self.views[ViewName.DETAIL]

    @property
    def dns_view(self) -> DNSView:
        return self.views[ViewName.DNS]

    @property
    def ns_view(self) -> NameserversView:
        return self.views[ViewName.NAMESERVERS]

    @property
    def availability_view(self) -> AvailabilityView:
        return self.views[ViewName.AVAILABILITY]

    @property
    def tld_view(self) -> TLDView:
        return self.views[ViewName.TLD]

    @property
    def calendar_view(self) -> CalendarView:
        return self.views[ViewName.CALENDAR]

    @property
    def view(self) -> View:
        return self.views[self.current]

    def init(self) -> list[Command]:
        """Commands to run at startup: live domains and pricing, unless in demo mode."""
        if self.demo_mode:
            logger.info("Starting in demo mode with %d fixture domains", len(self.domains))
            return []
        logger.info("Starting with %d cached domains", len(self.domains))
        return [self._fetch_domains(), self._fetch_pricing()]

    # ------------------------------------------------------------------
    # Commands. Each one makes exactly one registrar call and returns at
    # most one message; none of them touch controller state.
    # ------------------------------------------------------------------

    def _fetch_domains(self) -> Command:
        registrar = self.registrar

        @tagged(Operation.DOMAINS)
        async def fetch_domains() -> Message:
            try:
                return DomainsLoaded(await registrar.list_domains())
            except FetchError as e:
                logger.warning("Domain list fetch failed: %s", e)
                return FetchFailed(Operation.DOMAINS, e)

        return fetch_domains

    def _fetch_pricing(self) -> Command:
        registrar = self.registrar

        @tagged(Operation.PRICING)
        async def fetch_pricing() -> Optional[Message]:
            try:
                return PricingLoaded(await registrar.get_pricing())
            except FetchError as e:
                # Pricing only feeds the cost view; a failure is not shown
                logger.info("Pricing fetch failed, ignoring: %s", e)
                return None

        return fetch_pricing

    def _fetch_dns(self, domain: str) -> Command:
        registrar = self.registrar

        @tagged(Operation.DNS, domain)
        async def fetch_dns() -> Message:
            try:
                return DNSLoaded(domain, await registrar.get_dns_records(domain))
            except FetchError as e:
                logger.warning("DNS fetch for %s failed: %s", domain, e)
                return FetchFailed(Operation.DNS, e, domain=domain)

        return fetch_dns

    def _fetch_nameservers(self, domain: str) -> Command:
        registrar = self.registrar

        @tagged(Operation.NAMESERVERS, domain)
        async def fetch_nameservers() -> Message:
            try:
                return NameserversLoaded(domain, await registrar.get_nameservers(domain))
            except FetchError as e:
                logger.warning("Nameserver fetch for %s failed: %s", domain, e)
                return FetchFailed(Operation.NAMESERVERS, e, domain=domain)

        return fetch_nameservers

    def _save_nameservers(self, domain: str, nameservers: list[str]) -> Command:
        registrar = self.registrar

        @tagged(Operation.SAVE_NAMESERVERS, domain)
        async def save_nameservers() -> Message:
            try:
                await registrar.update_nameservers(domain, nameservers)
            except FetchError as e:
                logger.warning("Nameserver update for %s failed: %s", domain, e)
                return FetchFailed(Operation.SAVE_NAMESERVERS, e, domain=domain)
            return NameserversSaved(domain, nameservers)

        return save_nameservers

    def _check_availability(self, domain: str) -> Command:
        registrar = self.registrar

        @tagged(Operation.AVAILABILITY, domain)
        async def check_availability() -> Message:
            try:
                return AvailabilityChecked(await registrar.check_availability(domain))
            except FetchError as e:
                logger.warning("Availability check for %s failed: %s", domain, e)
                return FetchFailed(Operation.AVAILABILITY, e, domain=domain)

        return check_availability

    # ------------------------------------------------------------------
    # Message handling
    # ------------------------------------------------------------------

    def update(self, msg: Message) -> list[Command]:
        """Apply one message and return the commands it triggers."""
        if isinstance(msg, KeyPressed):
            return self._handle_key(msg.key)
        if isinstance(msg, Resized):
            self._resize(msg.width, msg.height)
        elif isinstance(msg, Tick):
            self.spinner_frame = (self.spinner_frame + 1) % len(SPINNER_FRAMES)
        elif isinstance(msg, DomainsLoaded):
            self._on_domains(msg.domains)
        elif isinstance(msg, PricingLoaded):
            self._on_pricing(msg.pricing)
        elif isinstance(msg, DNSLoaded):
            if msg.domain == self.dns_view.domain:
                self.dns_view.set_records(msg.records)
        elif isinstance(msg, NameserversLoaded):
            if msg.domain == self.ns_view.domain:
                self.ns_view.set_nameservers(msg.nameservers)
        elif isinstance(msg, NameserversSaved):
            if msg.domain == self.ns_view.domain:
                self.ns_view.set_success("Nameservers updated successfully!")
                return [self._fetch_nameservers(msg.domain)]
        elif isinstance(msg, AvailabilityChecked):
            self.availability_view.set_result(msg.result)
        elif isinstance(msg, FetchFailed):
            self._on_failure(msg)
        else:
            logger.debug("Ignoring unknown message %r", msg)
        return []

    def _resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        for view in self.views.values():
            view.resize(width, height)

    def _on_domains(self, domains: list[Domain]) -> None:
        # Last completion wins when refreshes overlap
        self.loading = False
        self.refreshing = False
        self.error = None
        self.domains_updated_at = datetime.now()
        self._apply_domains(domains)
        self._persist(lambda c: c.save_domains(domains), "domains")

    def _on_pricing(self, pricing: dict[str, TLDPricing]) -> None:
        self._apply_pricing(pricing)
        self._persist(lambda c: c.save_pricing(pricing), "pricing")

    def _apply_domains(self, domains: list[Domain]) -> None:
        selected = self.domains_view.selected
        shown = self.detail_view.domain
        self.domains = list(domains)
        self.domains_view.set_domains(self.domains)
        # Stay on the same domains across a refresh, matched by name
        if selected is not None:
            self.domains_view.list.select(lambda d: d.name == selected.name)
        if shown is not None:
            self.detail_view.set_domain(next((d for d in self.domains if d.name == shown.name), None))
        self.calendar_view.set_domains(self.domains)
        self.tld_view.set_data(self.domains, self.pricing)

    def _apply_pricing(self, pricing: dict[str, TLDPricing]) -> None:
        self.pricing = dict(pricing)
        self.tld_view.set_data(self.domains, self.pricing)

    def _persist(self, save: Callable[[SnapshotCache], None], what: str) -> None:
        if self.cache is None:
            return
        try:
            save(self.cache)
        except CacheError as e:
            logger.warning("Could not cache %s: %s", what, e)

    def _on_failure(self, msg: FetchFailed) -> None:
        op = msg.operation
        if op == Operation.PRICING:
            # Pricing only feeds the cost view; a failure is not shown
            logger.info("Pricing fetch failed, ignoring: %s", msg.error)
        elif op == Operation.DNS:
            if msg.domain == self.dns_view.domain:
                self.dns_view.set_error(msg.error)
        elif op in (Operation.NAMESERVERS, Operation.SAVE_NAMESERVERS):
            if msg.domain == self.ns_view.domain:
                self.ns_view.set_error(msg.error)
        elif op == Operation.AVAILABILITY:
            self.availability_view.set_error(msg.error)
        else:
            # domain list failures and untagged crashes; keep whatever data is on screen
            self.error = msg.error
            self.loading = False
            self.refreshing = False

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def _handle_key(self, key: str) -> list[Command]:
        self.notice = ""

        if keys.force_quit.matches(key):
            return self.quit()

        # A focused text field gets q and ? as ordinary characters
        if not self.view.captures_text:
            if keys.quit.matches(key):
                return self.quit()
            if keys.help.matches(key):
                self._toggle_help()
                return []

        return self._key_handlers[self.current](key)

    def quit(self) -> list[Command]:
        logger.info("Quit requested")
        self.running = False
        return []

    def _toggle_help(self) -> None:
        if self.current == ViewName.HELP:
            self.current = self.prev_view
        else:
            self.prev_view = self.current
            self.current = ViewName.HELP

    def _switch(self, name: ViewName) -> None:
        self.current = name

    def _needs_registrar(self) -> bool:
        if self.demo_mode:
            self.notice = DEMO_NOTICE
            return False
        return True

    def _keys_domains(self, key: str) -> list[Command]:
        view = self.domains_view
        if view.searching:
            view.handle_input(key)
            return []

        if keys.enter.matches(key):
            if view.selected is not None:
                self.detail_view.set_domain(view.selected)
                self._switch(ViewName.DETAIL)
            return []
        if keys.refresh.matches(key):
            return self.refresh()
        if keys.availability.matches(key):
            if self._needs_registrar():
                self.availability_view.focus()
                self._switch(ViewName.AVAILABILITY)
            return []
        if keys.tld.matches(key):
            self._switch(ViewName.TLD)
            return []
        if keys.calendar.matches(key):
            self._switch(ViewName.CALENDAR)
            return []

        commands = self._open_domain_tools(key, ViewName.DOMAINS)
        if commands is None:
            view.handle_input(key)
            return []
        return commands

    def _keys_detail(self, key: str) -> list[Command]:
        if keys.back.matches(key):
            self._switch(ViewName.DOMAINS)
            return []
        if keys.up.matches(key):
            self.domains_view.list.move_up()
            self.detail_view.set_domain(self.domains_view.selected)
            return []
        if keys.down.matches(key):
            self.domains_view.list.move_down()
            self.detail_view.set_domain(self.domains_view.selected)
            return []
        return self._open_domain_tools(key, ViewName.DETAIL) or []

    def _open_domain_tools(self, key: str, origin: ViewName) -> Optional[list[Command]]:
        """DNS / nameserver shortcuts shared by the list and detail views. None if key is neither."""
        if not (keys.dns.matches(key) or keys.nameservers.matches(key)):
            return None
        if origin == ViewName.DETAIL:
            selected = self.detail_view.domain
        else:
            selected = self.domains_view.selected
        if selected is None or not self._needs_registrar():
            return []

        self.origin = origin
        if keys.dns.matches(key):
            self.dns_view.set_domain(selected.name)
            self._switch(ViewName.DNS)
            return [self._fetch_dns(selected.name)]

        self.ns_view.set_domain(selected.name)
        self._switch(ViewName.NAMESERVERS)
        return [self._fetch_nameservers(selected.name)]

    def _keys_dns(self, key: str) -> list[Command]:
        if keys.back.matches(key):
            self._switch(self.origin)
        else:
            self.dns_view.handle_input(key)
        return []

    def _keys_nameservers(self, key: str) -> list[Command]:
        view = self.ns_view
        if keys.back.matches(key) and view.at_top_level:
            self._switch(self.origin)
            return []

        view.handle_input(key)
        nameservers = view.take_save_request()
        if nameservers is None:
            return []
        if not nameservers:
            view.set_error(ValueError("at least one nameserver is required"))
            return []
        return [self._save_nameservers(view.domain, nameservers)]

    def _keys_availability(self, key: str) -> list[Command]:
        view = self.availability_view
        if keys.back.matches(key):
            self._switch(ViewName.DOMAINS)
            return []
        if keys.enter.matches(key):
            domain = view.start_check()
            return [self._check_availability(domain)] if domain else []
        view.handle_input(key)
        return []

    def _keys_grouped(self, key: str) -> list[Command]:
        if keys.back.matches(key):
            self._switch(ViewName.DOMAINS)
        else:
            self.view.handle_input(key)
        return []

    def _keys_help(self, key: str) -> list[Command]:
        if keys.back.matches(key):
            self._toggle_help()
        return []

    def refresh(self) -> list[Command]:
        """Re-fetch domains and pricing. Overlapping refreshes are not deduplicated."""
        if not self._needs_registrar():
            return []
        self.refreshing = True
        self.error = None
        return [self._fetch_domains(), self._fetch_pricing()]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def spinner(self) -> str:
        return SPINNER_FRAMES[self.spinner_frame]

    def render(self) -> list[Line]:
        """Whole screen: title bar, content, status bar, help bar."""
        content_height = max(1, self.height - CHROME_HEIGHT)

        title = Line.of(" Porkbun Domain Manager ", TITLE)
        if self.demo_mode:
            title.add(" DEMO ", WARNING)

        if self.loading and self.current == ViewName.DOMAINS:
            content = [Line(), Line.of(f"  {self.spinner} ", SPINNER).add("Loading domains...")]
        else:
            content = self.view.render()
        content = content[:content_height]
        content += [Line()] * (content_height - len(content))

        lines = [title, Line()] + content + [self._status_line(), help_line(self.view.help_text())]
        if self.width:
            lines = [line.clip(self.width) for line in lines]
        return lines

    def _status_line(self) -> Line:
        if self.error is not None:
            return Line.of(f" Error: {self.error} ", ERROR)
        if self.notice:
            return Line.of(f" {self.notice} ", WARNING)

        line = Line()
        if self.refreshing:
            line.add(f" {self.spinner} ↻ ", SPINNER)
        line.add(f" {self.view.status_text()} ", STATUS_BAR)
        if self.refreshing and self.domains_updated_at is not None:
            line.add(f" cached {self.domains_updated_at:%Y-%m-%d %H:%M}", HELP)
        return line
