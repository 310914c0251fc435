"""Read-only panel for one domain."""

from datetime import datetime
from typing import Optional

from ..keys import keys
from ..models import DATE_FORMAT, Domain
from ..styles import HELP, LABEL, TITLE, VALUE, Line, expiration_style, flag_style, yes_no
from .base import View

LABEL_WIDTH = 16


class DetailView(View):

    def __init__(self):
        super().__init__()
        self.domain: Optional[Domain] = None

    def set_domain(self, domain: Optional[Domain]) -> None:
        self.domain = domain

    def handle_input(self, key: str) -> None:
        # Navigation between domains is routed to the list by the controller
        return None

    def render(self) -> list[Line]:
        d = self.domain
        if d is None:
            return [Line.of("No domain selected")]

        days = d.days_until_expiry(datetime.now())
        created = d.create_date.strftime(DATE_FORMAT) if d.create_date else "-"
        expires = d.expire_date.strftime(DATE_FORMAT) if d.expire_date else "-"

        rows = [
            ("TLD", d.tld, VALUE),
            ("Status", d.status, VALUE),
            ("Created", created, VALUE),
            ("Expires", expires, expiration_style(days)),
            ("Days Left", str(days), expiration_style(days)),
            ("Auto-Renew", yes_no(d.auto_renew), flag_style(d.auto_renew)),
            ("Security Lock", yes_no(d.security_lock), flag_style(d.security_lock)),
            ("WHOIS Privacy", yes_no(d.whois_privacy), flag_style(d.whois_privacy)),
        ]
        if d.labels:
            rows.append(("Labels", ", ".join(d.labels), VALUE))

        lines = [Line.of(f" {d.name} ", TITLE), Line()]
        for label, value, style in rows:
            lines.append(Line.of("  ").add(f"{label + ':':<{LABEL_WIDTH}}", LABEL).add(" ").add(value, style))
        lines.append(Line())
        lines.append(Line.of("  j/k: prev/next domain  d: DNS  n: nameservers  esc: back", HELP))
        return lines

    def status_text(self) -> str:
        return self.domain.name if self.domain else ""

    def help_text(self) -> list[tuple[str, str]]:
        return [("j/k", "prev/next"), keys.dns.help, keys.nameservers.help, keys.back.help, keys.quit.help]
