"""
Demo dataset

Sample domains and pricing for running the dashboard without credentials.
Dates are relative to "now" so the expiration colors always look lively.
"""

import calendar
from datetime import datetime, timedelta
from typing import Optional

from .models import Domain, TLDPricing


def shift(moment: datetime, years: int = 0, months: int = 0, days: int = 0) -> datetime:
    """Add calendar years/months (day clamped to month end), then days."""
    total = moment.year * 12 + (moment.month - 1) + years * 12 + months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day) + timedelta(days=days)


# name, created (y, m, d), expires (y, m, d), auto-renew, security lock, privacy
_FIXTURES = [
    ("acmecorp.com", (-5, 0, 0), (0, 3, 0), True, True, True),
    ("startupkit.io", (-2, 0, 0), (0, 6, 0), True, True, True),
    ("devtools.dev", (-3, 0, 0), (0, 1, 5), False, False, True),
    ("cloudnative.app", (-1, -3, 0), (0, 9, 0), True, True, True),
    ("myblog.org", (-6, 0, 0), (0, 11, 0), True, True, False),
    ("shopfront.store", (0, -10, 0), (1, 2, 0), True, True, True),
    ("portfolio.design", (-1, -8, 0), (0, 4, 7), False, False, True),
    ("techbytes.net", (-4, 0, 0), (0, 8, 15), True, True, True),
    ("gameserver.gg", (0, -11, 0), (1, 0, 15), True, True, True),
    ("cryptotrader.xyz", (-3, 0, 0), (0, 0, 15), False, False, True),
    ("mailservice.email", (-1, -5, 0), (0, 7, 0), True, True, True),
    ("aistartup.ai", (0, -9, 0), (0, 2, 15), True, True, True),
]

# tld: (registration, renewal, transfer)
_PRICES = {
    "com": ("9.73", "10.37", "10.37"),
    "io": ("32.98", "32.98", "32.98"),
    "dev": ("14.00", "14.00", "14.00"),
    "app": ("14.00", "14.00", "14.00"),
    "org": ("10.87", "10.87", "10.87"),
    "store": ("5.00", "25.00", "25.00"),
    "design": ("25.00", "25.00", "25.00"),
    "net": ("11.52", "11.52", "11.52"),
    "gg": ("75.00", "75.00", "75.00"),
    "xyz": ("2.00", "12.00", "12.00"),
    "email": ("20.00", "20.00", "20.00"),
    "ai": ("50.00", "50.00", "50.00"),
}


def domains(now: Optional[datetime] = None) -> list[Domain]:
    """Sample domain list."""
    now = now or datetime.now()
    result = []
    for name, created, expires, auto_renew, lock, privacy in _FIXTURES:
        result.append(Domain(
            name=name,
            tld=name.rsplit(".", 1)[1],
            status="ACTIVE",
            create_date=shift(now, *created),
            expire_date=shift(now, *expires),
            auto_renew=auto_renew,
            security_lock=lock,
            whois_privacy=privacy,
        ))
    return result


def pricing() -> dict[str, TLDPricing]:
    """Sample TLD price sheet."""
    return {
        tld: TLDPricing(tld=tld, registration=reg, renewal=renew, transfer=transfer)
        for tld, (reg, renew, transfer) in _PRICES.items()
    }
