"""
Registrar data model

Plain dataclasses for what the registrar hands back. Everything here is
replaced wholesale on refresh; nothing is merged field by field.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

# Registrar timestamp format, also used for display
REGISTRAR_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


@dataclass
class Domain:
    """A registered domain."""
    name: str
    tld: str = ""
    status: str = ""
    create_date: Optional[datetime] = None
    expire_date: Optional[datetime] = None
    security_lock: bool = False
    whois_privacy: bool = False
    auto_renew: bool = False
    not_local: bool = False
    labels: list[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.tld and "." in self.name:
            self.tld = self.name.rsplit(".", 1)[1].lower()

    def days_until_expiry(self, now: Optional[datetime] = None) -> int:
        """Whole days until expiration, truncated toward zero."""
        if self.expire_date is None:
            return 0
        now = now or datetime.now()
        return int((self.expire_date - now).total_seconds() / 86400)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "tld": self.tld,
            "status": self.status,
            "create_date": self.create_date.isoformat() if self.create_date else None,
            "expire_date": self.expire_date.isoformat() if self.expire_date else None,
            "security_lock": self.security_lock,
            "whois_privacy": self.whois_privacy,
            "auto_renew": self.auto_renew,
            "not_local": self.not_local,
            "labels": list(self.labels),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Domain":
        return cls(
            name=data["name"],
            tld=data.get("tld", ""),
            status=data.get("status", ""),
            create_date=_parse_time(data.get("create_date")),
            expire_date=_parse_time(data.get("expire_date")),
            security_lock=bool(data.get("security_lock", False)),
            whois_privacy=bool(data.get("whois_privacy", False)),
            auto_renew=bool(data.get("auto_renew", False)),
            not_local=bool(data.get("not_local", False)),
            labels=list(data.get("labels") or []),
        )


@dataclass
class DNSRecord:
    """A DNS record as returned by the registrar. Read-only here."""
    id: str
    name: str
    type: str
    content: str
    ttl: str = ""
    priority: str = ""
    notes: str = ""


@dataclass
class TLDPricing:
    """Per-TLD prices, kept as the registrar's decimal strings."""
    tld: str
    registration: str = ""
    renewal: str = ""
    transfer: str = ""

    @property
    def renewal_price(self) -> float:
        """Renewal price as a float, 0.0 when missing or unparseable."""
        try:
            return float(self.renewal)
        except (TypeError, ValueError):
            return 0.0

    def to_dict(self) -> dict:
        return {
            "tld": self.tld,
            "registration": self.registration,
            "renewal": self.renewal,
            "transfer": self.transfer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TLDPricing":
        return cls(
            tld=data["tld"],
            registration=data.get("registration", ""),
            renewal=data.get("renewal", ""),
            transfer=data.get("transfer", ""),
        )


@dataclass
class AvailabilityResult:
    """Outcome of a single availability check."""
    domain: str
    available: bool
    price: str = ""
    premium: bool = False

    def __str__(self):
        if self.available:
            suffix = f" {self.price}" if self.price else ""
            return f"{self.domain}: AVAILABLE{suffix}"
        return f"{self.domain}: TAKEN"
