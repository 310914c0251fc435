"""
Shared fixtures: a scripted in-memory registrar and a domain factory.
"""

from datetime import datetime
from typing import Optional

import pytest

from porkbun_tui.models import AvailabilityResult, DNSRecord, Domain, TLDPricing
from porkbun_tui.registrar.base import RegistrarClient


class FakeRegistrar(RegistrarClient):
    """
    Registrar double with canned answers.

    list_domains() pops from domain_batches when set, so consecutive
    refreshes can return different lists. failures maps a method name to
    the exception it should raise.
    """

    def __init__(
        self,
        domains: Optional[list[Domain]] = None,
        pricing: Optional[dict[str, TLDPricing]] = None,
    ):
        self.domains = domains or []
        self.domain_batches: list[list[Domain]] = []
        self.pricing = pricing or {}
        self.records: dict[str, list[DNSRecord]] = {}
        self.nameservers: dict[str, list[str]] = {}
        self.available: dict[str, bool] = {}
        self.failures: dict[str, Exception] = {}
        self.updates: list[tuple[str, list[str]]] = []
        self.calls: list[str] = []
        self.closed = False

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        if method in self.failures:
            raise self.failures[method]

    @property
    def name(self) -> str:
        return "fake"

    async def ping(self) -> str:
        self._enter("ping")
        return "127.0.0.1"

    async def list_domains(self) -> list[Domain]:
        self._enter("list_domains")
        if self.domain_batches:
            return self.domain_batches.pop(0)
        return list(self.domains)

    async def get_dns_records(self, domain: str) -> list[DNSRecord]:
        self._enter("get_dns_records")
        return list(self.records.get(domain, []))

    async def get_nameservers(self, domain: str) -> list[str]:
        self._enter("get_nameservers")
        return list(self.nameservers.get(domain, []))

    async def update_nameservers(self, domain: str, nameservers: list[str]) -> None:
        self._enter("update_nameservers")
        self.updates.append((domain, list(nameservers)))
        self.nameservers[domain] = list(nameservers)

    async def check_availability(self, domain: str) -> AvailabilityResult:
        self._enter("check_availability")
        available = self.available.get(domain, False)
        return AvailabilityResult(domain=domain, available=available, price="9.73" if available else "")

    async def get_pricing(self) -> dict[str, TLDPricing]:
        self._enter("get_pricing")
        return dict(self.pricing)

    async def aclose(self) -> None:
        self.closed = True


def make_domain(name: str, expires: Optional[datetime] = None, **kwargs) -> Domain:
    return Domain(
        name=name,
        status="ACTIVE",
        create_date=datetime(2020, 1, 1),
        expire_date=expires,
        **kwargs,
    )


@pytest.fixture
def domain_factory():
    return make_domain


@pytest.fixture
def sample_domains():
    return [
        make_domain("zeta.com", datetime(2031, 6, 1), auto_renew=True),
        make_domain("alpha.io", datetime(2030, 1, 15)),
        make_domain("mid.dev", datetime(2030, 3, 1), auto_renew=True),
    ]


@pytest.fixture
def sample_pricing():
    return {
        "com": TLDPricing(tld="com", registration="9.73", renewal="10.00", transfer="9.73"),
        "io": TLDPricing(tld="io", registration="28.12", renewal="40.00", transfer="28.12"),
    }


@pytest.fixture
def registrar(sample_domains, sample_pricing):
    return FakeRegistrar(domains=sample_domains, pricing=sample_pricing)
