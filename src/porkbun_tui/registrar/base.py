"""
Base protocol for registrar clients

Defines the operations the dashboard needs from a registrar and the
errors they raise. Every call is a single request/response; retries and
backoff are left to the user pressing refresh.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import AvailabilityResult, DNSRecord, Domain, TLDPricing


class FetchError(Exception):
    """Base exception for registrar call failures."""
    pass


class AuthenticationError(FetchError):
    """Credentials rejected."""
    pass


class RateLimitError(FetchError):
    """Rate limit exceeded."""
    pass


class APIResponseError(FetchError):
    """Registrar answered with a non-SUCCESS status."""

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.status = status


def is_api_access_error(err: Optional[BaseException]) -> bool:
    """Whether the error means API access is switched off for the domain."""
    if err is None:
        return False
    text = str(err).lower()
    return "not opted in" in text or "api access" in text


class RegistrarClient(ABC):
    """
    Abstract base class for registrar clients.

    All methods are coroutines and raise FetchError (or a subclass) on
    failure. Implementations hold no dashboard state.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registrar name (e.g., 'porkbun')."""
        pass

    @abstractmethod
    async def ping(self) -> str:
        """Check credentials; returns the caller's IP as seen by the registrar."""
        pass

    @abstractmethod
    async def list_domains(self) -> list[Domain]:
        pass

    @abstractmethod
    async def get_dns_records(self, domain: str) -> list[DNSRecord]:
        pass

    @abstractmethod
    async def get_nameservers(self, domain: str) -> list[str]:
        pass

    @abstractmethod
    async def update_nameservers(self, domain: str, nameservers: list[str]) -> None:
        pass

    @abstractmethod
    async def check_availability(self, domain: str) -> AvailabilityResult:
        pass

    @abstractmethod
    async def get_pricing(self) -> dict[str, TLDPricing]:
        """Pricing for every TLD the registrar sells, keyed by TLD label."""
        pass

    async def aclose(self) -> None:
        """Release network resources."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
