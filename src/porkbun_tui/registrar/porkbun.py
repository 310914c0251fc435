"""
Porkbun registrar client

Talks to the Porkbun JSON API v3. Every endpoint is a POST with the key
pair in the body; failures come back as {"status": "ERROR", "message": ...}
often with a 4xx status code.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from ..config import Credentials, config
from ..models import REGISTRAR_TIME_FORMAT, AvailabilityResult, DNSRecord, Domain, TLDPricing
from .base import (
    APIResponseError, AuthenticationError, FetchError, RateLimitError, RegistrarClient,
)

logger = logging.getLogger(__name__)


def _flag(value: Any) -> bool:
    """Porkbun encodes booleans as 1/0, "1"/"0", "yes"/"no" or real bools."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "yes", "true")
    return bool(value)


def _timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.strptime(value, REGISTRAR_TIME_FORMAT)
    except ValueError:
        logger.warning("Unparseable registrar timestamp: %r", value)
        return None


def parse_domain(raw: dict) -> Domain:
    """Convert one domain/listAll entry into a Domain."""
    labels = [label.get("title", "") for label in raw.get("labels") or [] if isinstance(label, dict)]
    return Domain(
        name=raw.get("domain", ""),
        tld=raw.get("tld", ""),
        status=raw.get("status") or "",
        create_date=_timestamp(raw.get("createDate")),
        expire_date=_timestamp(raw.get("expireDate")),
        security_lock=_flag(raw.get("securityLock")),
        whois_privacy=_flag(raw.get("whoisPrivacy")),
        auto_renew=_flag(raw.get("autoRenew")),
        not_local=_flag(raw.get("notLocal")),
        labels=[label for label in labels if label],
    )


def parse_record(raw: dict) -> DNSRecord:
    """Convert one dns/retrieve entry into a DNSRecord."""
    return DNSRecord(
        id=str(raw.get("id") or ""),
        name=raw.get("name", ""),
        type=raw.get("type", ""),
        content=raw.get("content", ""),
        ttl=str(raw.get("ttl") or ""),
        priority=str(raw.get("prio") or ""),
        notes=raw.get("notes") or "",
    )


class PorkbunClient(RegistrarClient):
    """
    Porkbun API client.

    Requires an API key pair with API access enabled on each domain that
    DNS or nameserver calls are made for.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        page_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Porkbun client.

        Args:
            credentials: API key pair
            base_url: API root (defaults to config.api.base_url)
            timeout: Request timeout in seconds
            page_size: Domains per domain/listAll page
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._credentials = credentials
        self._base_url = (base_url or config.api.base_url).rstrip("/")
        self._timeout = timeout or config.api.timeout_seconds
        self._page_size = page_size or config.api.page_size
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    @property
    def name(self) -> str:
        return "porkbun"

    async def _post(self, path: str, payload: Optional[dict] = None, auth: bool = True) -> dict:
        """
        POST to an endpoint and return the decoded SUCCESS body.

        Raises:
            AuthenticationError: On 401/403 or an invalid-key message
            RateLimitError: On 429
            APIResponseError: When the body status is not SUCCESS
            FetchError: On transport or decoding failures
        """
        body = dict(payload or {})
        if auth:
            body.update(self._credentials.as_payload())

        client = self._get_client()
        try:
            response = await client.post(path, json=body)
        except httpx.HTTPError as e:
            raise FetchError(f"Porkbun request to {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code == 429:
            raise RateLimitError("Porkbun rate limit exceeded - try again later")

        message = data.get("message", "") if isinstance(data, dict) else ""
        if response.status_code in (401, 403) or "invalid api key" in message.lower():
            raise AuthenticationError(f"Porkbun authentication failed: {message or response.status_code}")

        if not isinstance(data, dict):
            raise FetchError(f"Porkbun returned HTTP {response.status_code} with a non-JSON body")

        status = str(data.get("status", ""))
        if status.upper() != "SUCCESS":
            raise APIResponseError(message or f"Porkbun returned status {status or response.status_code}", status)

        return data

    async def ping(self) -> str:
        data = await self._post("/ping")
        return data.get("yourIp", "")

    async def list_domains(self) -> list[Domain]:
        """List every domain on the account, following pagination."""
        domains: list[Domain] = []
        start = 0
        while True:
            data = await self._post("/domain/listAll", {"start": str(start), "includeLabels": "yes"})
            page = data.get("domains") or []
            domains.extend(parse_domain(raw) for raw in page)
            if len(page) < self._page_size:
                break
            start += len(page)

        logger.info("Fetched %d domains", len(domains))
        return domains

    async def get_dns_records(self, domain: str) -> list[DNSRecord]:
        data = await self._post(f"/dns/retrieve/{domain}")
        return [parse_record(raw) for raw in data.get("records") or []]

    async def get_nameservers(self, domain: str) -> list[str]:
        data = await self._post(f"/domain/getNs/{domain}")
        return list(data.get("ns") or [])

    async def update_nameservers(self, domain: str, nameservers: list[str]) -> None:
        await self._post(f"/domain/updateNs/{domain}", {"ns": list(nameservers)})
        logger.info("Updated nameservers for %s: %s", domain, ", ".join(nameservers))

    async def check_availability(self, domain: str) -> AvailabilityResult:
        data = await self._post(f"/domain/checkDomain/{domain}")
        response = data.get("response") or {}
        return AvailabilityResult(
            domain=domain,
            available=_flag(response.get("avail")),
            price=str(response.get("price") or ""),
            premium=_flag(response.get("premium")),
        )

    async def get_pricing(self) -> dict[str, TLDPricing]:
        """Registrar-wide price sheet. Needs no credentials."""
        data = await self._post("/pricing/get", auth=False)
        pricing: dict[str, TLDPricing] = {}
        for tld, prices in (data.get("pricing") or {}).items():
            pricing[tld] = TLDPricing(
                tld=tld,
                registration=str(prices.get("registration", "")),
                renewal=str(prices.get("renewal", "")),
                transfer=str(prices.get("transfer", "")),
            )
        return pricing

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
