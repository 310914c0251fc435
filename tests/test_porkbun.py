"""
Tests for the Porkbun registrar client against a mocked transport.
"""

import json
from datetime import datetime

import httpx
import pytest

from porkbun_tui.config import Credentials
from porkbun_tui.registrar import (
    APIResponseError,
    AuthenticationError,
    FetchError,
    PorkbunClient,
    RateLimitError,
)
from porkbun_tui.registrar.base import is_api_access_error
from porkbun_tui.registrar.porkbun import parse_domain, parse_record

CREDS = Credentials(api_key="pk1_test", secret_key="sk1_test")


def raw_domain(name: str, expires: str = "2030-05-01 12:00:00") -> dict:
    return {
        "domain": name,
        "status": "ACTIVE",
        "tld": name.rsplit(".", 1)[1],
        "createDate": "2020-05-01 12:00:00",
        "expireDate": expires,
        "securityLock": "1",
        "whoisPrivacy": "1",
        "autoRenew": 0,
        "notLocal": 0,
        "labels": [{"id": "1", "title": "work", "color": "#fff"}],
    }


class Recorder:
    """MockTransport handler that records requests and replies from a script."""

    def __init__(self, reply):
        self.reply = reply
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content or b"{}")
        self.requests.append((request.url.path, body))
        return self.reply(request.url.path, body)


def make_client(reply, page_size=None):
    recorder = Recorder(reply)
    client = PorkbunClient(
        CREDS,
        base_url="https://api.example.test/api/json/v3",
        page_size=page_size,
        transport=httpx.MockTransport(recorder),
    )
    return client, recorder


def success(**data) -> httpx.Response:
    return httpx.Response(200, json={"status": "SUCCESS", **data})


class TestParsing:
    """Tests for raw payload parsing."""

    def test_parse_domain(self):
        domain = parse_domain(raw_domain("example.com"))

        assert domain.name == "example.com"
        assert domain.tld == "com"
        assert domain.expire_date == datetime(2030, 5, 1, 12, 0, 0)
        assert domain.security_lock is True
        assert domain.auto_renew is False
        assert domain.labels == ["work"]

    def test_bad_timestamp_becomes_none(self):
        domain = parse_domain(raw_domain("example.com", expires="soon"))

        assert domain.expire_date is None

    def test_parse_record(self):
        record = parse_record({
            "id": 106926659, "name": "www.example.com", "type": "A",
            "content": "1.1.1.1", "ttl": "600", "prio": None, "notes": "",
        })

        assert record.id == "106926659"
        assert record.ttl == "600"
        assert record.priority == ""


class TestPorkbunClient:
    """Tests for PorkbunClient endpoints."""

    @pytest.mark.asyncio
    async def test_list_domains_paginates(self):
        pages = {
            "0": [raw_domain("a.com"), raw_domain("b.com")],
            "2": [raw_domain("c.io")],
        }
        client, recorder = make_client(
            lambda path, body: success(domains=pages[body["start"]]),
            page_size=2,
        )

        domains = await client.list_domains()

        assert [d.name for d in domains] == ["a.com", "b.com", "c.io"]
        assert [body["start"] for _, body in recorder.requests] == ["0", "2"]
        path, body = recorder.requests[0]
        assert path.endswith("/domain/listAll")
        assert body["apikey"] == "pk1_test"
        assert body["secretapikey"] == "sk1_test"
        assert body["includeLabels"] == "yes"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dns_records(self):
        client, recorder = make_client(lambda path, body: success(records=[
            {"id": "1", "name": "example.com", "type": "MX", "content": "mx.example.com", "ttl": "600", "prio": "10"},
        ]))

        records = await client.get_dns_records("example.com")

        assert recorder.requests[0][0].endswith("/dns/retrieve/example.com")
        assert records[0].type == "MX"
        assert records[0].priority == "10"

    @pytest.mark.asyncio
    async def test_nameservers_read_and_update(self):
        client, recorder = make_client(lambda path, body: success(ns=["ns1.example.net", "ns2.example.net"]))

        assert await client.get_nameservers("example.com") == ["ns1.example.net", "ns2.example.net"]
        await client.update_nameservers("example.com", ["ns1.cloudflare.com"])

        path, body = recorder.requests[1]
        assert path.endswith("/domain/updateNs/example.com")
        assert body["ns"] == ["ns1.cloudflare.com"]

    @pytest.mark.asyncio
    async def test_check_availability(self):
        client, _ = make_client(lambda path, body: success(response={
            "avail": "yes", "price": "9.73", "premium": "no",
        }))

        result = await client.check_availability("fresh-idea.com")

        assert result.domain == "fresh-idea.com"
        assert result.available is True
        assert result.price == "9.73"
        assert result.premium is False

    @pytest.mark.asyncio
    async def test_pricing_without_credentials(self):
        client, recorder = make_client(lambda path, body: success(pricing={
            "com": {"registration": "9.73", "renewal": "10.37", "transfer": "9.73"},
        }))

        pricing = await client.get_pricing()

        assert pricing["com"].renewal_price == 10.37
        assert "apikey" not in recorder.requests[0][1]

    @pytest.mark.asyncio
    async def test_error_status(self):
        client, _ = make_client(lambda path, body: httpx.Response(400, json={
            "status": "ERROR", "message": "Domain is not opted in to API access.",
        }))

        with pytest.raises(APIResponseError) as exc_info:
            await client.get_nameservers("example.com")

        assert is_api_access_error(exc_info.value)
        assert exc_info.value.status == "ERROR"

    @pytest.mark.asyncio
    async def test_invalid_key(self):
        client, _ = make_client(lambda path, body: httpx.Response(400, json={
            "status": "ERROR", "message": "Invalid API key. (002)",
        }))

        with pytest.raises(AuthenticationError):
            await client.ping()

    @pytest.mark.asyncio
    async def test_forbidden(self):
        client, _ = make_client(lambda path, body: httpx.Response(403, text="Forbidden"))

        with pytest.raises(AuthenticationError):
            await client.list_domains()

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        client, _ = make_client(lambda path, body: httpx.Response(429, json={"status": "ERROR"}))

        with pytest.raises(RateLimitError):
            await client.get_pricing()

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def boom(path, body):
            raise httpx.ConnectError("connection refused")

        client, _ = make_client(boom)

        with pytest.raises(FetchError):
            await client.ping()

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        client, _ = make_client(lambda path, body: httpx.Response(502, text="<html>bad gateway</html>"))

        with pytest.raises(FetchError):
            await client.ping()

    def test_repr(self):
        client, _ = make_client(lambda path, body: success())

        assert repr(client) == "PorkbunClient(name='porkbun')"
