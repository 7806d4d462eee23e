"""Tests for the httpx transport, using httpx.MockTransport, no network."""

import json
import logging

import httpx
import pytest

from asaas.domain.exceptions import ConnectionFailedError
from asaas.infrastructure.config import AsaasSettings
from asaas.infrastructure.http.httpx_transport import (
    USER_AGENT,
    HttpxTransport,
    build_http_client,
)

BASE_URL = "https://api-sandbox.asaas.com/v3/"


def _transport(responder, **kwargs):
    """Build a transport whose sleeps are recorded instead of waited."""
    sleeps: list[float] = []
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(responder))
    transport = HttpxTransport(client, sleep=sleeps.append, **kwargs)
    return transport, sleeps


def _sequence(*statuses):
    """Responder answering with *statuses* in order, recording each request."""
    remaining = list(statuses)
    seen: list[httpx.Request] = []

    def responder(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(remaining.pop(0), json={"status": len(seen)})

    return responder, seen


# ── Requests ─────────────────────────────────────────────────────────────────


class TestSend:

    def test_returns_raw_response(self):
        responder, _ = _sequence(201)
        transport, sleeps = _transport(responder)
        response = transport.send("POST", "customers", json={"name": "Ana"})
        assert response.status_code == 201
        assert json.loads(response.body) == {"status": 1}
        assert response.header("content-type") == "application/json"
        assert sleeps == []

    def test_builds_url_body_and_query(self):
        responder, seen = _sequence(200, 200)
        transport, _ = _transport(responder)
        transport.send("POST", "customers", json={"name": "Ana"})
        transport.send("GET", "customers", params={"limit": 10})
        assert seen[0].url.path == "/v3/customers"
        assert json.loads(seen[0].content) == {"name": "Ana"}
        assert seen[1].url.params["limit"] == "10"

    def test_error_status_is_not_raised(self):
        responder, _ = _sequence(404)
        transport, _ = _transport(responder)
        assert transport.send("GET", "customers/x").status_code == 404


# ── Retries ──────────────────────────────────────────────────────────────────


class TestRetries:

    def test_transient_status_retried(self):
        responder, seen = _sequence(503, 200)
        transport, sleeps = _transport(responder)
        assert transport.send("GET", "customers").status_code == 200
        assert len(seen) == 2
        assert sleeps == [1.0]

    def test_gives_up_after_three_retries(self):
        responder, seen = _sequence(429, 429, 429, 429)
        transport, sleeps = _transport(responder)
        assert transport.send("GET", "customers").status_code == 429
        assert len(seen) == 4
        assert sleeps == [1.0, 2.0, 3.0]

    def test_client_errors_not_retried(self):
        responder, seen = _sequence(400)
        transport, sleeps = _transport(responder)
        transport.send("POST", "payments", json={})
        assert len(seen) == 1
        assert sleeps == []

    def test_connection_error_retried_then_succeeds(self):
        calls = []

        def responder(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={})

        transport, sleeps = _transport(responder)
        assert transport.send("GET", "customers").status_code == 200
        assert sleeps == [1.0]

    def test_connection_error_exhausted(self):
        calls = []

        def responder(request):
            calls.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        transport, sleeps = _transport(responder)
        with pytest.raises(ConnectionFailedError) as exc_info:
            transport.send("GET", "customers")
        assert len(calls) == 4
        assert sleeps == [1.0, 2.0, 3.0]
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


# ── Logging ──────────────────────────────────────────────────────────────────


class TestRequestLogging:

    def test_body_logged_when_enabled(self, caplog):
        responder, _ = _sequence(200)
        transport, _ = _transport(responder, log_requests=True)
        with caplog.at_level(logging.INFO, logger="asaas.infrastructure.http.httpx_transport"):
            transport.send("POST", "customers", json={"name": "Ana"})
        assert '"name": "Ana"' in caplog.text

    def test_body_not_logged_by_default(self, caplog):
        responder, _ = _sequence(200)
        transport, _ = _transport(responder)
        with caplog.at_level(logging.INFO, logger="asaas.infrastructure.http.httpx_transport"):
            transport.send("POST", "customers", json={"name": "Ana"})
        assert "Ana" not in caplog.text

    def test_retry_logged_as_warning(self, caplog):
        responder, _ = _sequence(502, 200)
        transport, _ = _transport(responder)
        with caplog.at_level(logging.WARNING):
            transport.send("GET", "customers")
        assert "Retrying" in caplog.text


# ── Client factory ───────────────────────────────────────────────────────────


class TestBuildHttpClient:

    def test_headers_and_timeouts(self):
        settings = AsaasSettings(_env_file=None, sandbox_token="sandbox-token")
        client = build_http_client(settings)
        assert str(client.base_url) == BASE_URL
        assert client.headers["access_token"] == "sandbox-token"
        assert client.headers["User-Agent"] == USER_AGENT
        assert client.headers["Accept"] == "application/json"
        assert client.timeout.read == 30.0
        assert client.timeout.connect == 10.0
        client.close()

    def test_close_releases_client(self):
        responder, _ = _sequence()
        client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(responder))
        HttpxTransport(client).close()
        assert client.is_closed
