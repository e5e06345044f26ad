"""Shared test fixtures and a fake NGINX API for the healthz test suite."""

from __future__ import annotations

import os
from collections.abc import Callable

import httpx
import pytest

from nginx_healthz.config.settings import HealthzSettings
from nginx_healthz.integration.nginx_client import NginxClient

BASE_URL = "http://nginx.test:8080"


# ---------------------------------------------------------------------------
# Ensure required env vars are set for HealthzSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so HealthzSettings can be instantiated in tests."""
    if "HEALTHZ_NGINX_API_URL" not in os.environ:
        monkeypatch.setenv("HEALTHZ_NGINX_API_URL", BASE_URL)


@pytest.fixture
def settings() -> HealthzSettings:
    """Test settings with safe defaults."""
    return HealthzSettings(
        nginx_api_url=BASE_URL,
        nginx_api_version=8,
        nginx_api_timeout_seconds=1.0,
    )


# ---------------------------------------------------------------------------
# NGINX API payloads
# ---------------------------------------------------------------------------

def _peer(peer_id: int, server: str, state: str) -> dict:
    return {
        "id": peer_id,
        "server": server,
        "name": server,
        "backup": False,
        "weight": 1,
        "state": state,
        "active": 0,
        "ssl": {"handshakes": 12, "handshakes_failed": 0, "session_reuses": 3},
        "requests": 1345,
        "header_time": 4,
        "response_time": 6,
        "responses": {
            "1xx": 0,
            "2xx": 1300,
            "3xx": 40,
            "4xx": 5,
            "5xx": 0,
            "codes": {"200": 1300, "301": 30, "304": 10, "404": 5},
            "total": 1345,
        },
        "sent": 552314,
        "received": 18921344,
        "fails": 0,
        "unavail": 0,
        "health_checks": {"checks": 2405, "fails": 0, "unhealthy": 0, "last_passed": True},
        "downtime": 0,
        "selected": "2022-03-14T12:14:24Z",
    }


def upstream_payload(*states: str, zone: str = "demo-backend") -> dict:
    """Build a ``/http/upstreams/{name}`` body with one peer per state."""
    return {
        "peers": [
            _peer(i, f"10.0.0.{i + 1}:80", state) for i, state in enumerate(states)
        ],
        "keepalive": 0,
        "zombies": 0,
        "zone": zone,
    }


ZONES_PAYLOAD = {
    "hg-backend": {"zone": "bar.example.org-hg-backend"},
    "lxr-backend": {"zone": "bar.example.org-lxr-backend"},
    "demo-backend": {"zone": "foo.example.com-demo-backend"},
}

UPSTREAM_PAYLOADS = {
    "demo-backend": upstream_payload("up", "up", zone="foo.example.com-demo-backend"),
    "hg-backend": upstream_payload("up", "unavail", zone="bar.example.org-hg-backend"),
    "lxr-backend": upstream_payload("up", "up", zone="bar.example.org-lxr-backend"),
}


@pytest.fixture
def upstream_payloads() -> dict[str, dict]:
    return dict(UPSTREAM_PAYLOADS)


@pytest.fixture
def zones_payload() -> dict:
    return dict(ZONES_PAYLOAD)


# ---------------------------------------------------------------------------
# Fake NGINX API
# ---------------------------------------------------------------------------

def nginx_api_handler(
    upstreams: dict[str, dict],
    zones: dict | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """MockTransport handler serving the two NGINX API shapes.

    Unknown upstreams get a 404 like the real API.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        prefix = "/api/8/http/upstreams"
        if path == prefix and request.url.params.get("fields") == "zone":
            return httpx.Response(200, json=zones if zones is not None else ZONES_PAYLOAD)
        if path.startswith(prefix + "/"):
            name = path[len(prefix) + 1:]
            if name in upstreams:
                return httpx.Response(200, json=upstreams[name])
        return httpx.Response(
            404,
            json={"error": {"status": 404, "text": "upstream not found", "code": "UpstreamNotFound"}},
        )

    return handler


@pytest.fixture
def make_client() -> Callable[..., NginxClient]:
    """Factory building an ``NginxClient`` on top of an ``httpx.MockTransport``."""

    def _make(handler: Callable, **kwargs: object) -> NginxClient:
        return NginxClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def nginx_client(make_client, upstream_payloads, zones_payload) -> NginxClient:
    """Client talking to a fake API with demo/hg/lxr upstreams."""
    return make_client(nginx_api_handler(upstream_payloads, zones_payload))


@pytest.fixture
def api_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Expose ``nginx_api_handler`` to tests that need custom payloads."""
    return nginx_api_handler


@pytest.fixture
def build_upstream() -> Callable[..., dict]:
    """Expose ``upstream_payload`` to tests that need custom peer states."""
    return upstream_payload
