"""Client for the NGINX Plus upstream status API.

Resolves the health of single upstreams, discovers which upstreams belong to
a hostname through their zone names, and aggregates stats for many upstreams
concurrently. One ``httpx.AsyncClient`` is shared by every request so that
concurrent fetches reuse connections.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, ValidationError, field_validator

from nginx_healthz.integration.transport import NginxTransport
from nginx_healthz.middleware.error_handler import (
    ConfigurationError,
    NginxApiError,
    NoUpstreamsForHostError,
)
from nginx_healthz.models.nginx import UpstreamSnapshot, ZoneMap
from nginx_healthz.models.stats import AggregateStats, Stats
from nginx_healthz.services.aggregator import StatsAggregator
from nginx_healthz.services.stats import calculate_stats
from nginx_healthz.services.zones import hostname_upstreams

if TYPE_CHECKING:
    from nginx_healthz.config.settings import HealthzSettings

logger = logging.getLogger(__name__)

SUPPORTED_API_VERSIONS = (4, 5, 6, 7, 8)
DEFAULT_API_VERSION = 8
DEFAULT_TIMEOUT_SECONDS = 5.0


class ClientConfig(BaseModel):
    """Validated, immutable client configuration."""

    model_config = ConfigDict(frozen=True)

    base_url: AnyHttpUrl
    version: int = DEFAULT_API_VERSION
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("version")
    @classmethod
    def _supported_version(cls, value: int) -> int:
        if value not in SUPPORTED_API_VERSIONS:
            raise ValueError(f"unsupported NGINX API version: {value}")
        return value

    @property
    def api_root(self) -> str:
        return f"{str(self.base_url).rstrip('/')}/api/{self.version}"


class NginxClient:
    """Public surface for upstream health queries.

    Parameters
    ----------
    base_url:
        Absolute http(s) URL of the NGINX instance (e.g. "http://localhost:8080").
    version:
        NGINX Plus API version, one of ``SUPPORTED_API_VERSIONS``.
    timeout:
        Per-request deadline in seconds.
    http_client:
        Optional ``httpx.AsyncClient`` to use instead of an internal one.
        It is never closed by this client.
    transport:
        Optional ``httpx.AsyncBaseTransport`` (e.g. ``httpx.MockTransport``)
        for the internally created ``httpx.AsyncClient``.

    Raises
    ------
    ConfigurationError
        On an invalid URL, unsupported version, non-positive timeout, or a
        wrong-typed / conflicting HTTP override.
    """

    def __init__(
        self,
        base_url: str,
        *,
        version: int = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ConfigurationError("invalid base URL", base_url=base_url)
        try:
            self.config = ClientConfig(base_url=base_url, version=version, timeout=timeout)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(loc) for loc in first["loc"])
            raise ConfigurationError(f"invalid {field}: {first['msg']}", field=field) from exc

        if http_client is not None and transport is not None:
            raise ConfigurationError("pass either http_client or transport, not both")
        if http_client is not None and not isinstance(http_client, httpx.AsyncClient):
            raise ConfigurationError("http_client must be an httpx.AsyncClient")
        if transport is not None and not isinstance(transport, httpx.AsyncBaseTransport):
            raise ConfigurationError("transport must be an httpx.AsyncBaseTransport")

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(transport=transport)
        self._http = http_client
        self._transport = NginxTransport(self._http, timeout=self.config.timeout)
        self._aggregator = StatsAggregator(self.get_stats_for)

    @classmethod
    def from_settings(cls, settings: HealthzSettings, **kwargs: Any) -> NginxClient:
        """Build a client from ``HealthzSettings``; ``kwargs`` pass through."""
        return cls(
            settings.nginx_api_url,
            version=settings.nginx_api_version,
            timeout=settings.nginx_api_timeout_seconds,
            **kwargs,
        )

    @property
    def version(self) -> int:
        return self.config.version

    @property
    def base_url(self) -> str:
        return str(self.config.base_url).rstrip("/")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the internal HTTP client (a supplied one is left open)."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> NginxClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_stats_for(self, upstream: str) -> Stats:
        """Return up/down counts for one upstream.

        Raises
        ------
        NginxApiError
            Any transport failure, with ``upstream`` added to ``details``.
        EmptyUpstreamError
            If the upstream has no peers.
        """
        url = f"{self.config.api_root}/http/upstreams/{quote(upstream, safe='')}"
        try:
            snapshot = await self._transport.get(url, UpstreamSnapshot)
        except NginxApiError as exc:
            exc.details.setdefault("upstream", upstream)
            raise
        return calculate_stats(upstream, snapshot)

    async def get_upstreams_for(self, hostname: str) -> dict[str, list[str]]:
        """Return ``{hostname: [upstream, ...]}``, or ``{}`` if none match."""
        url = f"{self.config.api_root}/http/upstreams?fields=zone"
        try:
            zone_map = await self._transport.get(url, ZoneMap)
        except NginxApiError as exc:
            exc.details.setdefault("hostname", hostname)
            raise
        upstreams = hostname_upstreams(hostname, zone_map)
        logger.debug(
            "Resolved %d of %d upstreams for host %s",
            len(upstreams.get(hostname, [])),
            len(zone_map),
            hostname,
            extra={"hostname": hostname},
        )
        return upstreams

    async def get_stats_for_upstreams(self, upstreams: Iterable[str]) -> Stats:
        """Merged stats for ``upstreams``; failing upstreams are left out."""
        result = await self.aggregate_upstreams(upstreams)
        return result.stats

    async def get_stats_for_host(self, hostname: str) -> Stats:
        """Merged stats for every upstream whose zone belongs to ``hostname``.

        Raises
        ------
        NginxApiError
            If the zone map could not be retrieved.
        NoUpstreamsForHostError
            If no upstream belongs to ``hostname``.
        """
        result = await self.aggregate_host(hostname)
        return result.stats

    async def aggregate_upstreams(self, upstreams: Iterable[str]) -> AggregateStats:
        """Like ``get_stats_for_upstreams`` but also reports failed upstreams."""
        return await self._aggregator.aggregate(upstreams)

    async def aggregate_host(self, hostname: str) -> AggregateStats:
        """Like ``get_stats_for_host`` but also reports failed upstreams."""
        mapping = await self.get_upstreams_for(hostname)
        upstreams = mapping.get(hostname)
        if upstreams is None:
            raise NoUpstreamsForHostError(f"no stat data for host {hostname}", hostname=hostname)
        return await self.aggregate_upstreams(upstreams)
