"""Upstream and host stats endpoints.

- GET /api/v1/upstreams/{upstream}/stats: stats for one upstream
- GET /api/v1/hosts/{hostname}/upstreams: upstreams owned by a hostname
- GET /api/v1/hosts/{hostname}/stats: merged stats for a hostname
- GET /api/v1/stats?upstream=a&upstream=b: merged stats for named upstreams

Merged endpoints list upstreams whose fetch failed in ``meta.failed_upstreams``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query

from nginx_healthz.models.responses import ApiResponse
from nginx_healthz.models.stats import AggregateStats

if TYPE_CHECKING:
    from nginx_healthz.integration.nginx_client import NginxClient

logger = logging.getLogger(__name__)


def _aggregate_response(result: AggregateStats) -> dict:
    return ApiResponse(
        success=True,
        data=result.stats.model_dump(),
        meta={
            "upstreams": result.upstreams,
            "failed_upstreams": result.failed,
        },
    ).model_dump()


def create_stats_router(*, client: NginxClient) -> APIRouter:
    """Factory that creates the stats router with the injected client."""

    stats_router = APIRouter(prefix="/api/v1", tags=["stats"])

    @stats_router.get("/upstreams/{upstream}/stats")
    async def upstream_stats(upstream: str) -> dict:
        """Total/up/down for a single upstream."""
        stats = await client.get_stats_for(upstream)
        return ApiResponse(success=True, data=stats.model_dump()).model_dump()

    @stats_router.get("/hosts/{hostname}/upstreams")
    async def host_upstreams(hostname: str) -> dict:
        """Upstream names whose zone belongs to ``hostname``."""
        upstreams = await client.get_upstreams_for(hostname)
        return ApiResponse(
            success=True,
            data={"hostname": hostname, "upstreams": upstreams.get(hostname, [])},
        ).model_dump()

    @stats_router.get("/hosts/{hostname}/stats")
    async def host_stats(hostname: str) -> dict:
        """Merged stats for every upstream of ``hostname``."""
        result = await client.aggregate_host(hostname)
        if result.failed:
            logger.info(
                "Host %s stats partial: %d of %d upstreams failed",
                hostname,
                len(result.failed),
                len(result.upstreams),
                extra={"hostname": hostname, "failed_upstreams": result.failed},
            )
        return _aggregate_response(result)

    @stats_router.get("/stats")
    async def upstreams_stats(upstream: list[str] = Query(..., min_length=1)) -> dict:
        """Merged stats for the upstreams given as repeated ``upstream`` params."""
        result = await client.aggregate_upstreams(upstream)
        return _aggregate_response(result)

    return stats_router
