"""Liveness endpoint.

- GET /health: service status and the NGINX API the client talks to
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from nginx_healthz.logging_config import redact_url
from nginx_healthz.models.responses import ApiResponse

if TYPE_CHECKING:
    from nginx_healthz.integration.nginx_client import NginxClient


def create_health_router(*, client: NginxClient) -> APIRouter:
    """Factory that creates the health router with the injected client."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Service health check; does not contact NGINX."""
        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "nginx_api_url": redact_url(client.base_url),
                "nginx_api_version": client.version,
            },
        ).model_dump()

    return health_router
