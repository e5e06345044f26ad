"""FastAPI application entry point with lifespan management.

Startup: validate settings, build the NGINX client (fails fast on a bad API
URL or version), mount routers.
Shutdown: close the client's HTTP connection pool.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from nginx_healthz.config.settings import HealthzSettings
from nginx_healthz.integration.nginx_client import NginxClient
from nginx_healthz.middleware.error_handler import register_error_handlers
from nginx_healthz.routers.health import create_health_router
from nginx_healthz.routers.stats import create_stats_router

logger = logging.getLogger(__name__)


def create_app(
    settings: HealthzSettings | None = None,
    client: NginxClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``settings`` default to ``HealthzSettings()`` so that a missing
    ``HEALTHZ_NGINX_API_URL`` fails at startup. A ready-made ``client`` may be
    injected (tests); otherwise one is built from the settings.
    """
    if client is None:
        settings = settings or HealthzSettings()  # type: ignore[call-arg]
        client = NginxClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Healthz service started for NGINX API %s (version %d)",
            client.base_url,
            client.version,
        )
        yield
        logger.info("Shutting down healthz service…")
        await client.aclose()

    app = FastAPI(
        title="NGINX Healthz Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.include_router(create_health_router(client=client))
    app.include_router(create_stats_router(client=client))

    app.state.client = client
    return app
