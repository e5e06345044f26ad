"""HTTP routers exposing the client's operations."""

from nginx_healthz.routers.health import create_health_router
from nginx_healthz.routers.stats import create_stats_router

__all__ = ["create_health_router", "create_stats_router"]
