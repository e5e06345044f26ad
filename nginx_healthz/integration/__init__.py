"""NGINX API integration: transport and client facade."""

from nginx_healthz.integration.nginx_client import (
    DEFAULT_API_VERSION,
    SUPPORTED_API_VERSIONS,
    ClientConfig,
    NginxClient,
)
from nginx_healthz.integration.transport import NginxTransport

__all__ = [
    "DEFAULT_API_VERSION",
    "SUPPORTED_API_VERSIONS",
    "ClientConfig",
    "NginxClient",
    "NginxTransport",
]
