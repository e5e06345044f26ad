"""Upstream health stats for NGINX Plus, per upstream or per host."""

from nginx_healthz.integration.nginx_client import (
    DEFAULT_API_VERSION,
    SUPPORTED_API_VERSIONS,
    ClientConfig,
    NginxClient,
)
from nginx_healthz.middleware.error_handler import (
    ConfigurationError,
    DecodeError,
    EmptyUpstreamError,
    HealthzError,
    NginxApiError,
    NoUpstreamsForHostError,
    RequestBuildError,
    TransportError,
    UnexpectedStatusError,
)
from nginx_healthz.models.stats import AggregateStats, Stats

__all__ = [
    "DEFAULT_API_VERSION",
    "SUPPORTED_API_VERSIONS",
    "AggregateStats",
    "ClientConfig",
    "ConfigurationError",
    "DecodeError",
    "EmptyUpstreamError",
    "HealthzError",
    "NginxApiError",
    "NginxClient",
    "NoUpstreamsForHostError",
    "RequestBuildError",
    "Stats",
    "TransportError",
    "UnexpectedStatusError",
]
