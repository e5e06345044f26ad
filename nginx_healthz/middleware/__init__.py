"""Middleware package: error hierarchy and exception handlers."""

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
    register_error_handlers,
)

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "EmptyUpstreamError",
    "HealthzError",
    "NginxApiError",
    "NoUpstreamsForHostError",
    "RequestBuildError",
    "TransportError",
    "UnexpectedStatusError",
    "register_error_handlers",
]
