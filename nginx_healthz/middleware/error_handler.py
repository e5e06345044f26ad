"""Global error hierarchy and FastAPI exception handlers.

All healthz-specific errors extend HealthzError. The client raises them
directly; when the client is served over HTTP, the FastAPI exception handlers
below turn them (plus Pydantic's RequestValidationError and unhandled
exceptions) into the JSON envelope: { success, data, error, meta }.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class HealthzError(Exception):
    """Base error for all healthz-specific errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(HealthzError):
    """Invalid client configuration (base URL, API version, HTTP layer)."""

    status_code = 500
    message = "Invalid client configuration"


class NginxApiError(HealthzError):
    """Base for failures talking to the NGINX status API."""

    status_code = 502
    message = "NGINX API request failed"


class RequestBuildError(NginxApiError):
    """The request URL is structurally invalid."""

    status_code = 500
    message = "Could not build NGINX API request"


class TransportError(NginxApiError):
    """The network call itself failed (connect, DNS, read, timeout)."""

    status_code = 502
    message = "NGINX API unreachable"

    def __init__(
        self, message: str | None = None, *, timed_out: bool = False, **kwargs: object
    ) -> None:
        super().__init__(message, **kwargs)
        self.timed_out = timed_out
        if timed_out:
            self.status_code = 504


class UnexpectedStatusError(NginxApiError):
    """The NGINX API answered with a status other than 200."""

    status_code = 502
    message = "Unexpected response status from NGINX API"

    def __init__(self, code: int, message: str | None = None, **kwargs: object) -> None:
        self.code = code
        super().__init__(message or f"got response code: {code}", code=code, **kwargs)


class DecodeError(NginxApiError):
    """The response body is not JSON or does not match the expected shape."""

    status_code = 502
    message = "Could not decode NGINX API response"


class EmptyUpstreamError(HealthzError):
    """Upstream has no peers, usually a misspelled or unknown upstream."""

    status_code = 404
    message = "No servers in upstream"


class NoUpstreamsForHostError(HealthzError):
    """No upstream zone maps to the requested hostname."""

    status_code = 404
    message = "No stat data for host"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _envelope(
    status_code: int,
    error: str,
    meta: dict | None = None,
) -> JSONResponse:
    """Build a JSON envelope error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "data": None,
            "error": error,
            "meta": meta,
        },
    )


async def _healthz_error_handler(_request: Request, exc: HealthzError) -> JSONResponse:
    """Handle HealthzError subclasses."""
    meta = exc.details if exc.details else None
    return _envelope(exc.status_code, exc.message, meta=meta)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError (422)."""
    field_errors = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return _envelope(
        status_code=422,
        error="Validation error",
        meta={"fields": field_errors},
    )


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log the traceback and return a generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _envelope(status_code=500, error="Internal server error")


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(HealthzError, _healthz_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
