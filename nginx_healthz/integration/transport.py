"""JSON-over-HTTP transport for the NGINX status API.

Issues one GET per call with a per-request deadline, accepts only HTTP 200,
and decodes the body straight into a Pydantic model. Every failure is
classified into one of the ``NginxApiError`` subclasses so callers can tell
network problems apart from API-level ones. No retries are attempted.
"""

from __future__ import annotations

import logging
import time
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from nginx_healthz.middleware.error_handler import (
    DecodeError,
    RequestBuildError,
    TransportError,
    UnexpectedStatusError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_HEADERS = {"Content-Type": "application/json"}


class NginxTransport:
    """Thin wrapper around a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    http_client:
        Client used for every request. It is shared by all concurrent
        fetches and is not closed by the transport.
    timeout:
        Deadline in seconds applied to each request independently.
    """

    def __init__(self, http_client: httpx.AsyncClient, timeout: float) -> None:
        self._http = http_client
        self._timeout = timeout

    async def get(self, url: str, model: type[ModelT]) -> ModelT:
        """GET ``url`` and decode the JSON body as ``model``.

        Raises
        ------
        RequestBuildError
            If ``url`` is not a usable absolute http(s) URL.
        TransportError
            If the request could not be sent or the response not read.
        UnexpectedStatusError
            If the status code is not 200.
        DecodeError
            If the body is not valid JSON for ``model``.
        """
        try:
            request = self._http.build_request(
                "GET", url, headers=_HEADERS, timeout=self._timeout
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestBuildError(f"creating request: {exc}", url=url) from exc

        started = time.monotonic()
        try:
            response = await self._http.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise RequestBuildError(f"creating request: {exc}", url=url) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"sending request: timed out after {self._timeout}s",
                timed_out=True,
                url=url,
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(f"sending request: {exc}", url=url) from exc
        except httpx.DecodingError as exc:
            raise DecodeError(f"reading response body: {exc}", url=url) from exc
        except httpx.RequestError as exc:
            # TooManyRedirects and any other request-level failure
            raise TransportError(f"sending request: {exc}", url=url) from exc

        try:
            duration_ms = round((time.monotonic() - started) * 1000, 2)
            logger.debug(
                "GET %s -> %d",
                url,
                response.status_code,
                extra={"url": url, "status_code": response.status_code, "duration_ms": duration_ms},
            )

            if response.status_code != httpx.codes.OK:
                raise UnexpectedStatusError(response.status_code, url=url)

            try:
                body = await response.aread()
            except httpx.DecodingError as exc:
                raise DecodeError(f"reading response body: {exc}", url=url) from exc
            except httpx.RequestError as exc:
                raise TransportError(f"reading response body: {exc}", url=url) from exc

            try:
                return model.model_validate_json(body)
            except ValidationError as exc:
                raise DecodeError(
                    f"unmarshaling response body: {exc.error_count()} validation error(s)",
                    url=url,
                ) from exc
        finally:
            await response.aclose()
