"""Pydantic Settings for the healthz service.

All environment variables use the HEALTHZ_ prefix.
Example: HEALTHZ_NGINX_API_URL=http://nginx:8080, HEALTHZ_PORT=9000
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class HealthzSettings(BaseSettings):
    """Healthz service configuration validated from environment variables."""

    # Service
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"

    # NGINX Plus API
    nginx_api_url: str  # e.g. "http://nginx.internal:8080"
    nginx_api_version: int = 8
    nginx_api_timeout_seconds: float = Field(default=5.0, gt=0)

    model_config = {"env_prefix": "HEALTHZ_"}
