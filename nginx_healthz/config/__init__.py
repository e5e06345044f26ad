"""Configuration module: service settings."""

from nginx_healthz.config.settings import HealthzSettings

__all__ = ["HealthzSettings"]
