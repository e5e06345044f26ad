"""Command-line entry point: serve the healthz API with uvicorn.

Configuration comes from HEALTHZ_* environment variables. An invalid NGINX
API URL or version exits with status 2 before the server starts.
"""

import sys

import uvicorn

from nginx_healthz.config.settings import HealthzSettings
from nginx_healthz.logging_config import configure_logging
from nginx_healthz.main import create_app
from nginx_healthz.middleware.error_handler import ConfigurationError


def main() -> None:
    settings = HealthzSettings()  # type: ignore[call-arg]
    configure_logging(settings.log_level)

    try:
        app = create_app(settings)
    except ConfigurationError as exc:
        print(f"nginx-healthz: {exc.message}", file=sys.stderr)
        sys.exit(2)

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
