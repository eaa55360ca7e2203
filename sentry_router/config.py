"""Router configuration — env-driven via pydantic-settings.

Reads from a .env file and SENTRY_ROUTER_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from sentry_router import __version__


class RouterConfig(BaseSettings):
    """Process-wide configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SENTRY_ROUTER_ROUTES_FILE=/etc/sentry/routing.json
        export SENTRY_ROUTER_LOG_LEVEL=DEBUG
        export SENTRY_ROUTER_HTTP_TIMEOUT=5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SENTRY_ROUTER_",
        env_file_encoding="utf-8",
    )

    # Runtime environment.  Unset log_level follows the environment.
    environment: str = "development"
    log_level: str | None = None

    # Route source.  A missing file falls back to the built-in routes.
    routes_file: Path | None = Path("sentry-routing-config.json")

    # Outbound HTTP
    http_timeout: float = 10.0
    user_agent: str = f"sentry.python.router/{__version__}"
    sentry_version: int = 7

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        """Explicit ``log_level`` if set, else WARNING in production and INFO elsewhere."""
        if self.log_level:
            return self.log_level.upper()
        return "WARNING" if self.is_production else "INFO"
