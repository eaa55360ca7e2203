"""Route loading — JSON config file with a built-in fallback.

File format (``sentry-routing-config.json``)::

    {
      "projects": [
        {
          "name": "Gateway Project",
          "dsn": "https://KEY@o0.ingest.sentry.io/1",
          "rules": {
            "tags": ["gateway"],
            "statusCodes": ["502"],
            "exceptionTypes": ["BadGatewayException"],
            "messageKeywords": ["502 Bad Gateway"]
          }
        }
      ]
    }

Project order is routing order; the last project is the default.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from sentry_router.models.routing import Route, RoutingConfigFile
from sentry_router.transport.dsn import mask_dsn

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("sentry-routing-config.json")


def default_routes() -> list[Route]:
    """Return the built-in gateway / internal / default routes.

    The DSNs are placeholders.  Built fresh on every call.
    """
    return [
        Route(
            name="Gateway Project",
            dsn="https://YOUR_GATEWAY_PROJECT_KEY@o0.ingest.sentry.io/YOUR_GATEWAY_PROJECT_ID",
            tags={"gateway"},
            status_values={"502"},
            exception_types={"BadGatewayException"},
            message_keywords={"502 Bad Gateway", "Upstream service"},
        ),
        Route(
            name="Internal Errors Project",
            dsn="https://YOUR_INTERNAL_PROJECT_KEY@o0.ingest.sentry.io/YOUR_INTERNAL_PROJECT_ID",
            tags={"internal"},
            status_values={"500"},
            exception_types={"InternalServerException"},
            message_keywords={"500 Internal Server Error", "Database connection"},
        ),
        Route(
            name="Default Project",
            dsn="https://YOUR_DEFAULT_PROJECT_KEY@o0.ingest.sentry.io/YOUR_DEFAULT_PROJECT_ID",
            tags={"generic", "default"},
            status_values={"400", "404"},
            exception_types={"RuntimeException", "Exception"},
            message_keywords={"Generic application error"},
        ),
    ]


def parse_routes(raw: str | bytes) -> list[Route]:
    """Parse routing config JSON into routes.

    Raises
    ------
    pydantic.ValidationError
        If the document does not have the expected shape.
    """
    return RoutingConfigFile.model_validate_json(raw).to_routes()


def load_routes(path: Path | None = DEFAULT_CONFIG_FILE) -> list[Route]:
    """Load routes from *path*, falling back to :func:`default_routes`.

    A missing, unreadable, malformed, or empty config file is logged and
    never raised.
    """
    if path is None:
        logger.info("No routing config file configured; using default routes")
        return default_routes()

    if not path.is_file():
        logger.info("Routing config %s not found; using default routes", path)
        return default_routes()

    try:
        routes = parse_routes(path.read_bytes())
    except (OSError, ValidationError) as exc:
        logger.error(
            "Failed to load routing config from %s: %s. Using default routes "
            "with placeholder DSNs.",
            path,
            exc,
        )
        return default_routes()

    if not routes:
        logger.warning("Routing config %s lists no projects; using default routes", path)
        return default_routes()

    logger.info("Loaded %d routes from %s", len(routes), path)
    for route in routes:
        logger.info("  - %s -> %s", route.name, mask_dsn(route.dsn))
    return routes
