"""RouteTable — ordered, first-match-wins routing over immutable rules.

The last route doubles as the default destination: it is returned when no
route matches, even if its own rules could never match anything.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from sentry_router.errors import ConfigurationError
from sentry_router.models.routing import EventAttributes, Route

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT = "Unknown Project"


class RouteTable:
    """An ordered, non-empty sequence of routes.

    Usage
    -----
    >>> table = RouteTable(load_routes(path))
    >>> dsn = table.match(attrs)

    Raises
    ------
    ConfigurationError
        If *routes* is empty.
    """

    def __init__(self, routes: Iterable[Route]) -> None:
        self._routes: tuple[Route, ...] = tuple(routes)
        if not self._routes:
            raise ConfigurationError("Route table must contain at least one route")
        self._names_by_dsn: dict[str, str] = {}
        for route in self._routes:
            self._names_by_dsn.setdefault(route.dsn, route.name)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def match_route(self, attrs: EventAttributes) -> Route:
        """Return the first route whose rules match, else the default route."""
        for route in self._routes:
            if route.matches(attrs):
                logger.debug("Event matched project: %s", route.name)
                return route
        logger.debug("No route matched; using default project %s", self.default.name)
        return self.default

    def match(self, attrs: EventAttributes) -> str:
        """Return the DSN the event described by *attrs* should go to."""
        return self.match_route(attrs).dsn

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def default(self) -> Route:
        """The catch-all route (last in table order)."""
        return self._routes[-1]

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def name_for(self, dsn: str) -> str:
        """Return the project name registered for *dsn*."""
        return self._names_by_dsn.get(dsn, UNKNOWN_PROJECT)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __repr__(self) -> str:
        names = ", ".join(route.name for route in self._routes)
        return f"RouteTable([{names}])"
