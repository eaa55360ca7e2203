"""RoutingTransport — the transport the host client actually talks to.

Each ``send`` walks one envelope through::

    received -> classified -> matched -> dispatched -> sent | failed

There are no retries at this layer.  A network failure surfaces as
``DeliveryError`` and the host client decides whether to drop or retry.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from sentry_router.config import RouterConfig
from sentry_router.errors import DeliveryError
from sentry_router.models.envelopes import Envelope
from sentry_router.routing.classifier import EventClassifier
from sentry_router.routing.loader import load_routes
from sentry_router.routing.route_table import RouteTable
from sentry_router.transport.cache import DestinationTransportCache, SenderFactory
from sentry_router.transport.dsn import mask_dsn
from sentry_router.transport.sender import DestinationSender

logger = logging.getLogger(__name__)


class RoutingTransport:
    """Routes each envelope to one project chosen by content.

    Parameters
    ----------
    route_table:
        Ordered routes; the last one is the default project.
    sender_factory:
        Builds the per-DSN sender.  Defaults to ``DestinationSender``.
    classifier:
        Attribute extractor.  Defaults to a plain ``EventClassifier``.
    """

    def __init__(
        self,
        route_table: RouteTable,
        *,
        sender_factory: SenderFactory | None = None,
        classifier: EventClassifier | None = None,
    ) -> None:
        self._routes = route_table
        self._classifier = classifier or EventClassifier()
        self._cache = DestinationTransportCache(sender_factory)
        logger.debug("RoutingTransport initialized with %d project routes", len(route_table))

    @classmethod
    def from_config(cls, config: RouterConfig | None = None) -> RoutingTransport:
        """Build a transport from ``RouterConfig`` (routes file + HTTP settings)."""
        config = config or RouterConfig()
        factory = partial(
            DestinationSender,
            timeout=config.http_timeout,
            user_agent=config.user_agent,
            sentry_version=config.sentry_version,
        )
        return cls(RouteTable(load_routes(config.routes_file)), sender_factory=factory)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def route_table(self) -> RouteTable:
        return self._routes

    @property
    def cache(self) -> DestinationTransportCache:
        return self._cache

    @property
    def rate_limiter(self) -> None:
        """Rate limiting is left to the host client; always ``None``."""
        return None

    def is_healthy(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route(self, envelope: Envelope) -> str:
        """Return the DSN *envelope* should be sent to, without sending."""
        classified = self._classifier.classify_envelope(envelope)
        if not classified.is_routable:
            logger.debug(
                "Routing non-event telemetry type %r to default project %s",
                classified.item_type,
                self._routes.default.name,
            )
            return self._routes.default.dsn
        return self._routes.match(classified.attributes)

    def send(self, envelope: Envelope) -> str:
        """Classify, match and forward *envelope*.

        Returns
        -------
        str
            The DSN the envelope was dispatched to.

        Raises
        ------
        DeliveryError
            If the destination could not be reached.
        ConfigurationError
            If the matched route carries a malformed DSN.
        """
        dsn = self.route(envelope)
        project = self._routes.name_for(dsn)
        sender = self._cache.get_or_create(dsn)

        try:
            sender.send(envelope)
        except DeliveryError:
            logger.error("Failed to deliver envelope to %s (%s)", project, mask_dsn(dsn))
            raise

        logger.info("Event successfully sent to %s", project)
        return dsn

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout_millis: int = 0) -> None:
        logger.debug("Flushing all cached transports")
        self._cache.flush_all(timeout_millis)

    def close(self, is_restarting: bool = False) -> None:
        logger.info("Closing RoutingTransport and all cached transports")
        self._cache.close_all(is_restarting)

    def __enter__(self) -> RoutingTransport:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RoutingTransport(routes={len(self._routes)}, senders={len(self._cache)})"
