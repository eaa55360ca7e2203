"""sentry_router data models — all Pydantic v2, all frozen (immutable)."""

from sentry_router.models.envelopes import (
    ROUTABLE_ITEM_TYPES,
    Envelope,
    EnvelopeHeader,
    EnvelopeItem,
    ItemType,
    build_envelope,
)
from sentry_router.models.routing import (
    EventAttributes,
    ProjectRouteConfig,
    Route,
    RouteRules,
    RoutingConfigFile,
)

__all__ = [
    # envelopes
    "ItemType",
    "ROUTABLE_ITEM_TYPES",
    "EnvelopeHeader",
    "EnvelopeItem",
    "Envelope",
    "build_envelope",
    # routing
    "Route",
    "EventAttributes",
    "RouteRules",
    "ProjectRouteConfig",
    "RoutingConfigFile",
]
