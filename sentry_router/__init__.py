"""sentry_router: content-based routing transport for Sentry envelopes.

Inspects each outbound error event or transaction and forwards it to one
of several Sentry projects chosen by ordered matching rules:

  - RouteTable: ordered first-match-wins rules, last route is the default
  - EventClassifier: pulls tags, exception type, message, environment and
    level out of a raw event payload without a full event model
  - DestinationTransportCache: one reusable sender per DSN
  - RoutingTransport: the pluggable transport the host client calls
"""

__version__ = "0.2.0"
__description__ = "Content-based routing transport for Sentry envelopes"

from sentry_router.errors import ConfigurationError, DeliveryError  # noqa: E402
from sentry_router.routing.route_table import RouteTable  # noqa: E402
from sentry_router.transport.routing import RoutingTransport  # noqa: E402

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "RouteTable",
    "RoutingTransport",
    "__version__",
]
