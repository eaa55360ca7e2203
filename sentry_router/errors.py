"""Exceptions raised by the routing transport.

Classification problems are never raised: a malformed event payload is
logged and routed to the default project.  Only construction-time
configuration problems and network-level delivery failures escape.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised for a malformed DSN or an empty route table.

    Fatal at construction time.  Callers must not swallow it.
    """


class DeliveryError(RuntimeError):
    """Raised when an envelope cannot reach its destination.

    Only network-level failures (connection refused, timeout, I/O error)
    raise.  A non-2xx response is logged by the sender and not raised.

    Attributes
    ----------
    destination : str
        The masked DSN of the destination that failed.
    """

    def __init__(self, destination: str, message: str) -> None:
        self.destination = destination
        super().__init__(f"Delivery to {destination} failed: {message}")
