"""Transport protocol for the routing layer.

The host telemetry client talks to anything implementing ``Transport``:
``send`` one envelope, ``flush`` with a timeout, and ``close``.  Both the
per-project ``DestinationSender`` and the ``RoutingTransport`` in front of
them satisfy it, so a routing transport can be plugged in wherever a
plain one was.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sentry_router.models.envelopes import Envelope


@runtime_checkable
class Transport(Protocol):
    """Capability contract of an outbound envelope transport."""

    def send(self, envelope: Envelope) -> Any:
        """Deliver *envelope*.

        Network-level failures raise ``DeliveryError``.  Server-side
        rejections are logged, not raised.
        """
        ...

    def flush(self, timeout_millis: int = 0) -> None:
        """Drain pending work, waiting at most *timeout_millis*."""
        ...

    def close(self, is_restarting: bool = False) -> None:
        """Release resources held by the transport."""
        ...
