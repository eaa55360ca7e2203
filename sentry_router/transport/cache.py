"""DestinationTransportCache — at most one sender per DSN.

Lookups of an existing sender take no lock.  On first use of a DSN a
per-key lock serializes construction, so concurrent first calls for the
same DSN build exactly one sender while different DSNs never wait on
each other's construction.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from sentry_router.transport import Transport
from sentry_router.transport.dsn import mask_dsn
from sentry_router.transport.sender import DestinationSender

logger = logging.getLogger(__name__)

SenderFactory = Callable[[str], Transport]


class DestinationTransportCache:
    """Lazily creates and reuses one sender per destination DSN.

    Parameters
    ----------
    sender_factory:
        Builds a sender for a DSN.  Called at most once per DSN between
        two :meth:`close_all` calls.  May raise ``ConfigurationError``;
        nothing is cached in that case.  Defaults to ``DestinationSender``.
    """

    def __init__(self, sender_factory: SenderFactory | None = None) -> None:
        self._factory: SenderFactory = sender_factory or DestinationSender
        self._senders: dict[str, Transport] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def get_or_create(self, dsn: str) -> Transport:
        """Return the sender for *dsn*, constructing it on first use."""
        sender = self._senders.get(dsn)
        if sender is not None:
            return sender

        with self._guard:
            key_lock = self._key_locks.setdefault(dsn, threading.Lock())

        with key_lock:
            sender = self._senders.get(dsn)
            if sender is None:
                sender = self._factory(dsn)
                self._senders[dsn] = sender
                logger.debug("Created sender for %s", mask_dsn(dsn))
        return sender

    def flush_all(self, timeout_millis: int = 0) -> None:
        """Forward a flush to every cached sender."""
        logger.debug("Flushing %d cached senders", len(self._senders))
        for sender in list(self._senders.values()):
            sender.flush(timeout_millis)

    def close_all(self, is_restarting: bool = False) -> None:
        """Close every cached sender and empty the cache.

        The cache stays usable: later ``get_or_create`` calls build fresh
        senders.  A sender that fails to close is logged and skipped.
        """
        with self._guard:
            senders = list(self._senders.items())
            self._senders.clear()
            self._key_locks.clear()

        for dsn, sender in senders:
            try:
                sender.close(is_restarting)
            except Exception:
                logger.exception("Error closing sender for %s", mask_dsn(dsn))

    @property
    def destinations(self) -> list[str]:
        """Snapshot of the DSNs that currently have a sender."""
        return list(self._senders)

    def __len__(self) -> int:
        return len(self._senders)

    def __contains__(self, dsn: object) -> bool:
        return dsn in self._senders
