"""DestinationSender — POSTs envelopes to a single Sentry project.

One sender exists per DSN.  It owns the parsed endpoint and key plus a
pooled ``httpx.Client`` that is shared by every thread sending to that
project.  There is no queue: ``send`` blocks for the HTTP round trip.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from sentry_router import __version__
from sentry_router.errors import DeliveryError
from sentry_router.models.envelopes import Envelope
from sentry_router.transport._formatting import serialize_envelope
from sentry_router.transport.dsn import Dsn

logger = logging.getLogger(__name__)

ENVELOPE_CONTENT_TYPE = "application/x-sentry-envelope"
DEFAULT_USER_AGENT = f"sentry.python.router/{__version__}"


class DestinationSender:
    """Sends envelopes to the project identified by *dsn*.

    Parameters
    ----------
    dsn:
        ``scheme://key@host/project``.  Parsed immediately; a malformed
        DSN raises ``ConfigurationError`` here rather than at send time.
    timeout:
        Per-request timeout in seconds.
    user_agent:
        Sent as ``User-Agent`` and as ``sentry_client`` in the auth header.
    sentry_version:
        Protocol version advertised in the auth header.
    client:
        Optional pre-built ``httpx.Client``.  A client passed in is not
        closed by :meth:`close`.
    """

    def __init__(
        self,
        dsn: str,
        *,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        sentry_version: int = 7,
        client: httpx.Client | None = None,
    ) -> None:
        self._dsn = Dsn.parse(dsn)
        self._user_agent = user_agent
        self._sentry_version = sentry_version
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._closed = False
        logger.debug("DestinationSender created for %s", self._dsn.masked)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def api_url(self) -> str:
        return self._dsn.api_url

    @property
    def auth_key(self) -> str:
        return self._dsn.auth_key

    @property
    def destination(self) -> str:
        """The masked DSN, safe to log."""
        return self._dsn.masked

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": ENVELOPE_CONTENT_TYPE,
            "User-Agent": self._user_agent,
            "X-Sentry-Auth": (
                f"Sentry sentry_version={self._sentry_version}, "
                f"sentry_client={self._user_agent}, "
                f"sentry_key={self._dsn.auth_key}"
            ),
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def send(self, envelope: Envelope) -> httpx.Response:
        """POST *envelope* to this sender's project.

        Returns
        -------
        httpx.Response
            The response, whatever its status.  Non-2xx responses are
            logged, not raised.

        Raises
        ------
        DeliveryError
            If the request could not be completed (connection refused,
            timeout, I/O error) or the sender has been closed.
        """
        if self._closed:
            raise DeliveryError(self.destination, "sender is closed")
        body = serialize_envelope(envelope)
        try:
            response = self._client.post(self.api_url, content=body, headers=self.headers)
        except (httpx.HTTPError, RuntimeError) as exc:
            # RuntimeError: httpx client closed by a concurrent close_all.
            logger.error("Failed to send envelope to %s: %s", self.destination, exc)
            raise DeliveryError(self.destination, str(exc) or type(exc).__name__) from exc

        if response.is_success:
            logger.info(
                "Envelope %s accepted by %s (status %d)",
                envelope.event_id or "unknown",
                self.destination,
                response.status_code,
            )
        else:
            logger.warning(
                "Unexpected response code %d from %s: %s",
                response.status_code,
                self.destination,
                response.text,
            )
        return response

    def flush(self, timeout_millis: int = 0) -> None:
        """No-op: there is no internal queue to drain."""

    def close(self, is_restarting: bool = False) -> None:
        """Release the HTTP connection pool (if this sender owns it)."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()
        logger.debug(
            "DestinationSender closed for %s (restarting=%s)",
            self.destination,
            is_restarting,
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> DestinationSender:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"DestinationSender(destination={self.destination!r})"
