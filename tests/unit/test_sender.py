"""Unit tests for DestinationSender — wire format, headers, error handling.

The network is stubbed with ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone

import httpx
import pytest

from sentry_router.errors import ConfigurationError, DeliveryError
from sentry_router.models.envelopes import Envelope, EnvelopeHeader, EnvelopeItem
from sentry_router.transport._formatting import serialize_envelope
from sentry_router.transport.sender import ENVELOPE_CONTENT_TYPE, DestinationSender

DSN = "https://KEY@host.example/42"


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _envelope() -> Envelope:
    return Envelope(
        header=EnvelopeHeader(event_id="abc123"),
        items=[EnvelopeItem(type="event", payload=b'{"message":"hi"}')],
    )


# ---------------------------------------------------------------------------
# Test: construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_parses_dsn(self):
        sender = DestinationSender(DSN, client=_client(lambda r: httpx.Response(200)))
        assert sender.api_url == "https://host.example/api/42/envelope/"
        assert sender.auth_key == "KEY"
        assert sender.destination == "https://***@host.example/42"

    def test_malformed_dsn_fails_fast(self):
        with pytest.raises(ConfigurationError):
            DestinationSender("not-a-dsn")

    def test_malformed_dsn_error_hides_key(self):
        with pytest.raises(ConfigurationError) as excinfo:
            DestinationSender("SECRETKEY@host.example/42")
        assert "SECRETKEY" not in str(excinfo.value)

    def test_auth_header_carries_key(self):
        sender = DestinationSender(DSN, user_agent="ua/1.0", client=_client(lambda r: httpx.Response(200)))
        headers = sender.headers
        assert headers["Content-Type"] == ENVELOPE_CONTENT_TYPE
        assert headers["User-Agent"] == "ua/1.0"
        assert headers["X-Sentry-Auth"] == (
            "Sentry sentry_version=7, sentry_client=ua/1.0, sentry_key=KEY"
        )


# ---------------------------------------------------------------------------
# Test: wire format
# ---------------------------------------------------------------------------


class TestSerializeEnvelope:
    def test_header_and_item_lines(self):
        sent_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        body = serialize_envelope(_envelope(), sent_at=sent_at)
        lines = body.split(b"\n")
        assert json.loads(lines[0]) == {
            "event_id": "abc123",
            "sent_at": "2026-01-02T03:04:05Z",
        }
        assert json.loads(lines[1]) == {"type": "event", "length": 16}
        assert lines[2] == b'{"message":"hi"}'

    def test_missing_event_id_is_unknown(self):
        body = serialize_envelope(Envelope(items=[EnvelopeItem(type="session", payload=b"{}")]))
        assert json.loads(body.split(b"\n")[0])["event_id"] == "unknown"

    def test_multiple_items(self):
        envelope = Envelope(
            items=[
                EnvelopeItem(type="event", payload=b"{}"),
                EnvelopeItem(type="attachment", payload=b"raw-bytes"),
            ]
        )
        lines = serialize_envelope(envelope).split(b"\n")
        assert json.loads(lines[3]) == {"type": "attachment", "length": 9}
        assert lines[4] == b"raw-bytes"


# ---------------------------------------------------------------------------
# Test: send
# ---------------------------------------------------------------------------


class TestSend:
    def test_posts_envelope_to_api_url(self):
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"id": "abc123"})

        sender = DestinationSender(DSN, client=_client(handler))
        response = sender.send(_envelope())

        assert response.status_code == 200
        assert len(captured) == 1
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == "https://host.example/api/42/envelope/"
        assert request.headers["content-type"] == ENVELOPE_CONTENT_TYPE
        assert "sentry_key=KEY" in request.headers["x-sentry-auth"]
        assert request.content.startswith(b'{"event_id":"abc123","sent_at":')

    def test_non_2xx_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture):
        sender = DestinationSender(
            DSN, client=_client(lambda r: httpx.Response(429, text="rate limited"))
        )
        with caplog.at_level(logging.WARNING, logger="sentry_router.transport.sender"):
            response = sender.send(_envelope())

        assert response.status_code == 429
        assert "429" in caplog.text
        assert "rate limited" in caplog.text
        assert "KEY" not in caplog.text

    def test_connection_error_raises_delivery_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sender = DestinationSender(DSN, client=_client(handler))
        with pytest.raises(DeliveryError) as excinfo:
            sender.send(_envelope())

        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
        assert excinfo.value.destination == "https://***@host.example/42"
        assert "KEY" not in str(excinfo.value)

    def test_timeout_raises_delivery_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        sender = DestinationSender(DSN, client=_client(handler))
        with pytest.raises(DeliveryError):
            sender.send(_envelope())


# ---------------------------------------------------------------------------
# Test: lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_flush_is_noop(self):
        sender = DestinationSender(DSN, client=_client(lambda r: httpx.Response(200)))
        sender.flush(1000)
        assert not sender.is_closed

    def test_close_leaves_injected_client_open(self):
        client = _client(lambda r: httpx.Response(200))
        sender = DestinationSender(DSN, client=client)
        sender.close()
        assert sender.is_closed
        assert not client.is_closed

    def test_close_owned_client(self):
        with DestinationSender(DSN) as sender:
            pass
        assert sender.is_closed
        assert sender._client.is_closed

    def test_close_is_idempotent(self):
        sender = DestinationSender(DSN)
        sender.close()
        sender.close(is_restarting=True)
        assert sender.is_closed

    def test_send_after_close_raises_delivery_error(self):
        sender = DestinationSender(DSN, client=_client(lambda r: httpx.Response(200)))
        sender.close()
        with pytest.raises(DeliveryError, match="sender is closed"):
            sender.send(_envelope())

    def test_send_on_client_closed_underneath_raises_delivery_error(self):
        client = _client(lambda r: httpx.Response(200))
        sender = DestinationSender(DSN, client=client)
        client.close()
        with pytest.raises(DeliveryError) as excinfo:
            sender.send(_envelope())
        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert "KEY@" not in str(excinfo.value)
