"""Shared test fixtures for sentry_router."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from sentry_router.models.envelopes import Envelope, ItemType, build_envelope
from sentry_router.models.routing import Route
from sentry_router.routing.route_table import RouteTable

GATEWAY_DSN = "https://gatewaykey@sentry.example.com/101"
INTERNAL_DSN = "https://internalkey@sentry.example.com/102"
DEFAULT_DSN = "https://defaultkey@sentry.example.com/103"


class RecordingSender:
    """A sender that records envelopes instead of sending them."""

    instances: list[RecordingSender] = []

    def __init__(self, dsn: str) -> None:
        self.dsn = dsn
        self.sent: list[Envelope] = []
        self.flushes: list[int] = []
        self.closed = False
        self.closed_restarting: bool | None = None
        RecordingSender.instances.append(self)

    def send(self, envelope: Envelope) -> None:
        self.sent.append(envelope)

    def flush(self, timeout_millis: int = 0) -> None:
        self.flushes.append(timeout_millis)

    def close(self, is_restarting: bool = False) -> None:
        self.closed = True
        self.closed_restarting = is_restarting


@pytest.fixture
def routes() -> list[Route]:
    """Gateway / internal / default routes with parseable test DSNs."""
    return [
        Route(
            name="Gateway Project",
            dsn=GATEWAY_DSN,
            tags={"gateway"},
            status_values={"502"},
            exception_types={"BadGatewayException"},
            message_keywords={"502 Bad Gateway", "Upstream service"},
        ),
        Route(
            name="Internal Errors Project",
            dsn=INTERNAL_DSN,
            tags={"internal"},
            status_values={"500"},
            exception_types={"InternalServerException"},
            message_keywords={"500 Internal Server Error", "Database connection"},
        ),
        Route(
            name="Default Project",
            dsn=DEFAULT_DSN,
            tags={"generic", "default"},
            status_values={"400", "404"},
            exception_types={"RuntimeException"},
            message_keywords={"Generic application error"},
        ),
    ]


@pytest.fixture
def route_table(routes: list[Route]) -> RouteTable:
    return RouteTable(routes)


@pytest.fixture
def recording_sender_factory() -> Callable[[str], RecordingSender]:
    """Factory fixture: RecordingSender class with a fresh instance log."""
    RecordingSender.instances = []
    return RecordingSender


# ---------------------------------------------------------------------------
# Event / envelope factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """Factory fixture: build a Sentry-style event document."""

    def _factory(
        tags: dict[str, str] | None = None,
        exception_type: str | None = None,
        message: str | None = None,
        **overrides: Any,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {"event_id": "0" * 32, "platform": "python"}
        if tags is not None:
            event["tags"] = tags
        if exception_type is not None:
            event["exception"] = {"values": [{"type": exception_type, "value": "boom"}]}
        if message is not None:
            event["message"] = {"formatted": message}
        event.update(overrides)
        return event

    return _factory


@pytest.fixture
def make_envelope(make_event: Callable[..., dict[str, Any]]) -> Callable[..., Envelope]:
    """Factory fixture: wrap an event document in a one-item envelope."""

    def _factory(
        item_type: ItemType | str = ItemType.EVENT,
        payload: bytes | None = None,
        **event_fields: Any,
    ) -> Envelope:
        if payload is None:
            payload = json.dumps(make_event(**event_fields)).encode("utf-8")
        return build_envelope(payload, item_type, event_id="0" * 32)

    return _factory


@pytest.fixture
def dsns() -> dict[str, str]:
    """The test DSNs keyed by project role."""
    return {"gateway": GATEWAY_DSN, "internal": INTERNAL_DSN, "default": DEFAULT_DSN}
