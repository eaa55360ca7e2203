"""Outbound envelope models handed to the transport by the host client.

An envelope is a header plus one or more items.  Item payloads stay as
raw bytes: the router only peeks into them, it never re-models them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ItemType(str, Enum):
    """Known envelope item categories."""

    EVENT = "event"
    TRANSACTION = "transaction"
    SESSION = "session"
    SESSIONS = "sessions"
    ATTACHMENT = "attachment"
    CLIENT_REPORT = "client_report"
    CHECK_IN = "check_in"
    PROFILE = "profile"
    USER_REPORT = "user_report"


ROUTABLE_ITEM_TYPES: frozenset[str] = frozenset(
    {ItemType.EVENT.value, ItemType.TRANSACTION.value}
)


class EnvelopeHeader(BaseModel):
    """Envelope-level header fields."""

    model_config = ConfigDict(frozen=True)

    event_id: str | None = None
    sent_at: datetime | None = None
    dsn: str | None = None
    sdk: dict[str, Any] = {}


class EnvelopeItem(BaseModel):
    """A single item: its type and its raw serialized payload."""

    model_config = ConfigDict(frozen=True)

    type: ItemType | str
    payload: bytes = b""

    @property
    def type_name(self) -> str:
        """The item type as a plain string, known or not."""
        if isinstance(self.type, ItemType):
            return self.type.value
        return self.type

    @property
    def length(self) -> int:
        return len(self.payload)


class Envelope(BaseModel):
    """Container for one or more telemetry items sent together."""

    model_config = ConfigDict(frozen=True)

    header: EnvelopeHeader = Field(default_factory=EnvelopeHeader)
    items: list[EnvelopeItem] = []

    @property
    def event_id(self) -> str | None:
        return self.header.event_id


def build_envelope(
    payload: bytes,
    item_type: ItemType | str = ItemType.EVENT,
    *,
    event_id: str | None = None,
) -> Envelope:
    """Wrap a single serialized item in an envelope."""
    return Envelope(
        header=EnvelopeHeader(event_id=event_id),
        items=[EnvelopeItem(type=item_type, payload=payload)],
    )
