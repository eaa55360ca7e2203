"""Envelope wire serialization for the outbound POST body.

Layout::

    {"event_id":"...","sent_at":"..."}\n
    {"type":"event","length":123}\n
    <123 payload bytes>\n
    ...
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from sentry_router.models.envelopes import Envelope, EnvelopeItem


def _json_line(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=True).encode("utf-8") + b"\n"


def format_envelope_header(envelope: Envelope, sent_at: datetime | None = None) -> bytes:
    """Return the header line: event id (or ``"unknown"``) and send time."""
    when = sent_at or datetime.now(timezone.utc)
    return _json_line(
        {
            "event_id": envelope.event_id or "unknown",
            "sent_at": when.isoformat().replace("+00:00", "Z"),
        }
    )


def format_item_header(item: EnvelopeItem) -> bytes:
    """Return the ``{type, length}`` line that precedes an item payload."""
    return _json_line({"type": item.type_name, "length": item.length})


def serialize_envelope(envelope: Envelope, sent_at: datetime | None = None) -> bytes:
    """Serialize *envelope* into the body of a single envelope POST."""
    parts: list[bytes] = [format_envelope_header(envelope, sent_at)]
    for item in envelope.items:
        parts.append(format_item_header(item))
        parts.append(item.payload)
        parts.append(b"\n")
    return b"".join(parts)
