"""EventClassifier — minimal field extraction from raw event payloads.

Only the fields routing needs are pulled out of the JSON document.  The
payload is never turned into a full event model, and a payload that cannot
be parsed simply yields no attributes.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from sentry_router.models.envelopes import ROUTABLE_ITEM_TYPES, Envelope, ItemType
from sentry_router.models.routing import EventAttributes

logger = logging.getLogger(__name__)


class ClassifiedEnvelope(BaseModel):
    """Outcome of classifying an envelope.

    ``is_routable`` is ``False`` for categories that skip matching and go
    straight to the default project (sessions, client reports, ...).
    """

    model_config = ConfigDict(frozen=True)

    item_type: str
    is_routable: bool
    attributes: EventAttributes = EventAttributes()


class EventClassifier:
    """Extracts ``EventAttributes`` from serialized events and transactions."""

    def classify(self, payload: bytes, kind: ItemType | str) -> EventAttributes:
        """Extract routing attributes from *payload*.

        Non-routable kinds and malformed payloads return empty attributes.
        """
        kind_name = kind.value if isinstance(kind, ItemType) else kind
        if kind_name not in ROUTABLE_ITEM_TYPES:
            return EventAttributes.empty()

        try:
            document = json.loads(payload)
        except (ValueError, TypeError, RecursionError) as exc:
            logger.warning("Could not parse %s payload for routing: %s", kind_name, exc)
            return EventAttributes.empty()

        if not isinstance(document, dict):
            logger.warning(
                "Unexpected %s payload for routing: top level is %s, not an object",
                kind_name,
                type(document).__name__,
            )
            return EventAttributes.empty()

        return EventAttributes(
            tags=_extract_tags(document),
            exception_type=_extract_exception_type(document),
            message=_extract_message(document),
            environment=_string_field(document, "environment"),
            level=_string_field(document, "level"),
        )

    def classify_envelope(self, envelope: Envelope) -> ClassifiedEnvelope:
        """Classify an envelope by its first item."""
        if not envelope.items:
            return ClassifiedEnvelope(item_type="empty", is_routable=False)

        item = envelope.items[0]
        if item.type_name not in ROUTABLE_ITEM_TYPES:
            return ClassifiedEnvelope(item_type=item.type_name, is_routable=False)

        return ClassifiedEnvelope(
            item_type=item.type_name,
            is_routable=True,
            attributes=self.classify(item.payload, item.type_name),
        )


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _extract_tags(document: dict[str, Any]) -> dict[str, str]:
    tags = document.get("tags")
    if isinstance(tags, dict):
        return {str(key): _as_text(value) for key, value in tags.items()}
    # Some SDKs serialize tags as [[key, value], ...]
    if isinstance(tags, list):
        pairs: dict[str, str] = {}
        for entry in tags:
            if isinstance(entry, list) and len(entry) == 2:
                pairs[str(entry[0])] = _as_text(entry[1])
        return pairs
    return {}


def _extract_exception_type(document: dict[str, Any]) -> str | None:
    exception = document.get("exception")
    if not isinstance(exception, dict):
        return None
    values = exception.get("values")
    if not isinstance(values, list) or not values:
        return None
    first = values[0]
    if not isinstance(first, dict) or first.get("type") is None:
        return None
    return _as_text(first["type"])


def _extract_message(document: dict[str, Any]) -> str | None:
    message = document.get("message")
    if isinstance(message, dict):
        if message.get("formatted") is not None:
            return _as_text(message["formatted"])
        if message.get("message") is not None:
            return _as_text(message["message"])
    elif message is not None:
        return _as_text(message)

    logentry = document.get("logentry")
    if isinstance(logentry, dict) and logentry.get("formatted") is not None:
        return _as_text(logentry["formatted"])
    return None


def _string_field(document: dict[str, Any], key: str) -> str | None:
    value = document.get(key)
    return value if isinstance(value, str) else None
