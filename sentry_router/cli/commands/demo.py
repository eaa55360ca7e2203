"""``sentry-router demo`` — route the sample error events.

Builds the same four sample payloads the demo service produces (a 502
gateway error, a 500 internal error, a generic runtime error and a tagged
transaction) and shows which project each lands in.  With ``--send`` the
envelopes are actually POSTed.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from sentry_router.cli.commands._common import RoutesOption, resolve_config
from sentry_router.errors import DeliveryError
from sentry_router.models.envelopes import Envelope, ItemType, build_envelope
from sentry_router.transport.dsn import mask_dsn
from sentry_router.transport.routing import RoutingTransport

console = Console()


def _error_event(exception_type: str, message: str, tags: dict[str, str]) -> dict[str, Any]:
    return {
        "event_id": uuid.uuid4().hex,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "platform": "python",
        "level": "error",
        "environment": "demo",
        "tags": tags,
        "message": {"formatted": message},
        "exception": {"values": [{"type": exception_type, "value": message}]},
    }


def sample_envelopes() -> list[tuple[str, Envelope]]:
    """Return ``(label, envelope)`` pairs for the demo scenarios."""
    samples: list[tuple[str, ItemType, dict[str, Any]]] = [
        (
            "gateway-error",
            ItemType.EVENT,
            _error_event(
                "BadGatewayException",
                "Upstream service returned 502 Bad Gateway",
                {"status": "502", "gateway": "true", "error_type": "gateway"},
            ),
        ),
        (
            "internal-error",
            ItemType.EVENT,
            _error_event(
                "InternalServerException",
                "Database connection failed with 500 Internal Server Error",
                {"status": "500", "internal": "true", "error_type": "internal"},
            ),
        ),
        (
            "generic-error",
            ItemType.EVENT,
            _error_event(
                "RuntimeException",
                "Generic application error occurred",
                {"status": "400", "error_type": "generic"},
            ),
        ),
        (
            "transaction-test",
            ItemType.TRANSACTION,
            {
                "event_id": uuid.uuid4().hex,
                "type": "transaction",
                "transaction": "test-transaction",
                "tags": {"gateway": "true", "transaction_type": "api_call"},
            },
        ),
    ]
    return [
        (
            label,
            build_envelope(
                json.dumps(payload).encode("utf-8"), item_type, event_id=payload["event_id"]
            ),
        )
        for label, item_type, payload in samples
    ]


def demo_cmd(
    send: bool = typer.Option(
        False,
        "--send",
        help="POST the sample envelopes instead of only showing their routes.",
    ),
    routes_file: Path = RoutesOption,
) -> None:
    """Route the sample gateway, internal, generic and transaction events."""
    config = resolve_config(routes_file)

    table = Table(title="Demo Routing" + (" (sent)" if send else " (dry run)"))
    table.add_column("Scenario", style="cyan")
    table.add_column("Project", style="green")
    table.add_column("DSN", style="dim")
    if send:
        table.add_column("Result")

    failures = 0
    with RoutingTransport.from_config(config) as transport:
        for label, envelope in sample_envelopes():
            dsn = transport.route(envelope)
            project = transport.route_table.name_for(dsn)
            if not send:
                table.add_row(label, project, mask_dsn(dsn))
                continue
            try:
                transport.send(envelope)
                result = "[green]sent[/green]"
            except DeliveryError as exc:
                failures += 1
                result = f"[red]failed[/red] {exc}"
            table.add_row(label, project, mask_dsn(dsn), result)

    console.print(table)
    if failures:
        raise typer.Exit(code=1)
