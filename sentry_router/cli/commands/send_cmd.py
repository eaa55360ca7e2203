"""``sentry-router send`` — send an event file through the routing transport."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from sentry_router.cli.commands._common import RoutesOption, read_envelope, resolve_config
from sentry_router.errors import ConfigurationError, DeliveryError
from sentry_router.transport.dsn import mask_dsn
from sentry_router.transport.routing import RoutingTransport

console = Console()


def send_cmd(
    event_file: Path = typer.Argument(..., help="Serialized event or transaction JSON."),
    kind: str = typer.Option("event", "--kind", "-k", help="Envelope item type."),
    routes_file: Path = RoutesOption,
) -> None:
    """Route and POST a single event to its Sentry project."""
    config = resolve_config(routes_file)
    envelope = read_envelope(event_file, kind, console)

    with RoutingTransport.from_config(config) as transport:
        try:
            dsn = transport.send(envelope)
        except ConfigurationError as exc:
            console.print(f"[red]Configuration error:[/red] {exc}")
            raise typer.Exit(code=2) from exc
        except DeliveryError as exc:
            console.print(f"[red]Delivery failed:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    project = transport.route_table.name_for(dsn)
    console.print(f"[green]Sent[/green] to {project} ({mask_dsn(dsn)})")
