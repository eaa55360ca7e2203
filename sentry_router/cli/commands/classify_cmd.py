"""``sentry-router classify`` — show where an event file would be routed.

Nothing is sent.  Prints the extracted attributes and the matched project.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from sentry_router.cli.commands._common import (
    RoutesOption,
    load_table,
    read_envelope,
    resolve_config,
)
from sentry_router.routing.classifier import EventClassifier
from sentry_router.transport.dsn import mask_dsn

console = Console()


def classify_cmd(
    event_file: Path = typer.Argument(..., help="Serialized event or transaction JSON."),
    kind: str = typer.Option("event", "--kind", "-k", help="Envelope item type."),
    routes_file: Path = RoutesOption,
) -> None:
    """Classify an event file and print the project it routes to."""
    table = load_table(resolve_config(routes_file))
    envelope = read_envelope(event_file, kind, console)
    classified = EventClassifier().classify_envelope(envelope)

    if classified.is_routable:
        route = table.match_route(classified.attributes)
    else:
        route = table.default

    attrs = classified.attributes
    tags = escape(", ".join(f"{k}={v}" for k, v in sorted(attrs.tags.items()))) or "-"
    lines = [
        f"[bold]Item type:[/bold]  {classified.item_type}",
        f"[bold]Tags:[/bold]       {tags}",
        f"[bold]Exception:[/bold]  {escape(attrs.exception_type or '-')}",
        f"[bold]Message:[/bold]    {escape(attrs.message or '-')}",
        f"[bold]Env:[/bold]        {escape(attrs.environment or '-')}",
        f"[bold]Level:[/bold]      {escape(attrs.level or '-')}",
        "",
        f"[bold green]Project:[/bold green]    {route.name}",
        f"[bold green]DSN:[/bold green]        {mask_dsn(route.dsn)}",
    ]
    if not classified.is_routable:
        lines.append("[dim]Non-event category: routed to the default project.[/dim]")
    console.print(Panel("\n".join(lines), title="Routing decision", border_style="cyan"))
