"""Helpers shared by CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from sentry_router.config import RouterConfig
from sentry_router.models.envelopes import Envelope, ItemType, build_envelope
from sentry_router.routing.loader import load_routes
from sentry_router.routing.route_table import RouteTable

RoutesOption = typer.Option(
    None,
    "--routes",
    "-r",
    help="Routing config JSON (defaults to SENTRY_ROUTER_ROUTES_FILE).",
)


def resolve_config(routes_file: Path | None) -> RouterConfig:
    """Return ``RouterConfig`` with *routes_file* overriding the env value."""
    config = RouterConfig()
    if routes_file is not None:
        config = config.model_copy(update={"routes_file": routes_file})
    return config


def load_table(config: RouterConfig) -> RouteTable:
    return RouteTable(load_routes(config.routes_file))


def read_envelope(path: Path, kind: str, console: Console) -> Envelope:
    """Read a serialized event file and wrap it in a single-item envelope."""
    if not path.is_file():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)

    payload = path.read_bytes()
    event_id = None
    try:
        document = json.loads(payload)
    except ValueError:
        document = None
    if isinstance(document, dict) and isinstance(document.get("event_id"), str):
        event_id = document["event_id"]

    item_type: ItemType | str
    try:
        item_type = ItemType(kind)
    except ValueError:
        item_type = kind
    return build_envelope(payload, item_type, event_id=event_id)
