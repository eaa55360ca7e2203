"""``sentry-router routes`` — show the loaded route table.

Routes are listed in evaluation order.  The last one is the default
project.  DSN keys are masked.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from sentry_router.cli.commands._common import RoutesOption, load_table, resolve_config
from sentry_router.transport.dsn import mask_dsn

console = Console()


def _join(values: frozenset[str]) -> str:
    return ", ".join(sorted(values)) or "[dim]-[/dim]"


def routes_cmd(routes_file: Path = RoutesOption) -> None:
    """List routes in matching order with their rules."""
    table_model = load_table(resolve_config(routes_file))

    table = Table(title="Project Routes")
    table.add_column("#", justify="right")
    table.add_column("Project", style="cyan")
    table.add_column("DSN", style="dim")
    table.add_column("Tags")
    table.add_column("Status")
    table.add_column("Exception types")
    table.add_column("Message keywords")
    table.add_column("Env / Level")

    last = len(table_model) - 1
    for index, route in enumerate(table_model):
        name = f"{route.name} [green](default)[/green]" if index == last else route.name
        env_level = f"{_join(route.environments)} / {_join(route.levels)}"
        table.add_row(
            str(index + 1),
            name,
            mask_dsn(route.dsn),
            _join(route.tags),
            _join(route.status_values),
            _join(route.exception_types),
            _join(route.message_keywords),
            env_level,
        )

    console.print(table)
