"""Main Typer application — imports and registers all CLI commands.

Entry point: ``sentry-router`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from sentry_router.cli.commands.classify_cmd import classify_cmd
from sentry_router.cli.commands.demo import demo_cmd
from sentry_router.cli.commands.routes_cmd import routes_cmd
from sentry_router.cli.commands.send_cmd import send_cmd
from sentry_router.config import RouterConfig

app = typer.Typer(
    name="sentry-router",
    help="sentry-router: route Sentry events to projects by content.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="routes", help="List the loaded project routes.")(routes_cmd)
app.command(name="classify", help="Show which project an event file routes to.")(classify_cmd)
app.command(name="send", help="Send an event file through the routing transport.")(send_cmd)
app.command(name="demo", help="Route the sample gateway/internal/generic events.")(demo_cmd)


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure the root logger from SENTRY_ROUTER_LOG_LEVEL or the environment."""
    level = "DEBUG" if verbose else RouterConfig().effective_log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
