"""sentry-router CLI — Typer-based command-line interface.

Inspect the loaded route table, see where a given event would be routed,
send an event file through the routing transport, or run the sample
gateway / internal / generic events through it.

All output uses Rich for formatted terminal display.
"""
