"""``mockito-agent config`` command.

Shows the effective goal configuration and which layer set each value.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mockito_agent.config import OPTIONS, effective_config, parse_kv_pairs
from mockito_agent.core.engine import select_property_key
from mockito_agent.core.models import SkipPrepare
from mockito_agent.errors import MockitoAgentError
from mockito_agent.snapshot import load_snapshot

console = Console()


def config(
    snapshot_path: Optional[Path] = typer.Argument(None, help="Build snapshot YAML"),
    defines: list[str] = typer.Option([], "-D", "--define", help="Build property override: key=value"),
) -> None:
    """Display the effective configuration and where each value comes from."""
    try:
        snapshot = load_snapshot(snapshot_path) if snapshot_path is not None else None
        effective, origins = effective_config(
            goal_settings=snapshot.goal_settings if snapshot else None,
            properties=snapshot.properties if snapshot else None,
            defines=parse_kv_pairs(defines),
        )
    except MockitoAgentError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1) from exc

    table = Table(title="Agent Configuration", show_lines=True)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Origin", style="magenta")

    for option in OPTIONS:
        value = getattr(effective, option.field)
        table.add_row(option.property, _format_value(value), origins[option.field])

    console.print(table)

    if snapshot is not None:
        key = select_property_key(snapshot.plugins(), effective.property_name_override)
        console.print(f"Target property: [bold]{escape(key)}[/bold]", highlight=False)


def _format_value(value: object) -> str:
    if value is None or value is SkipPrepare.UNSET:
        return "[dim]unset[/dim]"
    if isinstance(value, SkipPrepare):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return escape(str(value))
