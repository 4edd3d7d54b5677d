"""``mockito-agent compare-versions`` command."""

from __future__ import annotations

import typer

from mockito_agent.core.versions import compare_versions

_SYMBOLS = {-1: "<", 0: "=", 1: ">"}


def compare_versions_command(
    left: str = typer.Argument(..., help="First version"),
    right: str = typer.Argument(..., help="Second version"),
) -> None:
    """Compare two dotted versions the way the agent threshold check does."""
    typer.echo(f"{left} {_SYMBOLS[compare_versions(left, right)]} {right}")
