"""Command-line interface for mockito-agent."""

from __future__ import annotations

import logging
import sys

import typer
from rich.console import Console

from .commands import compare_versions_command, config, prepare

console = Console()

app = typer.Typer(
    name="mockito-agent",
    help="Prepare the Mockito agent flag for a build's test JVM",
    add_completion=False,
    no_args_is_help=True,
)

app.command("prepare")(prepare)
app.command("config")(config)
app.command("compare-versions")(compare_versions_command)


def _version_callback(value: bool) -> None:
    if value:
        from mockito_agent import __version__

        console.print(f"mockito-agent {__version__}", highlight=False)
        raise typer.Exit()


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Prepare the Mockito agent flag for a build's test JVM."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def main() -> None:
    app()


__all__ = ["app", "main"]
