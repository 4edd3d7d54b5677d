"""``mockito-agent prepare`` command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from mockito_agent.config import effective_config, parse_kv_pairs
from mockito_agent.core.engine import decide
from mockito_agent.core.models import Applied, Decision, Failed, Severity, SkipPrepare, Skipped
from mockito_agent.errors import AgentPreparationError, MockitoAgentError
from mockito_agent.prepare import apply_decision
from mockito_agent.snapshot import load_snapshot, save_properties

console = Console()


def _decision_payload(decision: Decision) -> dict[str, object]:
    if isinstance(decision, Applied):
        return {
            "status": "applied",
            "property": decision.property_key,
            "value": decision.new_value,
            "artifact": {
                "groupId": decision.artifact.group_id,
                "artifactId": decision.artifact.artifact_id,
                "version": decision.artifact.version,
                "file": decision.artifact.file_path,
            },
        }
    if isinstance(decision, Skipped):
        return {"status": "skipped", "reason": decision.reason, "severity": decision.severity.value}
    return {"status": "failed", "reason": decision.reason}


def _render(decision: Decision) -> None:
    if isinstance(decision, Applied):
        console.print(
            f"[green]✓[/green] [bold]{escape(decision.property_key)}[/bold] set to "
            f"[cyan]{escape(decision.new_value)}[/cyan]",
            highlight=False,
        )
        console.print(
            f"[dim]agent: {decision.artifact.coordinate}:{decision.artifact.version}[/dim]",
            highlight=False,
        )
    elif isinstance(decision, Skipped):
        style = "yellow" if decision.severity is Severity.WARNING else "dim"
        console.print(f"[{style}]{escape(decision.reason)}[/{style}]", highlight=False)
    elif isinstance(decision, Failed):
        console.print(f"[red]Error:[/red] {escape(decision.reason)}", highlight=False)


def prepare(
    snapshot_path: Path = typer.Argument(..., help="Build snapshot YAML (resolved dependencies, plugins, properties)"),
    property_name: Optional[str] = typer.Option(
        None, "--property-name", help="Property receiving the agent flag (default: auto-detect argLine / tycho.testArgLine)"
    ),
    agent_group_id: Optional[str] = typer.Option(None, "--agent-group-id", help="groupId of the dependency containing the agent"),
    agent_artifact_id: Optional[str] = typer.Option(
        None, "--agent-artifact-id", help="artifactId of the dependency containing the agent"
    ),
    skip_prepare: Optional[bool] = typer.Option(
        None,
        "--skip-prepare/--no-skip-prepare",
        help="Skip the goal; --no-skip-prepare runs it even when tests are skipped",
    ),
    skip_tests: Optional[bool] = typer.Option(None, "--skip-tests", help="Tests are skipped for this build"),
    fail_silent: Optional[bool] = typer.Option(None, "--fail-silent", help="Do not fail when the agent artifact is missing"),
    defines: list[str] = typer.Option([], "-D", "--define", help="Build property override: key=value"),
    write: bool = typer.Option(False, "--write", help="Store the updated property back into the snapshot"),
    as_json: bool = typer.Option(False, "--json", help="Render the decision as JSON"),
) -> None:
    """Compute the -javaagent flag and the property that receives it."""
    try:
        snapshot = load_snapshot(snapshot_path)
        config, _ = effective_config(
            goal_settings=snapshot.goal_settings,
            properties=snapshot.properties,
            defines=parse_kv_pairs(defines),
            overrides={
                "property_name_override": property_name,
                "agent_group_id": agent_group_id,
                "agent_artifact_id": agent_artifact_id,
                "skip_prepare": None if skip_prepare is None else SkipPrepare.from_optional(skip_prepare),
                "skip_tests": skip_tests,
                "fail_silent": fail_silent,
            },
        )
    except MockitoAgentError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1) from exc

    decision = decide(snapshot.artifacts(), snapshot.plugins(), snapshot.properties, config)

    if as_json:
        typer.echo(json.dumps(_decision_payload(decision), indent=2, sort_keys=True))
    else:
        _render(decision)

    try:
        apply_decision(decision, snapshot.properties)
    except AgentPreparationError as exc:
        raise typer.Exit(1) from exc

    if write and isinstance(decision, Applied):
        target = save_properties(snapshot)
        if not as_json:
            console.print(f"[dim]Saved to {escape(str(target))}[/dim]", highlight=False)
