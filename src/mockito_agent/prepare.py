"""Apply engine decisions to a build's properties.

This is the host side of the ``prepareAgent`` goal: ``Applied`` writes the
property once, ``Skipped`` only logs, ``Failed`` aborts by raising.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping

from mockito_agent.core.engine import decide
from mockito_agent.core.models import Applied, Decision, EngineConfig, Failed, Severity, Skipped
from mockito_agent.errors import AgentPreparationError
from mockito_agent.snapshot import BuildSnapshot

logger = logging.getLogger(__name__)


def apply_decision(decision: Decision, properties: MutableMapping[str, str]) -> Decision:
    """Carry out ``decision`` against ``properties``.

    Raises:
        AgentPreparationError: For a ``Failed`` decision. The property map is
            left untouched.
    """
    if isinstance(decision, Failed):
        raise AgentPreparationError(decision.reason) from decision.error

    if isinstance(decision, Skipped):
        level = logging.WARNING if decision.severity is Severity.WARNING else logging.INFO
        logger.log(level, decision.reason)
        return decision

    if isinstance(decision, Applied):
        properties[decision.property_key] = decision.new_value
        logger.info("%s set to %s", decision.property_key, decision.new_value)
        return decision

    raise TypeError(f"Unknown decision type: {type(decision).__name__}")


def prepare_agent(snapshot: BuildSnapshot, config: EngineConfig) -> Decision:
    """Decide and apply in one step against the snapshot's properties."""
    decision = decide(
        snapshot.artifacts(),
        snapshot.plugins(),
        snapshot.properties,
        config,
    )
    return apply_decision(decision, snapshot.properties)


__all__ = ["apply_decision", "prepare_agent"]
