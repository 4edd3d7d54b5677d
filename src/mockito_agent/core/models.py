"""Value types handed to and returned by the agent resolution engine.

All types are immutable snapshots that live for a single decision. The
host build supplies ``ResolvedArtifact`` and ``ExecutionPlugin`` records
plus an ``EngineConfig``; the engine answers with one ``Decision``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from mockito_agent.core.constants import DEFAULT_AGENT_ARTIFACT_ID, DEFAULT_AGENT_GROUP_ID
from mockito_agent.errors import MockitoAgentError


def format_coordinate(group_id: str | None, artifact_id: str | None) -> str:
    return f"{group_id}:{artifact_id}"


@dataclass(frozen=True, slots=True)
class ResolvedArtifact:
    """A dependency whose version is selected and whose file is on disk."""

    group_id: str
    artifact_id: str
    version: str
    file_path: str

    @property
    def coordinate(self) -> str:
        return format_coordinate(self.group_id, self.artifact_id)

    def matches(self, group_id: str, artifact_id: str) -> bool:
        return self.group_id == group_id and self.artifact_id == artifact_id


@dataclass(frozen=True, slots=True)
class ExecutionPlugin:
    """A configured test-runner plugin, identified by coordinates only."""

    group_id: str
    artifact_id: str


class SkipPrepare(Enum):
    """Tri-state ``skipPrepare`` flag.

    ``FALSE`` forces the goal to run even when tests are skipped, ``TRUE``
    always skips, ``UNSET`` defers to ``skipTests``.
    """

    UNSET = "unset"
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def from_optional(cls, value: bool | None) -> "SkipPrepare":
        if value is None:
            return cls.UNSET
        return cls.TRUE if value else cls.FALSE


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Goal configuration for one invocation."""

    agent_group_id: str | None = DEFAULT_AGENT_GROUP_ID
    agent_artifact_id: str | None = DEFAULT_AGENT_ARTIFACT_ID
    property_name_override: str | None = None
    skip_prepare: SkipPrepare = SkipPrepare.UNSET
    skip_tests: bool = False
    fail_silent: bool = False

    @property
    def agent_coordinate(self) -> str:
        return format_coordinate(self.agent_group_id, self.agent_artifact_id)


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Skipped:
    """The goal did nothing; the build continues."""

    reason: str
    severity: Severity = Severity.INFO


@dataclass(frozen=True, slots=True)
class Applied:
    """The property ``property_key`` must be set to ``new_value``."""

    property_key: str
    new_value: str
    artifact: ResolvedArtifact


@dataclass(frozen=True, slots=True)
class Failed:
    """The goal failed; the host must abort the build."""

    reason: str
    error: MockitoAgentError


Decision = Union[Skipped, Applied, Failed]


__all__ = [
    "Applied",
    "Decision",
    "EngineConfig",
    "ExecutionPlugin",
    "Failed",
    "ResolvedArtifact",
    "Severity",
    "SkipPrepare",
    "Skipped",
    "format_coordinate",
]
