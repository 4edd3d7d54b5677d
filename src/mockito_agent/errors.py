"""Error taxonomy for Mockito agent preparation."""

from __future__ import annotations


class MockitoAgentError(RuntimeError):
    """Base class for all errors raised by mockito-agent."""


class ConfigurationError(MockitoAgentError):
    """Raised when the goal configuration is incomplete or malformed."""


class ArtifactNotFoundError(MockitoAgentError):
    """Raised when an expected dependency is missing from the resolved set."""

    def __init__(self, message: str, coordinate: str) -> None:
        super().__init__(message)
        self.coordinate = coordinate


class SnapshotError(MockitoAgentError):
    """Raised when a build snapshot cannot be read or validated."""


class AgentPreparationError(MockitoAgentError):
    """Raised by the output sink when a failed decision must abort the build."""


__all__ = [
    "AgentPreparationError",
    "ArtifactNotFoundError",
    "ConfigurationError",
    "MockitoAgentError",
    "SnapshotError",
]
