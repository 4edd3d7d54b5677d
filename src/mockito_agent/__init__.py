"""Prepare the Mockito inline agent for a build's test JVM.

Computes the ``-javaagent`` flag for the resolved Mockito (or byte-buddy)
artifact and decides which build property (``argLine`` or
``tycho.testArgLine``) receives it.
"""

from importlib.metadata import PackageNotFoundError, version

from mockito_agent.core import (
    Applied,
    Decision,
    EngineConfig,
    ExecutionPlugin,
    Failed,
    ResolvedArtifact,
    SkipPrepare,
    Skipped,
    decide,
)

try:
    __version__ = version("mockito-agent")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

__all__ = [
    "Applied",
    "Decision",
    "EngineConfig",
    "ExecutionPlugin",
    "Failed",
    "ResolvedArtifact",
    "SkipPrepare",
    "Skipped",
    "__version__",
    "decide",
]
