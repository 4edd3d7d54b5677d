"""Agent resolution engine and its value types."""

from .engine import decide, select_property_key, should_skip
from .models import (
    Applied,
    Decision,
    EngineConfig,
    ExecutionPlugin,
    Failed,
    ResolvedArtifact,
    Severity,
    SkipPrepare,
    Skipped,
)
from .versions import DottedVersion, compare_versions

__all__ = [
    "Applied",
    "Decision",
    "DottedVersion",
    "EngineConfig",
    "ExecutionPlugin",
    "Failed",
    "ResolvedArtifact",
    "Severity",
    "SkipPrepare",
    "Skipped",
    "compare_versions",
    "decide",
    "select_property_key",
    "should_skip",
]
