"""Agent resolution engine.

Decides whether to prepare the Mockito agent for a build, which resolved
dependency supplies it and which build property receives the
``-javaagent`` flag. The engine is pure: it reads only the values handed
to it, never touches the filesystem and keeps no state between calls.

Decision steps, in order:

1. Skip flags (``skipTests`` / tri-state ``skipPrepare``)
2. Agent coordinates must be set
3. Property key: override > tycho-surefire detection > ``argLine``
4. Agent artifact lookup in the resolved dependencies
5. mockito-core older than the threshold falls back to byte-buddy-agent
6. Flag is prepended to the existing property value
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping

from mockito_agent.core.constants import (
    AGENT_THRESHOLD_VERSION,
    DEFAULT_AGENT_ARTIFACT_ID,
    DEFAULT_AGENT_GROUP_ID,
    FALLBACK_AGENT_ARTIFACT_ID,
    FALLBACK_AGENT_GROUP_ID,
    SUREFIRE_ARGLINE_PROPERTY,
    TYCHO_ARGLINE_PROPERTY,
    TYCHO_SUREFIRE_ARTIFACT_ID,
    TYCHO_SUREFIRE_GROUP_ID,
)
from mockito_agent.core.models import (
    Applied,
    Decision,
    EngineConfig,
    ExecutionPlugin,
    Failed,
    ResolvedArtifact,
    Severity,
    SkipPrepare,
    Skipped,
    format_coordinate,
)
from mockito_agent.core.versions import is_lower_than
from mockito_agent.errors import (
    ArtifactNotFoundError,
    ConfigurationError,
    MockitoAgentError,
)

logger = logging.getLogger(__name__)

PropertyLookup = Callable[[str], str | None]


# ---------------------------------------------------------------------------
# Helper predicates
# ---------------------------------------------------------------------------

def should_skip(config: EngineConfig) -> str | None:
    """Return the skip reason for ``config``, or None when the goal should run."""
    if config.skip_tests and config.skip_prepare is not SkipPrepare.FALSE:
        return "Tests are skipped"
    if config.skip_prepare is SkipPrepare.TRUE:
        return "Goal is skipped"
    return None


def is_tycho_test_plugin(plugin: ExecutionPlugin) -> bool:
    return (
        plugin.group_id == TYCHO_SUREFIRE_GROUP_ID
        and plugin.artifact_id == TYCHO_SUREFIRE_ARTIFACT_ID
    )


def select_property_key(
    plugins: Iterable[ExecutionPlugin],
    override: str | None = None,
) -> str:
    """Pick the property that receives the agent flag.

    An explicit override always wins, which lets users force ``argLine``
    even when tycho-surefire is configured.
    """
    if override is not None:
        return override
    if any(is_tycho_test_plugin(plugin) for plugin in plugins):
        return TYCHO_ARGLINE_PROPERTY
    return SUREFIRE_ARGLINE_PROPERTY


def find_artifact(
    dependencies: Iterable[ResolvedArtifact],
    group_id: str,
    artifact_id: str,
) -> ResolvedArtifact | None:
    return next(
        (artifact for artifact in dependencies if artifact.matches(group_id, artifact_id)),
        None,
    )


def resolve_agent_artifact(
    dependencies: Iterable[ResolvedArtifact],
    artifact: ResolvedArtifact,
) -> ResolvedArtifact:
    """Swap mockito-core for byte-buddy-agent when mockito-core predates its own agent.

    Raises:
        ArtifactNotFoundError: If the fallback agent is required but missing.
    """
    if not artifact.matches(DEFAULT_AGENT_GROUP_ID, DEFAULT_AGENT_ARTIFACT_ID):
        return artifact
    if not is_lower_than(artifact.version, AGENT_THRESHOLD_VERSION):
        return artifact

    fallback = find_artifact(dependencies, FALLBACK_AGENT_GROUP_ID, FALLBACK_AGENT_ARTIFACT_ID)
    if fallback is None:
        coordinate = format_coordinate(FALLBACK_AGENT_GROUP_ID, FALLBACK_AGENT_ARTIFACT_ID)
        raise ArtifactNotFoundError(
            f"{artifact.coordinate} {artifact.version} is older than "
            f"{AGENT_THRESHOLD_VERSION}, expected {coordinate} but could not find it. "
            "Check for an excluded transitive dependency",
            coordinate=coordinate,
        )
    logger.debug(
        "%s %s is older than %s, using %s",
        artifact.coordinate,
        artifact.version,
        AGENT_THRESHOLD_VERSION,
        fallback.coordinate,
    )
    return fallback


def build_agent_flag(file_path: str) -> str:
    return f'-javaagent:"{file_path}"'


def merge_property_value(flag: str, existing: str | None) -> str:
    """Prepend ``flag`` to ``existing``; the existing value is kept verbatim."""
    return f"{flag} {existing or ''}"


def _as_lookup(existing_property_value: PropertyLookup | Mapping[str, str]) -> PropertyLookup:
    if isinstance(existing_property_value, Mapping):
        return existing_property_value.get
    return existing_property_value


def _validate(config: EngineConfig) -> tuple[str, str]:
    if not config.agent_group_id or not config.agent_artifact_id:
        raise ConfigurationError("Both agentGroupId and agentArtifactId must be set")
    return config.agent_group_id, config.agent_artifact_id


def _resolve(
    dependencies: list[ResolvedArtifact],
    plugins: list[ExecutionPlugin],
    lookup: PropertyLookup,
    config: EngineConfig,
) -> Applied:
    group_id, artifact_id = _validate(config)
    property_key = select_property_key(plugins, config.property_name_override)

    artifact = find_artifact(dependencies, group_id, artifact_id)
    if artifact is None:
        coordinate = format_coordinate(group_id, artifact_id)
        raise ArtifactNotFoundError(f"Could not resolve artifact {coordinate}", coordinate=coordinate)
    agent = resolve_agent_artifact(dependencies, artifact)

    flag = build_agent_flag(agent.file_path)
    new_value = merge_property_value(flag, lookup(property_key))
    return Applied(property_key=property_key, new_value=new_value, artifact=agent)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def decide(
    dependencies: Iterable[ResolvedArtifact],
    plugins: Iterable[ExecutionPlugin],
    existing_property_value: PropertyLookup | Mapping[str, str],
    config: EngineConfig,
) -> Decision:
    """Decide how to prepare the agent for one build.

    Args:
        dependencies: Resolved build dependencies.
        plugins: Configured build plugins.
        existing_property_value: Lookup for current property values, either a
            callable returning None for absent keys or a mapping.
        config: Goal configuration.

    Returns:
        ``Skipped``, ``Applied`` or ``Failed``. Missing configuration or
        artifacts yield ``Failed``, or a warning-level ``Skipped`` when
        ``config.fail_silent`` is set. Nothing is raised for them.
    """
    skip_reason = should_skip(config)
    if skip_reason is not None:
        logger.debug("Skipping agent preparation: %s", skip_reason)
        return Skipped(skip_reason)

    try:
        decision = _resolve(
            list(dependencies),
            list(plugins),
            _as_lookup(existing_property_value),
            config,
        )
    except MockitoAgentError as exc:
        if config.fail_silent:
            logger.debug("Failing silently: %s", exc)
            return Skipped(f"{exc}, skipping step", Severity.WARNING)
        return Failed(str(exc), exc)

    logger.debug("Resolved %s for %s", decision.artifact.coordinate, decision.property_key)
    return decision


__all__ = [
    "build_agent_flag",
    "decide",
    "find_artifact",
    "is_tycho_test_plugin",
    "merge_property_value",
    "resolve_agent_artifact",
    "select_property_key",
    "should_skip",
]
