"""Goal configuration from build properties, environment and CLI options.

The recognised user properties are those of the Maven ``prepareAgent``
goal (``mockito.agentGroupId``, ``mockito.failSilent``, ...). Each has an
environment variable counterpart. Layers are applied in this order, later
layers winning:

    defaults < snapshot ``mockito:`` section < snapshot properties
             < environment < ``-D`` properties < explicit CLI options
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace

from mockito_agent.core.models import EngineConfig, SkipPrepare
from mockito_agent.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUTHY_VALUES = {"1", "true", "yes", "on"}
_FALSY_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ConfigOption:
    field: str
    property: str
    env_var: str
    snapshot_key: str


OPTIONS: tuple[ConfigOption, ...] = (
    ConfigOption("property_name_override", "mockito.agentPropertyName", "MOCKITO_AGENT_PROPERTY_NAME", "propertyName"),
    ConfigOption("agent_group_id", "mockito.agentGroupId", "MOCKITO_AGENT_GROUP_ID", "agentGroupId"),
    ConfigOption("agent_artifact_id", "mockito.agentArtifactId", "MOCKITO_AGENT_ARTIFACT_ID", "agentArtifactId"),
    ConfigOption("skip_prepare", "mockito.skipPrepare", "MOCKITO_SKIP_PREPARE", "skipPrepare"),
    ConfigOption("skip_tests", "skipTests", "SKIP_TESTS", "skipTests"),
    ConfigOption("fail_silent", "mockito.failSilent", "MOCKITO_FAIL_SILENT", "failSilent"),
)

_BOOLEAN_FIELDS = {"skip_tests", "fail_silent"}


def parse_bool(raw: object, name: str) -> bool:
    """Parse a boolean option value.

    Raises:
        ConfigurationError: If ``raw`` is not a recognised boolean spelling.
    """
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in _TRUTHY_VALUES:
        return True
    if value in _FALSY_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean for {name}: {raw!r}. "
        f"Expected one of: {', '.join(sorted(_TRUTHY_VALUES | _FALSY_VALUES))}"
    )


def parse_kv_pairs(pairs: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` strings (as given to ``-D``)."""
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not key:
            raise ConfigurationError(f"Invalid property '{pair}'. Expected key=value")
        # Maven treats a bare -Dflag as flag=true
        parsed[key] = value if sep else "true"
    return parsed


def _coerce(option: ConfigOption, raw: object, source: str) -> object:
    name = f"{option.property} ({source})"
    if option.field == "skip_prepare":
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return SkipPrepare.UNSET
        return SkipPrepare.from_optional(parse_bool(raw, name))
    if option.field in _BOOLEAN_FIELDS:
        return parse_bool(raw, name)
    return None if raw is None else str(raw)


def _collect(
    values: Mapping[str, object],
    key_of: Callable[[ConfigOption], str],
    source: str,
) -> dict[str, object]:
    collected: dict[str, object] = {}
    for option in OPTIONS:
        key = key_of(option)
        if key in values:
            collected[option.field] = _coerce(option, values[key], source)
    return collected


def settings_from_snapshot_section(section: Mapping[str, object] | None) -> dict[str, object]:
    """Read the ``mockito:`` section of a snapshot (goal-style camelCase keys)."""
    return _collect(section or {}, lambda option: option.snapshot_key, "snapshot")


def settings_from_properties(properties: Mapping[str, str]) -> dict[str, object]:
    return _collect(properties, lambda option: option.property, "property")


def settings_from_env(environ: Mapping[str, str] | None = None) -> dict[str, object]:
    environ = os.environ if environ is None else environ
    return _collect(environ, lambda option: option.env_var, "environment")


def merge_config(base: EngineConfig, **overrides: object) -> EngineConfig:
    """Layer ``overrides`` on ``base``; ``None`` values leave a field untouched."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(base, **changes) if changes else base


def config_from_properties(
    properties: Mapping[str, str],
    base: EngineConfig | None = None,
) -> EngineConfig:
    return merge_config(base or EngineConfig(), **settings_from_properties(properties))


def config_from_env(
    environ: Mapping[str, str] | None = None,
    base: EngineConfig | None = None,
) -> EngineConfig:
    return merge_config(base or EngineConfig(), **settings_from_env(environ))


def resolve_layers(
    layers: Iterable[tuple[str, Mapping[str, object]]],
) -> tuple[EngineConfig, dict[str, str]]:
    """Apply named layers of settings in order.

    Returns:
        The effective config and, per field, the name of the layer that set it.
    """
    config = EngineConfig()
    origins = {option.field: "default" for option in OPTIONS}
    for name, settings in layers:
        # An explicit UNSET from a later layer resets skipPrepare.
        config = replace(config, **dict(settings))
        for field in settings:
            origins[field] = name
        if settings:
            logger.debug("Applied %s config layer: %s", name, sorted(settings))
    return config, origins


def effective_config(
    goal_settings: Mapping[str, object] | None = None,
    properties: Mapping[str, str] | None = None,
    environ: Mapping[str, str] | None = None,
    defines: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> tuple[EngineConfig, dict[str, str]]:
    """Resolve the configuration from every source in precedence order.

    ``overrides`` holds explicit option values keyed by ``EngineConfig``
    field; ``None`` entries are ignored.
    """
    explicit = {key: value for key, value in (overrides or {}).items() if value is not None}
    return resolve_layers(
        [
            ("snapshot", settings_from_snapshot_section(goal_settings)),
            ("property", settings_from_properties(properties or {})),
            ("environment", settings_from_env(environ)),
            ("define", settings_from_properties(defines or {})),
            ("option", explicit),
        ]
    )


__all__ = [
    "OPTIONS",
    "ConfigOption",
    "config_from_env",
    "config_from_properties",
    "effective_config",
    "merge_config",
    "parse_bool",
    "parse_kv_pairs",
    "resolve_layers",
    "settings_from_env",
    "settings_from_properties",
    "settings_from_snapshot_section",
]
