"""Build snapshot files: the input adapter for the CLI.

A snapshot is a YAML document describing an already-resolved build: its
dependencies (with resolved file locations), its build plugins, its
current properties and an optional ``mockito:`` goal configuration.
Nothing here resolves dependencies or parses ``pom.xml``; the file is
produced by the host build.

Example::

    dependencies:
      - groupId: org.mockito
        artifactId: mockito-core
        version: 5.15.0
        file: /home/me/.m2/repository/org/mockito/mockito-core/5.15.0/mockito-core-5.15.0.jar
    plugins:
      - groupId: org.eclipse.tycho
        artifactId: tycho-surefire-plugin
    properties:
      argLine: -Xmx1g
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mockito_agent.core.models import ExecutionPlugin, ResolvedArtifact
from mockito_agent.errors import SnapshotError

logger = logging.getLogger(__name__)


class DependencyEntry(BaseModel):
    """One resolved dependency."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    group_id: str = Field(..., alias="groupId", min_length=1)
    artifact_id: str = Field(..., alias="artifactId", min_length=1)
    version: str = Field(..., min_length=1)
    file: str = Field(..., min_length=1)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_string(cls, value: Any) -> Any:
        # unquoted `version: 5.15` arrives as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class PluginEntry(BaseModel):
    """One configured build plugin."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    group_id: str = Field(..., alias="groupId", min_length=1)
    artifact_id: str = Field(..., alias="artifactId", min_length=1)


class SnapshotDocument(BaseModel):
    """Top-level snapshot schema."""

    model_config = ConfigDict(extra="ignore")

    dependencies: list[DependencyEntry] = Field(default_factory=list)
    plugins: list[PluginEntry] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)
    mockito: dict[str, Any] = Field(default_factory=dict)

    @field_validator("dependencies", "plugins", mode="before")
    @classmethod
    def _empty_list(cls, value: Any) -> Any:
        # a bare `plugins:` key loads as None
        return [] if value is None else value

    @field_validator("properties", "mockito", mode="before")
    @classmethod
    def _empty_mapping(cls, value: Any) -> Any:
        return {} if value is None else value


class BuildSnapshot:
    """A loaded snapshot; ``properties`` is the mutable property store."""

    def __init__(self, document: SnapshotDocument, base_dir: Path, path: Path | None = None) -> None:
        self.document = document
        self.base_dir = base_dir
        self.path = path
        self.properties: dict[str, str] = dict(document.properties)

    @property
    def goal_settings(self) -> dict[str, Any]:
        return dict(self.document.mockito)

    def _absolute(self, file: str) -> str:
        # Path arithmetic only, the artifact file is never opened.
        candidate = Path(file).expanduser()
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return os.path.normpath(str(candidate))

    def artifacts(self) -> list[ResolvedArtifact]:
        return [
            ResolvedArtifact(
                group_id=entry.group_id,
                artifact_id=entry.artifact_id,
                version=entry.version,
                file_path=self._absolute(entry.file),
            )
            for entry in self.document.dependencies
        ]

    def plugins(self) -> list[ExecutionPlugin]:
        return [
            ExecutionPlugin(group_id=entry.group_id, artifact_id=entry.artifact_id)
            for entry in self.document.plugins
        ]


def _property_text(value: Any) -> str:
    # YAML turns `skipTests: true` or `foo: 1` into non-strings
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _stringify_properties(raw: Any) -> Any:
    if not isinstance(raw, dict):
        return raw
    return {str(key): _property_text(value) for key, value in raw.items()}


def parse_snapshot(payload: Any, base_dir: Path, path: Path | None = None) -> BuildSnapshot:
    """Validate an already-parsed snapshot payload.

    Raises:
        SnapshotError: If the payload does not match the snapshot schema.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise SnapshotError(f"Snapshot {path or '<memory>'} must be a mapping")

    data = dict(payload)
    if "properties" in data:
        data["properties"] = _stringify_properties(data["properties"])
    try:
        document = SnapshotDocument.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {path or '<memory>'}: {exc}") from exc
    return BuildSnapshot(document, base_dir=base_dir, path=path)


def load_snapshot(path: Path) -> BuildSnapshot:
    """Load and validate a snapshot YAML file.

    Raises:
        SnapshotError: If the file is missing, is not valid YAML or does not
            match the schema.
    """
    if not path.is_file():
        raise SnapshotError(f"Snapshot file not found: {path}")

    yaml = YAML(typ="safe", pure=True)
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle)
    except YAMLError as exc:
        raise SnapshotError(f"Invalid YAML in {path}: {exc}") from exc

    snapshot = parse_snapshot(payload, base_dir=path.resolve().parent, path=path)
    logger.debug(
        "Loaded snapshot %s: %d dependencies, %d plugins",
        path,
        len(snapshot.document.dependencies),
        len(snapshot.document.plugins),
    )
    return snapshot


def save_properties(snapshot: BuildSnapshot, path: Path | None = None) -> Path:
    """Write ``snapshot.properties`` back to its YAML file, preserving other sections.

    Only changed keys are rewritten; untouched properties keep their YAML
    type, quoting and comments.
    """
    target = path or snapshot.path
    if target is None:
        raise SnapshotError("Snapshot has no file to write to")

    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.indent(mapping=2, sequence=4, offset=2)

    if target.exists():
        with target.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    else:
        payload = {}

    if not isinstance(payload, dict):
        payload = {}

    section = payload.get("properties")
    if not isinstance(section, dict):
        section = {}
        payload["properties"] = section

    for key in [key for key in section if str(key) not in snapshot.properties]:
        del section[key]
    for key, value in snapshot.properties.items():
        if key not in section or _property_text(section[key]) != value:
            section[key] = value

    with target.open("w", encoding="utf-8") as handle:
        yaml.dump(payload, handle)

    logger.info("Saved properties to %s", target)
    return target


__all__ = [
    "BuildSnapshot",
    "DependencyEntry",
    "PluginEntry",
    "SnapshotDocument",
    "load_snapshot",
    "parse_snapshot",
    "save_properties",
]
