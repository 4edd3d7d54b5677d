from __future__ import annotations

from pathlib import Path

from mockito_agent.core.models import ExecutionPlugin, ResolvedArtifact

MOCKITO = ("org.mockito", "mockito-core")
BYTE_BUDDY = ("net.bytebuddy", "byte-buddy-agent")


def artifact(
    group_id: str,
    artifact_id: str,
    file_path: Path | str,
    version: str = "5.15.0",
) -> ResolvedArtifact:
    return ResolvedArtifact(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        file_path=str(file_path),
    )


def plugin(group_id: str, artifact_id: str) -> ExecutionPlugin:
    return ExecutionPlugin(group_id=group_id, artifact_id=artifact_id)


TYCHO = plugin("org.eclipse.tycho", "tycho-surefire-plugin")
SUREFIRE = plugin("org.apache.maven.plugins", "maven-surefire-plugin")


def write_snapshot(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path
