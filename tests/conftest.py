from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture()
def jar(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory creating empty jar files under tmp_path."""

    def _make(name: str) -> Path:
        path = tmp_path / "repository" / f"{name}.jar"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        return path.resolve()

    return _make


@pytest.fixture(autouse=True)
def clean_agent_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep goal settings from the developer's environment out of tests."""
    for name in (
        "MOCKITO_AGENT_PROPERTY_NAME",
        "MOCKITO_AGENT_GROUP_ID",
        "MOCKITO_AGENT_ARTIFACT_ID",
        "MOCKITO_SKIP_PREPARE",
        "SKIP_TESTS",
        "MOCKITO_FAIL_SILENT",
    ):
        monkeypatch.delenv(name, raising=False)
