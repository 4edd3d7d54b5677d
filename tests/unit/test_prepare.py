"""Tests for applying decisions to build properties."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mockito_agent.core.models import (
    Applied,
    EngineConfig,
    Failed,
    Severity,
    SkipPrepare,
    Skipped,
)
from mockito_agent.errors import AgentPreparationError, ArtifactNotFoundError
from mockito_agent.prepare import apply_decision, prepare_agent
from mockito_agent.snapshot import parse_snapshot
from tests.utils import MOCKITO, artifact


class TestApplyDecision:
    def test_applied_sets_property_once(self, caplog: pytest.LogCaptureFixture) -> None:
        properties = {"argLine": "-Dfoo=bar"}
        decision = Applied("argLine", '-javaagent:"/x/a.jar" -Dfoo=bar', artifact(*MOCKITO, "/x/a.jar"))

        with caplog.at_level(logging.INFO, logger="mockito_agent"):
            assert apply_decision(decision, properties) is decision

        assert properties == {"argLine": '-javaagent:"/x/a.jar" -Dfoo=bar'}
        assert "argLine set to" in caplog.text

    def test_skipped_leaves_properties(self, caplog: pytest.LogCaptureFixture) -> None:
        properties: dict[str, str] = {}

        with caplog.at_level(logging.INFO, logger="mockito_agent"):
            apply_decision(Skipped("Tests are skipped"), properties)

        assert properties == {}
        assert caplog.records[-1].levelno == logging.INFO

    def test_silent_failure_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="mockito_agent"):
            apply_decision(Skipped("Could not resolve artifact a:b, skipping step", Severity.WARNING), {})

        assert caplog.records[-1].levelno == logging.WARNING

    def test_failed_raises_and_leaves_properties(self) -> None:
        properties = {"argLine": "-Dfoo=bar"}
        error = ArtifactNotFoundError("Could not resolve artifact a:b", coordinate="a:b")

        with pytest.raises(AgentPreparationError) as exc_info:
            apply_decision(Failed(str(error), error), properties)

        assert exc_info.value.__cause__ is error
        assert properties == {"argLine": "-Dfoo=bar"}


class TestPrepareAgent:
    def _snapshot(self, tmp_path: Path, **extra):
        payload = {
            "dependencies": [
                {
                    "groupId": "org.mockito",
                    "artifactId": "mockito-core",
                    "version": "5.15.0",
                    "file": "/repo/mockito-core.jar",
                }
            ],
            **extra,
        }
        return parse_snapshot(payload, base_dir=tmp_path)

    def test_writes_argline(self, tmp_path: Path) -> None:
        snapshot = self._snapshot(tmp_path, properties={"argLine": "-Dfoo=bar"})

        decision = prepare_agent(snapshot, EngineConfig())

        assert isinstance(decision, Applied)
        assert snapshot.properties["argLine"] == '-javaagent:"/repo/mockito-core.jar" -Dfoo=bar'

    def test_writes_tycho_property(self, tmp_path: Path) -> None:
        snapshot = self._snapshot(
            tmp_path,
            plugins=[{"groupId": "org.eclipse.tycho", "artifactId": "tycho-surefire-plugin"}],
        )

        prepare_agent(snapshot, EngineConfig())

        assert "argLine" not in snapshot.properties
        assert snapshot.properties["tycho.testArgLine"].strip() == '-javaagent:"/repo/mockito-core.jar"'

    def test_skip_prepare_false_runs_with_skipped_tests(self, tmp_path: Path) -> None:
        snapshot = self._snapshot(tmp_path)

        prepare_agent(snapshot, EngineConfig(skip_tests=True, skip_prepare=SkipPrepare.FALSE))

        assert "argLine" in snapshot.properties

    def test_missing_artifact_aborts(self, tmp_path: Path) -> None:
        snapshot = parse_snapshot({}, base_dir=tmp_path)

        with pytest.raises(AgentPreparationError):
            prepare_agent(snapshot, EngineConfig())

        assert snapshot.properties == {}

    def test_missing_artifact_fail_silent(self, tmp_path: Path) -> None:
        snapshot = parse_snapshot({}, base_dir=tmp_path)

        decision = prepare_agent(snapshot, EngineConfig(fail_silent=True))

        assert isinstance(decision, Skipped)
        assert snapshot.properties == {}
