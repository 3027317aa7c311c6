"""Integration tests for the deps command."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from specman.workspace import WorkspacePaths


@pytest.fixture
def chain(make_artifact: Callable[..., Path]) -> None:
    _ = make_artifact("spec/core")
    _ = make_artifact("impl/engine", extra="spec: spec/core")
    _ = make_artifact("scratch/tune", extra="target: impl/engine")


class TestDeps:
    def test_downstream_json(
        self,
        workspace: WorkspacePaths,
        chain: None,
        capsys: pytest.CaptureFixture[str],
        specman_cli: Callable[..., int],
    ) -> None:
        code = specman_cli(
            "--workspace", str(workspace.root), "deps", "spec/core", "--format", "json"
        )

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == "spec/core"
        assert data["view"] == "downstream"
        assert data["upstream"] == []
        assert data["downstream"] == [
            {"artifact": "impl/engine", "parent": "spec/core", "depth": 1, "scope": "implementation"},
            {"artifact": "scratch/tune", "parent": "impl/engine", "depth": 2, "scope": "scratch_pad"},
        ]

    def test_all_view_table(
        self,
        workspace: WorkspacePaths,
        chain: None,
        capsys: pytest.CaptureFixture[str],
        specman_cli: Callable[..., int],
    ) -> None:
        code = specman_cli("--workspace", str(workspace.root), "deps", "impl/engine", "--all")

        assert code == 0
        captured = capsys.readouterr()
        assert "upstream" in captured.out
        assert "spec/core" in captured.out
        assert "scratch/tune" in captured.out
        assert "3 artifacts in the complete view of impl/engine" in captured.err

    def test_missing_artifact_is_not_found(
        self, workspace: WorkspacePaths, specman_cli: Callable[..., int]
    ) -> None:
        assert specman_cli("--workspace", str(workspace.root), "deps", "spec/ghost") == 4

    def test_malformed_identity_is_usage_error(
        self, workspace: WorkspacePaths, specman_cli: Callable[..., int]
    ) -> None:
        assert specman_cli("--workspace", str(workspace.root), "deps", "ghost") == 2

    def test_cycle_is_reported_as_unhealthy(
        self,
        workspace: WorkspacePaths,
        make_artifact: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
        specman_cli: Callable[..., int],
    ) -> None:
        _ = make_artifact("spec/a", dependencies=["spec/b"])
        _ = make_artifact("spec/b", dependencies=["spec/a"])

        code = specman_cli("--workspace", str(workspace.root), "deps", "spec/a", "--upstream")

        assert code == 1
        assert "spec/a -> spec/b -> spec/a" in capsys.readouterr().err
