from collections.abc import Callable
from pathlib import Path

from specman.artifacts import ArtifactKind
from specman.dependencies import DependencyView, StatusAggregator
from specman.workspace import WorkspacePaths


class TestStatusAggregator:
    def test_empty_workspace_is_healthy(self, workspace: WorkspacePaths) -> None:
        status = StatusAggregator(workspace).run()

        assert status.healthy
        assert status.reports == ()
        assert status.to_dict() == {"healthy": True, "view": "downstream", "reports": []}

    def test_reports_dangling_dependency_and_continues(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha", dependencies=["impl/beta"])
        _ = make_artifact("spec/gamma")
        _ = make_artifact("impl/delta", extra="spec: spec/gamma")

        status = StatusAggregator(workspace).run()

        assert not status.healthy
        assert [(r.name, r.kind, r.ok) for r in status.reports] == [
            ("alpha", ArtifactKind.SPECIFICATION, False),
            ("delta", ArtifactKind.IMPLEMENTATION, True),
            ("gamma", ArtifactKind.SPECIFICATION, True),
        ]
        alpha = status.reports[0]
        assert alpha.path == "spec/alpha/spec.md"
        assert alpha.message is not None
        assert "impl/beta" in alpha.message
        assert status.reports[1].message is None
        assert [r.name for r in status.failures] == ["alpha"]

    def test_same_name_is_sorted_by_kind(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/core")
        _ = make_artifact("impl/core", extra="spec: spec/core")

        status = StatusAggregator(workspace).run()

        assert [(r.name, r.kind.value) for r in status.reports] == [
            ("core", "impl"),
            ("core", "spec"),
        ]

    def test_scratch_pads_are_not_checked(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("scratch/pad", extra="target: impl/missing")

        status = StatusAggregator(workspace).run()

        assert status.healthy
        assert status.reports == ()

    def test_cycle_fails_every_member(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/a", dependencies=["spec/b"])
        _ = make_artifact("spec/b", dependencies=["spec/a"])

        status = StatusAggregator(workspace).run(DependencyView.UPSTREAM)

        assert status.view is DependencyView.UPSTREAM
        assert [r.ok for r in status.reports] == [False, False]
        assert all("Circular dependency" in (r.message or "") for r in status.reports)

    def test_parse_error_is_reported(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha", frontmatter="dependencies: nope")

        status = StatusAggregator(workspace).run(DependencyView.ALL)

        assert not status.healthy
        assert "must be a list" in (status.reports[0].message or "")
