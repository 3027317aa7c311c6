from collections.abc import Callable
from pathlib import Path

import pytest

from specman.artifacts import ArtifactId
from specman.dependencies import (
    DependencyEntry,
    DependencyScope,
    DependencyView,
    FilesystemDependencyMapper,
)
from specman.exceptions import (
    ArtifactNotFoundError,
    CircularDependencyError,
    DanglingDependencyError,
    DependencyParseError,
)
from specman.workspace import WorkspacePaths


def artifact(raw: str) -> ArtifactId:
    return ArtifactId.parse(raw)


def entries(mapping_entries: tuple[DependencyEntry, ...]) -> list[tuple[str, str, int]]:
    return [(str(e.artifact), str(e.parent), e.depth) for e in mapping_entries]


@pytest.fixture
def layered(make_artifact: Callable[..., Path]) -> None:
    """spec/core <- spec/api <- impl/server, impl/client <- scratch/pad."""
    _ = make_artifact("spec/core")
    _ = make_artifact("spec/api", dependencies=["spec/core"])
    _ = make_artifact("impl/server", dependencies=["spec/api"])
    _ = make_artifact("impl/client", dependencies=["spec/api", "spec/core"])
    _ = make_artifact("scratch/pad", extra="target: impl/client")


class TestDependencyTree:
    def test_downstream_lists_dependents(
        self, workspace: WorkspacePaths, layered: None
    ) -> None:
        mapping = FilesystemDependencyMapper(workspace).dependency_tree(
            artifact("spec/core")
        )

        assert mapping.view is DependencyView.DOWNSTREAM
        assert mapping.upstream == ()
        assert entries(mapping.downstream) == [
            ("impl/client", "spec/core", 1),
            ("scratch/pad", "impl/client", 2),
            ("spec/api", "spec/core", 1),
            ("impl/server", "spec/api", 2),
        ]

    def test_upstream_lists_dependencies(
        self, workspace: WorkspacePaths, layered: None
    ) -> None:
        mapping = FilesystemDependencyMapper(workspace).dependency_tree(
            artifact("scratch/pad"), DependencyView.UPSTREAM
        )

        assert mapping.downstream == ()
        assert entries(mapping.upstream) == [
            ("impl/client", "scratch/pad", 1),
            ("spec/api", "impl/client", 2),
            ("spec/core", "spec/api", 3),
        ]
        assert [e.scope for e in mapping.upstream] == [
            DependencyScope.IMPLEMENTATION,
            DependencyScope.SPECIFICATION,
            DependencyScope.SPECIFICATION,
        ]

    def test_all_view_contains_both_directions(
        self, workspace: WorkspacePaths, layered: None
    ) -> None:
        mapping = FilesystemDependencyMapper(workspace).dependency_tree(
            artifact("spec/api"), DependencyView.ALL
        )

        assert entries(mapping.upstream) == [("spec/core", "spec/api", 1)]
        assert [str(a) for a in mapping.artifacts] == [
            "spec/api",
            "spec/core",
            "impl/client",
            "scratch/pad",
            "impl/server",
        ]

    def test_leaf_has_empty_views(self, workspace: WorkspacePaths, layered: None) -> None:
        mapping = FilesystemDependencyMapper(workspace).dependency_tree(
            artifact("impl/server")
        )

        assert mapping.downstream == ()
        assert mapping.artifacts == ()

    def test_repeated_queries_are_identical(
        self, workspace: WorkspacePaths, layered: None
    ) -> None:
        mapper = FilesystemDependencyMapper(workspace)

        first = mapper.dependency_tree(artifact("spec/core"), DependencyView.ALL)
        second = mapper.dependency_tree(artifact("spec/core"), DependencyView.ALL)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_missing_artifact_raises(self, workspace: WorkspacePaths) -> None:
        with pytest.raises(ArtifactNotFoundError) as exc_info:
            _ = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/ghost"))

        assert exc_info.value.artifact == "spec/ghost"


class TestDanglingDependencies:
    def test_root_with_missing_dependency_raises(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha", dependencies=["impl/beta"])

        with pytest.raises(DanglingDependencyError) as exc_info:
            _ = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/alpha"))

        assert exc_info.value.artifact == "spec/alpha"
        assert exc_info.value.reference == "impl/beta"

    def test_upstream_reports_dangling_dependency_of_reached_artifact(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha", dependencies=["spec/missing"])
        _ = make_artifact("impl/beta", dependencies=["spec/alpha"])

        with pytest.raises(DanglingDependencyError) as exc_info:
            _ = FilesystemDependencyMapper(workspace).dependency_tree(
                artifact("impl/beta"), DependencyView.UPSTREAM
            )

        assert exc_info.value.artifact == "spec/alpha"

    def test_downstream_ignores_dangling_dependency_of_dependents(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha")
        _ = make_artifact("impl/beta", dependencies=["spec/alpha", "spec/missing"])

        mapping = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/alpha"))

        assert entries(mapping.downstream) == [("impl/beta", "spec/alpha", 1)]


class TestParseErrors:
    def test_root_parse_error_raises(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha", frontmatter="dependencies: 3")

        with pytest.raises(DependencyParseError):
            _ = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/alpha"))

    def test_unrelated_parse_error_is_ignored(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha")
        _ = make_artifact("spec/broken", frontmatter="dependencies: [")

        mapping = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/alpha"))

        assert mapping.downstream == ()

    def test_unparsable_dependent_is_not_listed_downstream(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/alpha")
        _ = make_artifact("impl/beta", dependencies=["spec/alpha"])
        _ = make_artifact("impl/broken", frontmatter="spec: spec/alpha\ndependencies: 3")

        mapping = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/alpha"))

        assert entries(mapping.downstream) == [("impl/beta", "spec/alpha", 1)]


class TestCycles:
    def test_upstream_cycle_is_reported_in_order(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/a", dependencies=["spec/b"])
        _ = make_artifact("spec/b", dependencies=["spec/c"])
        _ = make_artifact("spec/c", dependencies=["spec/a"])

        with pytest.raises(CircularDependencyError) as exc_info:
            _ = FilesystemDependencyMapper(workspace).dependency_tree(
                artifact("spec/a"), DependencyView.UPSTREAM
            )

        assert exc_info.value.cycle == ["spec/a", "spec/b", "spec/c", "spec/a"]
        assert exc_info.value.artifact == "spec/a"

    def test_downstream_cycle_uses_depends_on_order(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/a", dependencies=["spec/b"])
        _ = make_artifact("spec/b", dependencies=["spec/a"])

        with pytest.raises(CircularDependencyError) as exc_info:
            _ = FilesystemDependencyMapper(workspace).dependency_tree(artifact("spec/a"))

        assert exc_info.value.cycle == ["spec/a", "spec/b", "spec/a"]

    def test_self_dependency_is_a_cycle(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/a", dependencies=["spec/a"])

        with pytest.raises(CircularDependencyError) as exc_info:
            _ = FilesystemDependencyMapper(workspace).dependency_tree(
                artifact("spec/a"), DependencyView.UPSTREAM
            )

        assert exc_info.value.cycle == ["spec/a", "spec/a"]

    def test_diamond_is_not_a_cycle(
        self, workspace: WorkspacePaths, make_artifact: Callable[..., Path]
    ) -> None:
        _ = make_artifact("spec/base")
        _ = make_artifact("spec/left", dependencies=["spec/base"])
        _ = make_artifact("spec/right", dependencies=["spec/base"])
        _ = make_artifact("spec/top", dependencies=["spec/left", "spec/right"])

        mapping = FilesystemDependencyMapper(workspace).dependency_tree(
            artifact("spec/top"), DependencyView.UPSTREAM
        )

        assert entries(mapping.upstream) == [
            ("spec/left", "spec/top", 1),
            ("spec/base", "spec/left", 2),
            ("spec/right", "spec/top", 1),
        ]
