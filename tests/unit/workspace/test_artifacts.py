import pytest

from specman.artifacts import ArtifactId, ArtifactKind, discover_artifacts
from specman.workspace import WorkspacePaths


class TestArtifactKind:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("spec", ArtifactKind.SPECIFICATION),
            ("Specification", ArtifactKind.SPECIFICATION),
            ("implementation", ArtifactKind.IMPLEMENTATION),
            ("scratchpad", ArtifactKind.SCRATCH_PAD),
        ],
    )
    def test_parse_accepts_aliases(self, raw: str, expected: ArtifactKind) -> None:
        assert ArtifactKind.parse(raw) is expected

    def test_parse_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown artifact kind"):
            _ = ArtifactKind.parse("doc")

    def test_directories(self, workspace: WorkspacePaths) -> None:
        assert ArtifactKind.SPECIFICATION.directory(workspace) == workspace.root / "spec"
        assert ArtifactKind.IMPLEMENTATION.directory(workspace) == workspace.root / "impl"
        assert ArtifactKind.SCRATCH_PAD.directory(workspace) == (
            workspace.root / ".specman" / "scratchpad"
        )


class TestArtifactId:
    def test_parse_and_str(self) -> None:
        artifact = ArtifactId.parse("impl/beta")

        assert artifact == ArtifactId(ArtifactKind.IMPLEMENTATION, "beta")
        assert str(artifact) == "impl/beta"

    @pytest.mark.parametrize("raw", ["beta", "impl/", "impl/a/b", "/beta"])
    def test_parse_rejects_malformed(self, raw: str) -> None:
        with pytest.raises(ValueError):
            _ = ArtifactId.parse(raw)

    def test_document_path(self, workspace: WorkspacePaths) -> None:
        artifact = ArtifactId.parse("scratch/pad")

        assert artifact.document_path(workspace) == (
            workspace.scratchpad_dir / "pad" / "scratch.md"
        )


class TestDiscoverArtifacts:
    def test_discovers_sorted_directories(self, workspace: WorkspacePaths) -> None:
        for path in ("spec/zeta", "spec/alpha", "impl/beta", ".specman/scratchpad/pad"):
            (workspace.root / path).mkdir(parents=True)
        (workspace.root / "spec" / ".hidden").mkdir()
        _ = (workspace.root / "spec" / "README.md").write_text("not an artifact")

        found = discover_artifacts(workspace)

        assert [str(a) for a in found] == [
            "impl/beta",
            "scratch/pad",
            "spec/alpha",
            "spec/zeta",
        ]

    def test_filters_kinds(self, workspace: WorkspacePaths) -> None:
        (workspace.root / "spec" / "alpha").mkdir(parents=True)
        (workspace.root / "impl" / "beta").mkdir(parents=True)

        found = discover_artifacts(workspace, kinds=[ArtifactKind.IMPLEMENTATION])

        assert [str(a) for a in found] == ["impl/beta"]

    def test_missing_directories_yield_nothing(self, workspace: WorkspacePaths) -> None:
        assert discover_artifacts(workspace) == ()
