"""Shared test fixtures for specman tests."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from rich.console import Console

from specman.cli import CLIContext
from specman.workspace import DOT_SPECMAN, WorkspacePaths


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep tests away from the user's config, logs and SPECMAN_* variables."""
    home = tmp_path_factory.mktemp("home")
    for key in list(os.environ):
        if key.startswith("SPECMAN_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("SPECMAN_LOGGING__FILE", str(home / "cli.log"))
    monkeypatch.setattr(
        "specman.config._discovery.get_user_config_path",
        lambda: home / "config.toml",
    )
    yield
    CLIContext.reset()


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspacePaths:
    """Create an empty workspace.

    Structure:
        tmp_path/
            .specman/
    """
    root = tmp_path.resolve()
    (root / DOT_SPECMAN).mkdir()
    return WorkspacePaths(root=root)


def _write_artifact(
    workspace: WorkspacePaths,
    artifact: str,
    *,
    dependencies: list[str] | None = None,
    extra: str = "",
    frontmatter: str | None = None,
) -> Path:
    """Create an artifact directory with its primary document.

    Args:
        workspace: Workspace to create the artifact in.
        artifact: Identity such as `spec/alpha`.
        dependencies: References written to the `dependencies` list.
        extra: Additional front matter lines.
        frontmatter: Raw front matter replacing the generated block.

    Returns:
        Path to the primary document.
    """
    kind, _, name = artifact.partition("/")
    base = workspace.scratchpad_dir if kind == "scratch" else workspace.root / kind
    document = base / name / f"{kind}.md"
    document.parent.mkdir(parents=True, exist_ok=True)

    if frontmatter is None:
        lines = [f"name: {name}"]
        if dependencies:
            lines.append("dependencies:")
            lines.extend(f"  - {ref}" for ref in dependencies)
        else:
            lines.append("dependencies: []")
        if extra:
            lines.append(extra)
        frontmatter = "\n".join(lines)

    document.write_text(f"---\n{frontmatter}\n---\n\n# {name}\n")
    return document


ArtifactFactory = Callable[..., Path]


@pytest.fixture
def make_artifact(workspace: WorkspacePaths) -> ArtifactFactory:
    """Return a factory creating artifacts in the `workspace` fixture."""

    def _make(artifact: str, **kwargs: object) -> Path:
        return _write_artifact(workspace, artifact, **kwargs)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
