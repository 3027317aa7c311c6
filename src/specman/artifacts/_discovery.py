"""Artifact discovery on disk."""

from collections.abc import Iterable

from specman.exceptions import SpecmanIOError
from specman.workspace import WorkspacePaths

from ._models import ArtifactId, ArtifactKind


def discover_artifacts(
    workspace: WorkspacePaths,
    kinds: Iterable[ArtifactKind] | None = None,
) -> tuple[ArtifactId, ...]:
    """Discover artifacts by scanning each kind's directory.

    One subdirectory is one artifact. Hidden directories are skipped. The
    result is sorted by `(kind, name)` and holds each identity once.

    Args:
        workspace: The workspace to scan.
        kinds: Kinds to scan. Defaults to every kind.

    Returns:
        The discovered artifact identities.

    Raises:
        SpecmanIOError: If a kind directory exists but cannot be listed.
    """
    found: set[ArtifactId] = set()
    for kind in kinds if kinds is not None else ArtifactKind:
        directory = kind.directory(workspace)
        if not directory.is_dir():
            continue
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            msg = f"Failed to list {directory}: {e}"
            raise SpecmanIOError(msg, path=directory, operation="read", cause=e) from e

        found.update(
            ArtifactId(kind, entry.name)
            for entry in entries
            if entry.is_dir() and not entry.name.startswith(".")
        )

    return tuple(sorted(found, key=lambda artifact: artifact.sort_key))
