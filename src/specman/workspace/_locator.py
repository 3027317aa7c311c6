"""Workspace root discovery."""

from pathlib import Path

from specman.exceptions import WorkspaceNotFoundError

from ._paths import DOT_SPECMAN, WorkspacePaths


def find_workspace_root(start: Path | None = None) -> Path | None:
    """Find the workspace root by searching upward for a `.specman/` directory.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        The directory containing `.specman/`, or None if the filesystem root
        is reached first.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if (current / DOT_SPECMAN).is_dir():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


class WorkspaceLocator:
    """Locates the workspace for a command invocation.

    An explicit path must itself contain `.specman/`; otherwise the search walks
    upward from the current directory.
    """

    __slots__ = ("_explicit",)

    def __init__(self, explicit: Path | None = None) -> None:
        self._explicit = explicit

    def workspace(self) -> WorkspacePaths:
        """Return the workspace paths.

        Raises:
            WorkspaceNotFoundError: If no workspace can be found.
        """
        if self._explicit is not None:
            root = self._explicit.resolve()
            if not (root / DOT_SPECMAN).is_dir():
                msg = f"{root} is not a specman workspace (missing {DOT_SPECMAN}/)"
                raise WorkspaceNotFoundError(msg, start=root)
            return WorkspacePaths(root=root)

        start = Path.cwd()
        found = find_workspace_root(start)
        if found is None:
            msg = f"No {DOT_SPECMAN}/ directory found in {start} or its parents"
            raise WorkspaceNotFoundError(msg, start=start)
        return WorkspacePaths(root=found)
