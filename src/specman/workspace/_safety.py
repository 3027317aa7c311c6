"""Path confinement checks for pointer and override targets."""

from pathlib import Path

from specman.exceptions import PathEscapeError


def resolve_within_workspace(raw: str | Path, root: Path, *, source: str) -> Path:
    """Resolve a pointer or override path and confine it to the workspace.

    Relative paths are joined onto the workspace root. The result is
    canonicalized (symlinks and `..` segments resolved) before the prefix check,
    so `../../etc/passwd` style values and symlinks leading out of the workspace
    are both rejected. Nothing is read from the resolved path.

    Args:
        raw: The path as written in the pointer file or override location.
        root: The workspace root.
        source: Name of the pointer or override, used in error messages.

    Returns:
        The canonical absolute path.

    Raises:
        PathEscapeError: If the path resolves outside the workspace root.
    """
    canonical_root = root.resolve()
    candidate = Path(raw)
    if not candidate.is_absolute():
        candidate = canonical_root / candidate

    resolved = candidate.resolve()
    if not resolved.is_relative_to(canonical_root):
        msg = f"{source} resolved outside the workspace: {resolved}"
        raise PathEscapeError(msg, source=source, path=resolved, root=canonical_root)
    return resolved


def workspace_relative(path: Path, root: Path) -> str:
    """Render a path relative to the workspace root when it lies inside it.

    Args:
        path: The path to render.
        root: The workspace root.

    Returns:
        A POSIX-style relative path, or the literal path if outside the root.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        pass
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return str(path)
