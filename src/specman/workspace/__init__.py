"""Workspace layout, discovery and path confinement."""

from ._locator import WorkspaceLocator, find_workspace_root
from ._paths import DOT_SPECMAN, WorkspacePaths
from ._safety import resolve_within_workspace, workspace_relative

__all__ = [
    "DOT_SPECMAN",
    "WorkspaceLocator",
    "WorkspacePaths",
    "find_workspace_root",
    "resolve_within_workspace",
    "workspace_relative",
]
