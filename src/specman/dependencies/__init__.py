"""Artifact dependency graph and workspace status checks."""

from ._declarations import DependencyDeclaration, parse_declarations
from ._mapper import FilesystemDependencyMapper
from ._models import DependencyEntry, DependencyMapping, DependencyScope, DependencyView
from ._status import STATUS_KINDS, StatusAggregator, StatusReport, WorkspaceStatus

__all__ = [
    "STATUS_KINDS",
    "DependencyDeclaration",
    "DependencyEntry",
    "DependencyMapping",
    "DependencyScope",
    "DependencyView",
    "FilesystemDependencyMapper",
    "StatusAggregator",
    "StatusReport",
    "WorkspaceStatus",
    "parse_declarations",
]
