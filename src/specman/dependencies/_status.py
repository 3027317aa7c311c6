"""Workspace health checks built on dependency queries."""

from dataclasses import dataclass
from typing import Any, Final

from structlog.typing import FilteringBoundLogger

from specman.artifacts import ArtifactId, ArtifactKind, discover_artifacts
from specman.exceptions import ArtifactError
from specman.utils import create_null_logger
from specman.workspace import WorkspacePaths, workspace_relative

from ._mapper import FilesystemDependencyMapper
from ._models import DependencyView

# Kinds whose artifacts are checked by `status`
STATUS_KINDS: Final = (ArtifactKind.SPECIFICATION, ArtifactKind.IMPLEMENTATION)


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Outcome of checking one artifact.

    Attributes:
        name: Artifact name.
        kind: Artifact kind.
        path: Workspace-relative path to the primary document.
        ok: Whether the artifact's dependency graph resolved cleanly.
        message: The error message when the check failed.
    """

    name: str
    kind: ArtifactKind
    path: str
    ok: bool
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "name": self.name,
            "kind": self.kind.value,
            "path": self.path,
            "ok": self.ok,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class WorkspaceStatus:
    """Per-artifact reports and overall workspace health."""

    view: DependencyView
    reports: tuple[StatusReport, ...] = ()

    @property
    def healthy(self) -> bool:
        return all(report.ok for report in self.reports)

    @property
    def failures(self) -> tuple[StatusReport, ...]:
        return tuple(report for report in self.reports if not report.ok)

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "healthy": self.healthy,
            "view": self.view.value,
            "reports": [report.to_dict() for report in self.reports],
        }


class StatusAggregator:
    """Checks every specification and implementation in a workspace.

    A failing artifact is reported and never stops the remaining checks.

    Args:
        workspace: The workspace to check.
        mapper: Dependency mapper. Created for the workspace if None.
        logger: Logger for check results.
    """

    __slots__: Final = ("_logger", "_mapper", "_workspace")

    def __init__(
        self,
        workspace: WorkspacePaths,
        *,
        mapper: FilesystemDependencyMapper | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._workspace = workspace
        self._logger = logger or create_null_logger()
        self._mapper = mapper or FilesystemDependencyMapper(workspace, logger=self._logger)

    def run(self, view: DependencyView = DependencyView.DOWNSTREAM) -> WorkspaceStatus:
        """Check all artifacts with the given dependency view.

        Returns:
            Reports sorted by `(name, kind)` and the overall health.

        Raises:
            SpecmanIOError: If an artifact directory cannot be listed.
        """
        reports = [
            self._check(artifact, view)
            for artifact in discover_artifacts(self._workspace, kinds=STATUS_KINDS)
        ]
        reports.sort(key=lambda report: (report.name, report.kind.value))

        status = WorkspaceStatus(view=view, reports=tuple(reports))
        self._logger.info(
            "workspace_status_checked",
            view=view.value,
            artifacts=len(reports),
            failures=len(status.failures),
        )
        return status

    def _check(self, artifact: ArtifactId, view: DependencyView) -> StatusReport:
        path = workspace_relative(
            artifact.document_path(self._workspace), self._workspace.root
        )
        try:
            _ = self._mapper.dependency_tree(artifact, view)
        except ArtifactError as e:
            self._logger.warning(
                "artifact_check_failed", artifact=str(artifact), error=str(e)
            )
            return StatusReport(
                name=artifact.name,
                kind=artifact.kind,
                path=path,
                ok=False,
                message=str(e),
            )
        return StatusReport(name=artifact.name, kind=artifact.kind, path=path, ok=True)
