"""Pointer file management.

Pointer files (`.specman/templates/SPEC`, `IMPL`, `SCRATCH`) redirect a template
kind to a workspace file or an HTTP(S) URL. Each holds a single value.
"""

from typing import Final

from structlog.typing import FilteringBoundLogger

from specman.exceptions import (
    SpecmanError,
    SpecmanIOError,
    TemplatePointerError,
    TemplatePointerNotFoundError,
)
from specman.utils import create_null_logger, read_text, write_text_atomic
from specman.workspace import WorkspacePaths, workspace_relative

from ._catalog import TemplateCatalog, is_url_pointer, parse_pointer_url
from ._models import ResolvedTemplate, TemplateKind, TemplateScenario


class PointerStore:
    """Reads and writes template pointer files.

    Mutations return the catalog's resolution for the kind afterwards, so the
    caller sees which template now applies.

    Args:
        catalog: Catalog used to validate pointers and resolve the result.
        logger: Logger for pointer changes.
    """

    __slots__: Final = ("_catalog", "_logger")

    def __init__(
        self,
        catalog: TemplateCatalog,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._catalog = catalog
        self._logger = logger or create_null_logger()

    @property
    def workspace(self) -> WorkspacePaths:
        return self._catalog.workspace

    def read(self, scenario: TemplateScenario) -> str | None:
        """Return the trimmed pointer value for a scenario, or None if absent.

        Raises:
            TemplatePointerError: If the pointer file is empty.
        """
        return self._catalog.read_pointer(scenario)

    def set(self, kind: TemplateKind, locator: str) -> ResolvedTemplate:
        """Point a template kind at a workspace file or HTTP(S) URL.

        In-workspace paths are stored workspace-relative. If the new pointer
        cannot be resolved, the previous pointer file is restored.

        Args:
            kind: Template kind to redirect.
            locator: Workspace-relative or absolute path, or an HTTP(S) URL.

        Returns:
            The resolution for the kind with the new pointer in place.

        Raises:
            TemplatePointerError: If the locator is empty, malformed or names a
                missing file.
            PathEscapeError: If the path leaves the workspace.
            TemplateFetchRejectedError: If the URL is rejected by its server.
            SpecmanIOError: If the pointer file cannot be written.
        """
        scenario = TemplateScenario.for_kind(kind)
        value = self._normalize(kind, locator)
        path = self._catalog.pointer_path(scenario)
        previous = read_text(path) if path.is_file() else None

        write_text_atomic(path, f"{value}\n")
        try:
            resolved = self._catalog.resolve(scenario)
        except SpecmanError:
            self._restore(kind, previous)
            raise

        self._logger.info(
            "template_pointer_set",
            pointer=kind.pointer_name,
            value=value,
            tier=resolved.provenance.tier.value,
        )
        return resolved

    def remove(self, kind: TemplateKind) -> ResolvedTemplate:
        """Delete the pointer file for a template kind.

        Returns:
            The resolution for the kind once the pointer is gone.

        Raises:
            TemplatePointerNotFoundError: If no pointer file exists.
            SpecmanIOError: If the pointer file cannot be deleted.
        """
        scenario = TemplateScenario.for_kind(kind)
        path = self._catalog.pointer_path(scenario)
        if not path.is_file():
            msg = f"No {kind.pointer_name} template pointer to remove"
            raise TemplatePointerNotFoundError(msg, pointer=kind.pointer_name)

        try:
            path.unlink()
        except OSError as e:
            msg = f"Failed to delete {path}: {e}"
            raise SpecmanIOError(msg, path=path, operation="delete", cause=e) from e

        self._logger.info("template_pointer_removed", pointer=kind.pointer_name)
        return self._catalog.resolve(scenario)

    def _normalize(self, kind: TemplateKind, locator: str) -> str:
        pointer = kind.pointer_name
        value = locator.strip()
        if not value:
            msg = f"Template pointer {pointer} requires a non-empty locator"
            raise TemplatePointerError(msg, pointer=pointer)

        if is_url_pointer(value):
            return parse_pointer_url(value, pointer=pointer)

        resolved = self._catalog.resolve_pointer_path(value, pointer=pointer)
        return workspace_relative(resolved, self.workspace.root)

    def _restore(self, kind: TemplateKind, previous: str | None) -> None:
        path = self._catalog.pointer_path(TemplateScenario.for_kind(kind))
        if previous is None:
            path.unlink(missing_ok=True)
        else:
            write_text_atomic(path, previous)
        self._logger.warning("template_pointer_restored", pointer=kind.pointer_name)
