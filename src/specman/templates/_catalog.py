"""Template resolution cascade.

For a scenario, the catalog tries in strict order:

1. a workspace override under `.specman/templates/`
2. the scenario's pointer file (`SPEC`, `IMPL` or `SCRATCH`) naming a local
   file or an HTTP(S) URL
3. the embedded default, materialized into the template cache

The first step that yields a template wins. An unreachable remote pointer with
nothing cached falls through to the embedded default; an explicit HTTP
rejection and every local misconfiguration are raised.
"""

from pathlib import Path
from typing import Final

import httpx
from structlog.typing import FilteringBoundLogger

from specman.config import TemplatesConfig
from specman.exceptions import SpecmanIOError, TemplateFetchError, TemplatePointerError
from specman.utils import create_null_logger, read_text
from specman.workspace import WorkspacePaths, resolve_within_workspace, workspace_relative

from ._cache import TemplateCache
from ._embedded import embedded_body
from ._models import (
    FileLocator,
    ResolvedTemplate,
    ScratchPadProfile,
    ScratchPadWorkType,
    TemplateDescriptor,
    TemplateProvenance,
    TemplateScenario,
    TemplateTier,
)
from ._tokens import create_token_environment, extract_required_tokens

_URL_PREFIXES: Final = ("http://", "https://")


def is_url_pointer(value: str) -> bool:
    """Return True if a pointer value names an HTTP(S) URL."""
    return value.startswith(_URL_PREFIXES)


def parse_pointer_url(value: str, *, pointer: str) -> str:
    """Validate an HTTP(S) pointer value.

    Returns:
        The URL string, unchanged.

    Raises:
        TemplatePointerError: If the URL cannot be parsed or has no host.
    """
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        msg = f"Invalid template pointer URL {value}: {e}"
        raise TemplatePointerError(msg, pointer=pointer) from e

    if url.scheme not in {"http", "https"} or not url.host:
        msg = f"Invalid template pointer URL {value}: expected http(s) with a host"
        raise TemplatePointerError(msg, pointer=pointer)
    return value


class TemplateCatalog:
    """Resolves template scenarios for one workspace.

    Nothing is cached in memory: every call re-reads overrides, pointers and
    the disk cache.

    Args:
        workspace: The workspace to resolve templates for.
        config: Fetch settings for remote pointers.
        cache: Template cache. Created under the workspace if None.
        client: HTTP client handed to the default cache.
        logger: Logger for resolution diagnostics.
    """

    __slots__: Final = ("_cache", "_logger", "_token_env", "_workspace")

    def __init__(
        self,
        workspace: WorkspacePaths,
        *,
        config: TemplatesConfig | None = None,
        cache: TemplateCache | None = None,
        client: httpx.Client | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._workspace = workspace
        self._logger = logger or create_null_logger()
        self._cache = cache or TemplateCache(
            workspace.template_cache_dir,
            config=config,
            client=client,
            logger=self._logger,
        )
        self._token_env = create_token_environment()

    @property
    def workspace(self) -> WorkspacePaths:
        return self._workspace

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def resolve(self, scenario: TemplateScenario) -> ResolvedTemplate:
        """Resolve the template for a scenario.

        Args:
            scenario: The artifact-creation scenario.

        Returns:
            The descriptor and provenance of the winning cascade step.

        Raises:
            PathEscapeError: If an override or pointer path leaves the workspace.
            TemplatePointerError: If a pointer is empty, names a missing file or
                holds a malformed URL.
            TemplateFetchRejectedError: If a remote pointer is rejected by the
                server (any non-2xx status).
            TemplateCacheError: If cached remote metadata is invalid.
            SpecmanIOError: If a template or the cache cannot be read or written.
        """
        resolved = self._try_override(scenario)
        if resolved is None:
            resolved = self._try_pointer(scenario)
        if resolved is None:
            resolved = self._embedded_default(scenario)

        self._logger.debug(
            "template_resolved",
            scenario=str(scenario),
            tier=resolved.provenance.tier.value,
            locator=resolved.provenance.locator,
        )
        return resolved

    def scratch_profile(self, work_type: ScratchPadWorkType) -> ScratchPadProfile:
        """Resolve the template for a scratch pad work type."""
        resolved = self.resolve(TemplateScenario.work_type(work_type.value))
        return ScratchPadProfile(
            work_type=work_type,
            template=resolved.descriptor,
            provenance=resolved.provenance,
        )

    def pointer_path(self, scenario: TemplateScenario) -> Path:
        return self._workspace.templates_dir / scenario.pointer_name

    def read_pointer(self, scenario: TemplateScenario) -> str | None:
        """Read the trimmed pointer value for a scenario.

        Returns:
            The pointer value, or None if no pointer file exists.

        Raises:
            TemplatePointerError: If the pointer file is empty.
            SpecmanIOError: If the pointer file cannot be read.
        """
        path = self.pointer_path(scenario)
        if not path.is_file():
            return None

        value = read_text(path).strip()
        if not value:
            msg = f"Template pointer {path} has no content"
            raise TemplatePointerError(msg, pointer=scenario.pointer_name, path=path)
        return value

    def resolve_pointer_path(self, raw: str, *, pointer: str) -> Path:
        """Resolve a file pointer value to an existing file inside the workspace.

        Raises:
            PathEscapeError: If the path leaves the workspace.
            TemplatePointerError: If the file is missing or lies in the cache.
        """
        resolved = resolve_within_workspace(
            raw, self._workspace.root, source=f"pointer {pointer}"
        )

        cache_root = self._workspace.template_cache_dir.resolve()
        if resolved.is_relative_to(cache_root):
            msg = f"Pointer {pointer} references the template cache: {resolved}"
            raise TemplatePointerError(msg, pointer=pointer)

        if not resolved.is_file():
            msg = f"Pointer {pointer} references missing file: {resolved}"
            raise TemplatePointerError(msg, pointer=pointer)
        return resolved

    # -------------------------------------------------------------------------
    # Cascade steps
    # -------------------------------------------------------------------------

    def _try_override(self, scenario: TemplateScenario) -> ResolvedTemplate | None:
        templates_dir = self._workspace.templates_dir
        for name in scenario.override_names():
            candidate = resolve_within_workspace(
                templates_dir / name,
                self._workspace.root,
                source=f"override {name}",
            )
            if candidate.is_file():
                return self._resolved_from_path(
                    scenario, candidate, tier=TemplateTier.WORKSPACE_OVERRIDE
                )
        return None

    def _try_pointer(self, scenario: TemplateScenario) -> ResolvedTemplate | None:
        value = self.read_pointer(scenario)
        if value is None:
            return None

        pointer = scenario.pointer_name
        if not is_url_pointer(value):
            path = self.resolve_pointer_path(value, pointer=pointer)
            return self._resolved_from_path(
                scenario, path, tier=TemplateTier.POINTER_FILE, pointer=pointer
            )

        url = parse_pointer_url(value, pointer=pointer)
        try:
            hit = self._cache.fetch(url)
        except TemplateFetchError as e:
            self._logger.warning(
                "template_pointer_unreachable",
                pointer=pointer,
                url=url,
                error=str(e),
            )
            return None

        return self._resolved_from_path(
            scenario,
            hit.path,
            tier=TemplateTier.POINTER_URL,
            pointer=pointer,
            locator=url,
            cache_path=workspace_relative(hit.path, self._workspace.root),
            last_modified=hit.last_modified,
        )

    def _embedded_default(self, scenario: TemplateScenario) -> ResolvedTemplate:
        key = scenario.embedded_key
        body = embedded_body(key)
        path = self._cache.write_embedded(key, body)
        locator = f"embedded://{key}"
        return ResolvedTemplate(
            descriptor=TemplateDescriptor(
                locator=FileLocator(path),
                scenario=scenario,
                required_tokens=extract_required_tokens(
                    body, source=locator, env=self._token_env, logger=self._logger
                ),
            ),
            provenance=TemplateProvenance(
                tier=TemplateTier.EMBEDDED_DEFAULT,
                locator=locator,
                cache_path=workspace_relative(path, self._workspace.root),
            ),
        )

    def _resolved_from_path(
        self,
        scenario: TemplateScenario,
        path: Path,
        *,
        tier: TemplateTier,
        pointer: str | None = None,
        locator: str | None = None,
        cache_path: str | None = None,
        last_modified: str | None = None,
    ) -> ResolvedTemplate:
        display = locator or workspace_relative(path, self._workspace.root)
        try:
            body = read_text(path)
        except SpecmanIOError:
            self._logger.exception("template_read_failed", path=str(path))
            raise

        return ResolvedTemplate(
            descriptor=TemplateDescriptor(
                locator=FileLocator(path),
                scenario=scenario,
                required_tokens=extract_required_tokens(
                    body, source=display, env=self._token_env, logger=self._logger
                ),
            ),
            provenance=TemplateProvenance(
                tier=tier,
                locator=display,
                pointer=pointer,
                cache_path=cache_path,
                last_modified=last_modified,
            ),
        )
