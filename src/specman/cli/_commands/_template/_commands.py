# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415
"""Template pointer commands."""

from typing import Annotated

from cyclopts import Parameter

from specman.artifacts import ArtifactKind
from specman.cli._commands._context import CLIContext, OutputFormat
from specman.cli._commands._errors import fail_command
from specman.cli._commands._shared import exit_with_success, get_error_console
from specman.exceptions import SpecmanError, UsageError
from specman.templates import (
    PointerStore,
    ResolvedTemplate,
    ScratchPadWorkType,
    TemplateCatalog,
    TemplateKind,
    TemplateScenario,
)

from ._app import app
from ._output import format_resolved

__all__ = ["remove", "set_", "show"]

KindOption = Annotated[
    str,
    Parameter(name=["--kind", "-k"], help="Template kind: spec, impl or scratch"),
]
FormatOption = Annotated[
    OutputFormat,
    Parameter(name=["--format", "-f"], help="Output format"),
]


def parse_template_kind(raw: str) -> TemplateKind:
    """Parse a template kind, accepting long forms such as `specification`.

    Raises:
        UsageError: If the kind is unknown.
    """
    try:
        return TemplateKind(ArtifactKind.parse(raw).value)
    except ValueError:
        msg = f"unsupported template kind: {raw} (expected spec, impl or scratch)"
        raise UsageError(msg) from None


def get_template_catalog() -> TemplateCatalog:
    """Build a TemplateCatalog for the workspace in the current CLIContext.

    Raises:
        WorkspaceNotFoundError: If no workspace can be found.
    """
    ctx = CLIContext.get_current()
    return TemplateCatalog(
        ctx.locate_workspace(), config=ctx.config.templates, logger=ctx.logger
    )


def get_pointer_store() -> PointerStore:
    return PointerStore(get_template_catalog(), logger=CLIContext.get_current().logger)


@app.command(name="set")
def set_(
    *,
    kind: KindOption,
    locator: Annotated[
        str,
        Parameter(
            name=["--locator", "-l"],
            help="Workspace-relative path or HTTP(S) URL for the pointer target",
        ),
    ],
    format_: FormatOption = OutputFormat.TABLE,
) -> None:
    """Set or update the pointer file for a template kind

    Args:
        kind: Template kind to redirect.
        locator: Workspace-relative path, absolute path inside the workspace,
            or HTTP(S) URL.
        format_: Output format.
    """
    console = get_error_console()
    try:
        template_kind = parse_template_kind(kind)
        resolved = get_pointer_store().set(template_kind, locator)
    except SpecmanError as e:
        fail_command(e, command="template set", console=console)

    print(format_resolved(resolved, format_, action="set"))  # noqa: T201
    exit_with_success()


@app.command(name="remove")
def remove(*, kind: KindOption, format_: FormatOption = OutputFormat.TABLE) -> None:
    """Remove the pointer file for a template kind

    Resolution falls back to overrides and embedded defaults.

    Args:
        kind: Template kind whose pointer is removed.
        format_: Output format.
    """
    console = get_error_console()
    try:
        template_kind = parse_template_kind(kind)
        resolved = get_pointer_store().remove(template_kind)
    except SpecmanError as e:
        fail_command(e, command="template remove", console=console)

    print(format_resolved(resolved, format_, action="remove"))  # noqa: T201
    exit_with_success()


@app.command(name="show")
def show(
    *,
    kind: KindOption,
    work_type: Annotated[
        ScratchPadWorkType | None,
        Parameter(name=["--work-type", "-w"], help="Scratch pad work type"),
    ] = None,
    format_: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show which template a kind resolves to and where it came from

    Args:
        kind: Template kind to resolve.
        work_type: Scratch pad work type (scratch kind only).
        format_: Output format.
    """
    console = get_error_console()
    try:
        template_kind = parse_template_kind(kind)
        if work_type is not None and template_kind is not TemplateKind.SCRATCH:
            msg = "--work-type applies only to --kind scratch"
            raise UsageError(msg)

        catalog = get_template_catalog()
        if work_type is None:
            resolved = catalog.resolve(TemplateScenario.for_kind(template_kind))
        else:
            profile = catalog.scratch_profile(work_type)
            resolved = ResolvedTemplate(profile.template, profile.provenance)
    except SpecmanError as e:
        fail_command(e, command="template show", console=console)

    print(format_resolved(resolved, format_))  # noqa: T201
    exit_with_success()
