# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Dependency tree command."""

from typing import Annotated

from cyclopts import Parameter

from specman.artifacts import ArtifactId
from specman.cli._commands._context import CLIContext, OutputFormat
from specman.cli._commands._errors import fail_command
from specman.cli._commands._shared import (
    exit_with_success,
    format_json,
    format_table,
    get_error_console,
)
from specman.cli._commands._views import AllFlag, DownstreamFlag, UpstreamFlag, parse_view
from specman.dependencies import DependencyMapping, FilesystemDependencyMapper
from specman.exceptions import SpecmanError, UsageError

from ._app import app


def format_mapping_table(mapping: DependencyMapping) -> str:
    rows = [
        [direction, str(entry.depth), str(entry.artifact), str(entry.parent), entry.scope.label]
        for direction, entries in (
            ("upstream", mapping.upstream),
            ("downstream", mapping.downstream),
        )
        for entry in entries
    ]
    return format_table(["Direction", "Depth", "Artifact", "Parent", "Scope"], rows)


def parse_artifact(raw: str) -> ArtifactId:
    """Parse a `<kind>/<name>` argument.

    Raises:
        UsageError: If the identity is malformed.
    """
    try:
        return ArtifactId.parse(raw)
    except ValueError as e:
        raise UsageError(str(e)) from None


@app.default
def deps(
    artifact: str,
    /,
    *,
    downstream: DownstreamFlag = False,
    upstream: UpstreamFlag = False,
    all_: AllFlag = False,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Show what an artifact depends on or what depends on it

    Args:
        artifact: Artifact identity such as `spec/alpha` or `impl/beta`.
        downstream: Show artifacts that depend on it (default).
        upstream: Show artifacts it depends on.
        all_: Show both directions.
        format_: Output format.
    """
    console = get_error_console()
    ctx = CLIContext.get_current()
    try:
        view = parse_view(downstream=downstream, upstream=upstream, all_=all_)
        artifact_id = parse_artifact(artifact)
        mapper = FilesystemDependencyMapper(ctx.locate_workspace(), logger=ctx.logger)
        mapping = mapper.dependency_tree(artifact_id, view)
    except SpecmanError as e:
        fail_command(e, command="deps", console=console)

    if format_ == OutputFormat.JSON:
        print(format_json(mapping.to_dict()))  # noqa: T201
        exit_with_success()

    if mapping.upstream or mapping.downstream:
        print(format_mapping_table(mapping))  # noqa: T201
    exit_with_success(
        None
        if ctx.quiet
        else f"{len(mapping.artifacts)} artifacts in the {mapping.view.label} view of {mapping.root}",
        console=console,
    )
