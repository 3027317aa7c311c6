# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Workspace status command."""

from typing import Annotated

from cyclopts import Parameter

from specman.cli._commands._context import CLIContext, OutputFormat
from specman.cli._commands._errors import fail_command
from specman.cli._commands._shared import (
    ExitCode,
    exit_with_success,
    format_json,
    format_table,
    get_error_console,
)
from specman.cli._commands._views import AllFlag, DownstreamFlag, UpstreamFlag, parse_view
from specman.dependencies import StatusAggregator, WorkspaceStatus
from specman.exceptions import SpecmanError

from ._app import app


def format_status_table(status: WorkspaceStatus) -> str:
    rows = [
        [
            report.name,
            report.kind.value,
            report.path,
            "ok" if report.ok else "FAIL",
            report.message or "",
        ]
        for report in status.reports
    ]
    return format_table(["Name", "Kind", "Path", "Status", "Message"], rows)


@app.default
def status(
    *,
    downstream: DownstreamFlag = False,
    upstream: UpstreamFlag = False,
    all_: AllFlag = False,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Check every specification and implementation for broken dependencies

    Exits with status 1 when any artifact fails its check.

    Args:
        downstream: Check dependents of each artifact (default).
        upstream: Check dependencies of each artifact.
        all_: Check both directions.
        format_: Output format.
    """
    console = get_error_console()
    ctx = CLIContext.get_current()
    try:
        view = parse_view(downstream=downstream, upstream=upstream, all_=all_)
        workspace = ctx.locate_workspace()
        result = StatusAggregator(workspace, logger=ctx.logger).run(view)
    except SpecmanError as e:
        fail_command(e, command="status", console=console)

    if format_ == OutputFormat.JSON:
        print(format_json(result.to_dict()))  # noqa: T201
    elif result.reports:
        print(format_status_table(result))  # noqa: T201

    if result.healthy:
        exit_with_success(
            None if ctx.quiet else f"Workspace healthy ({len(result.reports)} artifacts)",
            console=console,
        )

    if not ctx.quiet:
        failed = len(result.failures)
        console.print(
            f"[red]Workspace unhealthy:[/red] {failed} of "
            f"{len(result.reports)} artifacts failed"
        )
    raise SystemExit(ExitCode.UNHEALTHY)
