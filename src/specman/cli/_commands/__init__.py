"""specman CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._context import CLIContext, OutputFormat
from ._deps import app as deps_app
from ._errors import exit_code_for_exception, fail_command
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    exit_with_success,
    format_json,
    format_table,
    get_error_console,
)
from ._status import app as status_app
from ._template import app as template_app
from ._views import parse_view

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "deps_app",
    "exit_code_for_exception",
    "exit_with_error",
    "exit_with_success",
    "fail_command",
    "format_json",
    "format_table",
    "get_error_console",
    "parse_view",
    "status_app",
    "template_app",
]


def register_commands(app: App) -> None:
    app.command(deps_app)
    app.command(status_app)
    app.command(template_app)
