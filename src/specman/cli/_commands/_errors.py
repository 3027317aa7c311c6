"""Exception to exit code mapping for all commands.

Exit codes:
    0 - Success
    1 - Workspace unhealthy (an artifact failed its dependency check)
    2 - Usage error (conflicting or invalid options)
    3 - Configuration error (bad config, pointer or template)
    4 - Not found (workspace, artifact or pointer)
    5 - File system, network or remote template error
    6 - Internal error (unexpected exception)
"""

from typing import Never

from rich.console import Console

from specman.exceptions import (
    ArtifactNotFoundError,
    ConfigError,
    DependencyError,
    PathEscapeError,
    SpecmanIOError,
    TemplateCacheError,
    TemplateError,
    TemplateFetchError,
    TemplateFetchRejectedError,
    TemplatePointerNotFoundError,
    UsageError,
    WorkspaceNotFoundError,
)

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error


def exit_code_for_exception(exc: BaseException) -> ExitCode:
    """Map an exception to its exit code.

    Args:
        exc: The exception to map.

    Returns:
        Exit code corresponding to the exception type.
    """
    if isinstance(exc, UsageError):
        return ExitCode.USAGE_ERROR

    if isinstance(
        exc,
        (WorkspaceNotFoundError, ArtifactNotFoundError, TemplatePointerNotFoundError),
    ):
        return ExitCode.NOT_FOUND

    if isinstance(exc, DependencyError):
        return ExitCode.UNHEALTHY

    if isinstance(
        exc,
        (
            SpecmanIOError,
            TemplateFetchError,
            TemplateFetchRejectedError,
            TemplateCacheError,
        ),
    ):
        return ExitCode.IO_ERROR

    if isinstance(exc, (ConfigError, PathEscapeError, TemplateError)):
        return ExitCode.CONFIG_ERROR

    return ExitCode.INTERNAL_ERROR


def fail_command(
    exc: Exception,
    *,
    command: str,
    console: Console | None = None,
) -> Never:
    """Log a failed command and exit with the mapped exit code.

    Usage errors are reported on the console only, so rejected options never
    touch the log file.

    Raises:
        SystemExit: Always.
    """
    code = exit_code_for_exception(exc)
    logger = CLIContext.get_current().logger
    if logger is not None and code is not ExitCode.USAGE_ERROR:
        logger.warning(
            "command_failed",
            command=command,
            error=str(exc),
            error_type=type(exc).__name__,
            exit_code=int(code),
        )
    exit_with_error(str(exc), code, console=console)
