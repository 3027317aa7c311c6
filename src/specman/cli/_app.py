"""The command-line interface for specman."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, CycloptsError, Parameter
from rich.console import Console

from specman.config import safe_load_config
from specman.utils import create_cli_logger
from specman.workspace import DOT_SPECMAN, WorkspacePaths, find_workspace_root

from ._commands import ExitCode, register_commands
from ._commands._context import CLIContext

APP_HELP = "Manage specifications, implementations and scratch pads in a workspace."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="specman",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        workspace: Annotated[
            Path | None,
            Parameter(name="--workspace", help="Workspace root containing .specman/"),
        ] = None,
    ) -> None:
        """Launch specman with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Log at debug level.
            quiet: Suppress non-essential output.
            config: Explicit path to config file.
            workspace: Workspace root directory.
        """
        cli_overrides: dict[str, object] | None = None
        if verbose:
            cli_overrides = {"logging": {"level": "debug"}}

        loaded_config, _ = safe_load_config(
            config_path=config,
            workspace_root=workspace,
            cli_overrides=cli_overrides,
        )

        # Logs land in the workspace when one can be found
        if workspace is not None:
            root = workspace.resolve() if (workspace / DOT_SPECMAN).is_dir() else None
        else:
            root = find_workspace_root()
        log_dir = WorkspacePaths(root=root).log_dir if root is not None else None
        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            log_dir=log_dir,
        )

        ctx = CLIContext(
            config=loaded_config,
            quiet=quiet,
            workspace=workspace,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `specman` CLI."""
    app = create_app(exit_on_error=False)
    try:
        app.meta()
    except CycloptsError:
        raise SystemExit(ExitCode.USAGE_ERROR) from None
