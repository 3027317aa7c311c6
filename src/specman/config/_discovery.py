"""Configuration source discovery.

Locates the user, workspace and local configuration files and assembles them,
together with environment and CLI overrides, into an ordered source list.
"""

from pathlib import Path
from typing import Any

import platformdirs

from specman.workspace import DOT_SPECMAN, find_workspace_root

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/specman/config.toml``
    - macOS: ``~/Library/Application Support/specman/config.toml``
    - Windows: ``%APPDATA%\specman\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path("specman") / "config.toml"


def _file_exists(path: Path) -> bool:
    """Check if a file exists, treating permission errors as absence."""
    try:
        return path.is_file()
    except OSError:
        return False


def _file_source(name: ConfigSourceName, path: Path) -> ConfigSource:
    return ConfigSource(name=name, path=path, exists=_file_exists(path), values={})


def discover_sources(
    workspace_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Sources are returned in precedence order (highest first). File-based
    sources are included with `exists=False` when missing. Workspace sources are
    omitted when no workspace can be found.

    Args:
        workspace_root: Workspace root directory. If None, auto-detect by
            searching upward for `.specman/`.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: Dictionary of CLI argument overrides.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
    """
    sources: list[ConfigSource] = []

    resolved_root = workspace_root if workspace_root else find_workspace_root()

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        # Actual values are parsed during the loading phase
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    if resolved_root:
        dot_specman = resolved_root / DOT_SPECMAN
        sources.append(
            _file_source(ConfigSourceName.LOCAL, dot_specman / "specman.local.toml")
        )
        sources.append(
            _file_source(ConfigSourceName.WORKSPACE, dot_specman / "specman.toml")
        )

    sources.append(_file_source(ConfigSourceName.USER, get_user_config_path()))

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
