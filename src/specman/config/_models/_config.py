# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing specman configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from specman.config._defaults import DEFAULT_CONFIG
from specman.config._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from specman.config._models._common import ConfigSource, ConfigSourceName
from specman.config._models._logging import LoggingConfig
from specman.config._models._templates import TemplatesConfig
from specman.exceptions import ConfigValidationError


def _validated(data: dict[str, Any], *, source: str | None = None) -> "Config":
    """Build a Config from merged data, translating pydantic errors.

    Raises:
        ConfigValidationError: For the first invalid key.
    """
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid configuration value for '{key}': {first['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=first.get("input"),
            expected=first["type"],
            source=source,
        ) from e


class Config(BaseModel):
    """Configuration container with typed access.

    Instances are immutable. Use the factory methods rather than the
    constructor so defaults are merged in and source tracking is populated.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        config = _validated(merged)
        config._data = merged
        return config  # pyright: ignore[reportReturnType]

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single TOML file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.WORKSPACE, path=path, exists=True, values=data
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        config = _validated(merged, source=str(path))
        config._data = merged
        config._sources = (source,)
        return config  # pyright: ignore[reportReturnType]

    @classmethod
    def load(
        cls,
        *,
        workspace_root: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources merge in precedence order
        (defaults -> user -> workspace -> local -> env -> cli).

        Args:
            workspace_root: Workspace root. If None, auto-detect.
            include_env: Include SPECMAN_* environment variables.
            include_cli: Include CLI overrides.
            cli_overrides: CLI argument overrides, used if include_cli is True.

        Raises:
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        from specman.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            workspace_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        # Sources are discovered highest-to-lowest, merge lowest first
        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigSourceName.DEFAULT:
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.name == ConfigSourceName.CLI:
                values = cli_overrides or {}
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        config = _validated(merged)
        config._data = merged
        config._sources = tuple(reversed(loaded_sources))
        return config  # pyright: ignore[reportReturnType]

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("logging.level")
            'info'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged configuration data."""
        return copy_value(self._data)
