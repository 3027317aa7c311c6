"""Workspace directory layout."""

from dataclasses import dataclass
from pathlib import Path

DOT_SPECMAN = ".specman"


@dataclass(frozen=True, slots=True)
class WorkspacePaths:
    """Well-known directories of a specman workspace.

    Attributes:
        root: Canonical workspace root (the directory containing `.specman/`).
    """

    root: Path

    @property
    def dot_specman(self) -> Path:
        """Return the `.specman/` directory."""
        return self.root / DOT_SPECMAN

    @property
    def spec_dir(self) -> Path:
        """Return the directory holding specification artifacts."""
        return self.root / "spec"

    @property
    def impl_dir(self) -> Path:
        """Return the directory holding implementation artifacts."""
        return self.root / "impl"

    @property
    def scratchpad_dir(self) -> Path:
        """Return the directory holding scratch pad artifacts."""
        return self.dot_specman / "scratchpad"

    @property
    def templates_dir(self) -> Path:
        """Return the directory holding template overrides and pointer files."""
        return self.dot_specman / "templates"

    @property
    def template_cache_dir(self) -> Path:
        """Return the template cache directory."""
        return self.dot_specman / "cache" / "templates"

    @property
    def log_dir(self) -> Path:
        """Return the log directory."""
        return self.dot_specman / "logs"

    @property
    def config_file(self) -> Path:
        """Return the shared workspace configuration file."""
        return self.dot_specman / "specman.toml"

    @property
    def local_config_file(self) -> Path:
        """Return the untracked, machine-local workspace configuration file."""
        return self.dot_specman / "specman.local.toml"
