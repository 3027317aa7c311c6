# pyright: reportUnusedImport=false
"""Dependency tree command."""

from . import _commands as _commands
from ._app import app
from ._commands import format_mapping_table, parse_artifact

__all__ = ["app", "format_mapping_table", "parse_artifact"]
