# pyright: reportUnusedImport=false
"""Workspace status command."""

from . import _commands as _commands
from ._app import app
from ._commands import format_status_table

__all__ = ["app", "format_status_table"]
