# pyright: reportUnusedImport=false
"""Commands for managing template pointers."""

from . import _commands as _commands
from ._app import app
from ._commands import get_pointer_store, get_template_catalog, parse_template_kind
from ._output import format_resolved, resolved_to_dict

__all__ = [
    "app",
    "format_resolved",
    "get_pointer_store",
    "get_template_catalog",
    "parse_template_kind",
    "resolved_to_dict",
]
