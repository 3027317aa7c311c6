"""Shared utilities for specman."""

from ._io import (
    read_json,
    read_markdown_frontmatter,
    read_text,
    write_json_atomic,
    write_text_atomic,
)
from ._logging import create_cli_logger, create_null_logger

__all__ = [
    "create_cli_logger",
    "create_null_logger",
    "read_json",
    "read_markdown_frontmatter",
    "read_text",
    "write_json_atomic",
    "write_text_atomic",
]
