# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""File I/O utilities for workspace documents and the template cache.

All write operations use atomic patterns so a reader never observes a partially
written file.
"""

import tempfile
from pathlib import Path
from typing import Any

import orjson
import yaml

from specman.exceptions import SpecmanIOError

__all__ = [
    "read_json",
    "read_markdown_frontmatter",
    "read_text",
    "write_json_atomic",
    "write_text_atomic",
]


def _atomic_write(path: Path, content: bytes | str) -> None:
    """Write content to a file atomically.

    Writes to a temporary file in the same directory, then renames to the
    target path. This ensures the file is either fully written or not at all.

    Args:
        path: Destination file path.
        content: Content to write (bytes or string).

    Raises:
        SpecmanIOError: If the write operation fails.
    """
    is_bytes = isinstance(content, bytes)
    mode = "wb" if is_bytes else "w"
    encoding = None if is_bytes else "utf-8"

    temp_path: Path | None = None
    try:
        _ = path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode=mode,
            dir=path.parent,
            delete=False,
            suffix=".tmp",
            encoding=encoding,
        ) as f:
            _ = f.write(content)
            temp_path = Path(f.name)

        # Path.replace() is atomic on both POSIX and Windows
        _ = temp_path.replace(path)

    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        msg = f"Failed to write {path}: {e}"
        raise SpecmanIOError(msg, path=path, operation="write", cause=e) from e


def write_text_atomic(path: Path, content: str) -> None:
    """Write text to a file atomically.

    Args:
        path: Destination file path.
        content: Text to write.

    Raises:
        SpecmanIOError: If the write operation fails.
    """
    _atomic_write(path, content)


def read_text(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        SpecmanIOError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read {path}: {e}"
        raise SpecmanIOError(msg, path=path, operation="read", cause=e) from e


def read_json(
    path: Path,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a JSON object file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed JSON data as a dictionary.

    Raises:
        SpecmanIOError: If the file cannot be read.
        ValueError: If the content is not valid JSON or not an object.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        msg = f"Failed to read {path}: {e}"
        raise SpecmanIOError(msg, path=path, operation="read", cause=e) from e

    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ValueError(msg) from e

    if not isinstance(data, dict):
        msg = f"Expected JSON object in {path}, got {type(data).__name__}"
        raise ValueError(msg)

    return data


def write_json_atomic(
    path: Path,
    data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> None:
    """Write a dictionary as indented JSON atomically.

    Args:
        path: Destination file path.
        data: Dictionary to serialize as JSON.

    Raises:
        SpecmanIOError: If serialization or the write operation fails.
    """
    try:
        content = orjson.dumps(data, option=orjson.OPT_INDENT_2)
    except TypeError as e:
        msg = f"Failed to serialize JSON for {path}: {e}"
        raise SpecmanIOError(msg, path=path, operation="write", cause=e) from e

    _atomic_write(path, content)


def read_markdown_frontmatter(
    path: Path,
) -> tuple[dict[str, Any], str]:  # pyright: ignore[reportExplicitAny]
    """Read a Markdown file and extract YAML frontmatter.

    Returns an empty dictionary for frontmatter if no frontmatter block
    is found (this is not an error).

    Args:
        path: Path to the Markdown file.

    Returns:
        A tuple of (frontmatter dict, body content).

    Raises:
        SpecmanIOError: If the file cannot be read.
        ValueError: If the frontmatter is malformed YAML or not a mapping.
    """
    content = read_text(path)

    # Check for frontmatter delimiter at start (requires newline after ---)
    if not content.startswith("---\n"):
        return {}, content

    end_marker = content.find("\n---", 3)
    if end_marker == -1:
        return {}, content

    frontmatter_str = content[4:end_marker].strip()
    body = content[end_marker + 4 :].lstrip("\n")

    try:
        frontmatter_data = yaml.safe_load(frontmatter_str)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in frontmatter: {e}"
        raise ValueError(msg) from e

    if frontmatter_data is None:
        return {}, body

    if not isinstance(frontmatter_data, dict):
        actual_type = type(frontmatter_data).__name__
        msg = f"Expected YAML mapping in frontmatter, got {actual_type}"
        raise ValueError(msg)

    return frontmatter_data, body
