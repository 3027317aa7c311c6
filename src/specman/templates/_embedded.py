"""Built-in template bodies bundled with the package."""

from importlib.resources import files
from typing import Final

EMBEDDED_KEYS: Final = ("spec", "impl", "scratch")


def embedded_body(key: str) -> str:
    """Return the built-in body for `spec`, `impl` or `scratch`.

    Raises:
        KeyError: If the key has no bundled template.
    """
    if key not in EMBEDDED_KEYS:
        raise KeyError(key)
    return (files("specman.templates") / "defaults" / f"{key}.md").read_text(
        encoding="utf-8"
    )
