"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "templates": {
        "fetch_timeout": 10.0,
        "fetch_attempts": 1,
        "follow_redirects": True,
        "user_agent": "specman",
    },
}
