"""specman exceptions."""

from pathlib import Path
from typing import Any


class SpecmanError(Exception):
    """Base exception for specman errors."""


class SpecmanIOError(SpecmanError):
    """Raised when a workspace or cache file cannot be read or written.

    Attributes:
        path: Path to the file that caused the error.
        operation: The operation that failed ("read", "write", "delete").
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error.
            operation: The operation that failed.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path = path
        self.operation: str = operation
        self.cause: Exception | None = cause


class UsageError(SpecmanError):
    """Raised when command-line options conflict or are missing."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(SpecmanError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Workspace Exceptions
# =============================================================================


class WorkspaceError(SpecmanError):
    """Base exception for workspace errors."""


class WorkspaceNotFoundError(WorkspaceError):
    """Raised when no `.specman/` workspace can be located.

    Attributes:
        start: The directory the search started from.
    """

    def __init__(self, message: str, *, start: Path | None = None) -> None:
        """Initialize with error message and search context."""
        super().__init__(message)
        self.start: Path | None = start


class PathEscapeError(WorkspaceError):
    """Raised when a pointer or override path resolves outside the workspace.

    Attributes:
        source: The pointer or override that referenced the path.
        path: The resolved path that escaped the workspace.
        root: The workspace root directory.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str,
        path: Path,
        root: Path,
    ) -> None:
        """Initialize with error message and path violation context.

        Args:
            message: Human-readable error message.
            source: The pointer or override that referenced the path.
            path: The resolved path that escaped the workspace.
            root: The workspace root directory.
        """
        super().__init__(message)
        self.source: str = source
        self.path: Path = path
        self.root: Path = root


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(SpecmanError):
    """Base exception for template resolution errors."""


class TemplatePointerError(TemplateError):
    """Raised when a template pointer file is misconfigured.

    Covers empty pointers, pointers to missing files and malformed URLs.

    Attributes:
        pointer: The pointer file name (SPEC, IMPL or SCRATCH).
        path: Path to the pointer file, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        pointer: str,
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and pointer context."""
        super().__init__(message)
        self.pointer: str = pointer
        self.path: Path | None = path


class TemplatePointerNotFoundError(TemplateError, KeyError):
    """Raised when removing a pointer that does not exist."""

    def __init__(self, message: str, *, pointer: str) -> None:
        """Initialize with error message and pointer context."""
        super().__init__(message)
        self.pointer: str = pointer

    def __str__(self) -> str:
        return str(self.args[0])


class TemplateFetchError(TemplateError):
    """Raised when a remote template cannot be reached and nothing is cached.

    Attributes:
        url: The URL that failed.
        cause: The underlying transport exception.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and fetch context."""
        super().__init__(message)
        self.url: str = url
        self.cause: Exception | None = cause


class TemplateFetchRejectedError(TemplateError):
    """Raised when the remote server answers a template fetch with status >= 400.

    Attributes:
        url: The URL that was rejected.
        status_code: The HTTP status returned by the server.
    """

    def __init__(self, message: str, *, url: str, status_code: int) -> None:
        """Initialize with error message and response context."""
        super().__init__(message)
        self.url: str = url
        self.status_code: int = status_code


class TemplateCacheError(TemplateError):
    """Raised when cached template metadata cannot be read.

    Attributes:
        path: Path to the offending cache file.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and cache context."""
        super().__init__(message)
        self.path: Path = path


# =============================================================================
# Artifact and Dependency Exceptions
# =============================================================================


class ArtifactError(SpecmanError):
    """Base exception for artifact errors."""


class ArtifactNotFoundError(ArtifactError, KeyError):
    """Raised when an artifact does not exist in the workspace.

    Attributes:
        artifact: The `<kind>/<name>` identity that was not found.
    """

    def __init__(self, message: str, *, artifact: str | None = None) -> None:
        """Initialize with error message and artifact context."""
        super().__init__(message)
        self.artifact: str | None = artifact

    def __str__(self) -> str:
        return str(self.args[0])


class DependencyError(ArtifactError):
    """Base exception for dependency graph errors.

    Attributes:
        artifact: The `<kind>/<name>` identity whose declaration is at fault.
    """

    def __init__(self, message: str, *, artifact: str) -> None:
        """Initialize with error message and artifact context."""
        super().__init__(message)
        self.artifact: str = artifact


class DanglingDependencyError(DependencyError):
    """Raised when a declared dependency references a missing artifact.

    Attributes:
        reference: The declared reference that could not be resolved.
    """

    def __init__(self, message: str, *, artifact: str, reference: str) -> None:
        """Initialize with error message and the unresolved reference."""
        super().__init__(message, artifact=artifact)
        self.reference: str = reference


class CircularDependencyError(DependencyError):
    """Raised when a circular dependency is detected.

    Attributes:
        cycle: Ordered identities forming the cycle, closed by its first member.
    """

    def __init__(self, message: str, *, artifact: str, cycle: list[str]) -> None:
        """Initialize with error message and cycle context."""
        super().__init__(message, artifact=artifact)
        self.cycle: list[str] = cycle


class DependencyParseError(DependencyError):
    """Raised when an artifact's dependency declaration cannot be parsed.

    Attributes:
        path: Path to the document holding the declaration.
    """

    def __init__(self, message: str, *, artifact: str, path: Path) -> None:
        """Initialize with error message and document context."""
        super().__init__(message, artifact=artifact)
        self.path: Path = path
