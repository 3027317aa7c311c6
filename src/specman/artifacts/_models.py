"""Artifact identity model."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final, Self

from specman.workspace import WorkspacePaths

_KIND_ALIASES: Final[dict[str, str]] = {
    "spec": "spec",
    "specification": "spec",
    "impl": "impl",
    "implementation": "impl",
    "scratch": "scratch",
    "scratchpad": "scratch",
    "scratch-pad": "scratch",
}


class ArtifactKind(StrEnum):
    """Kinds of documentation artifact held in a workspace."""

    SPECIFICATION = "spec"
    IMPLEMENTATION = "impl"
    SCRATCH_PAD = "scratch"

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Parse a kind name, accepting long forms such as `specification`.

        Raises:
            ValueError: If the name is not a known kind.
        """
        value = _KIND_ALIASES.get(raw.strip().lower())
        if value is None:
            msg = f"Unknown artifact kind: {raw!r}"
            raise ValueError(msg)
        return cls(value)

    @property
    def document_name(self) -> str:
        """Return the primary document file name (`spec.md`, `impl.md`, `scratch.md`)."""
        return f"{self.value}.md"

    def directory(self, workspace: WorkspacePaths) -> Path:
        """Return the workspace directory holding artifacts of this kind."""
        match self:
            case ArtifactKind.SPECIFICATION:
                return workspace.spec_dir
            case ArtifactKind.IMPLEMENTATION:
                return workspace.impl_dir
            case ArtifactKind.SCRATCH_PAD:
                return workspace.scratchpad_dir


@dataclass(frozen=True, slots=True)
class ArtifactId:
    """Identity of one artifact: its kind and directory name.

    Attributes:
        kind: The artifact kind.
        name: The artifact's directory name.
    """

    kind: ArtifactKind
    name: str

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Parse a `<kind>/<name>` identity such as `impl/beta`.

        Raises:
            ValueError: If the identity is malformed or the kind is unknown.
        """
        kind_part, sep, name = raw.strip().partition("/")
        if not sep or not name or "/" in name:
            msg = f"Expected <kind>/<name>, got {raw!r}"
            raise ValueError(msg)
        return cls(ArtifactKind.parse(kind_part), name)

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.kind.value, self.name)

    def directory(self, workspace: WorkspacePaths) -> Path:
        return self.kind.directory(workspace) / self.name

    def document_path(self, workspace: WorkspacePaths) -> Path:
        """Return the artifact's primary document path."""
        return self.directory(workspace) / self.kind.document_name

    def exists(self, workspace: WorkspacePaths) -> bool:
        return self.directory(workspace).is_dir()

    def __str__(self) -> str:
        return f"{self.kind.value}/{self.name}"
