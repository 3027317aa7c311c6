"""Data models for dependency queries and status reports."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Self

from specman.artifacts import ArtifactId, ArtifactKind


class DependencyScope(StrEnum):
    """Artifact kind an edge leads to."""

    SPECIFICATION = "specification"
    IMPLEMENTATION = "implementation"
    SCRATCH_PAD = "scratch_pad"

    @classmethod
    def from_kind(cls, kind: ArtifactKind) -> Self:
        match kind:
            case ArtifactKind.SPECIFICATION:
                return cls.SPECIFICATION
            case ArtifactKind.IMPLEMENTATION:
                return cls.IMPLEMENTATION
            case ArtifactKind.SCRATCH_PAD:
                return cls.SCRATCH_PAD

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class DependencyView(StrEnum):
    """Direction of a dependency query.

    DOWNSTREAM lists everything that depends on the artifact, UPSTREAM
    everything it depends on, and ALL both.
    """

    DOWNSTREAM = "downstream"
    UPSTREAM = "upstream"
    ALL = "all"

    @property
    def label(self) -> str:
        return "complete" if self is DependencyView.ALL else self.value


@dataclass(frozen=True, slots=True)
class DependencyEntry:
    """One artifact reached by a dependency traversal.

    Attributes:
        artifact: The reached artifact.
        parent: The artifact it was reached from.
        depth: Distance from the query root (direct neighbors are 1).
        scope: Kind of the reached artifact.
    """

    artifact: ArtifactId
    parent: ArtifactId
    depth: int
    scope: DependencyScope

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "artifact": str(self.artifact),
            "parent": str(self.parent),
            "depth": self.depth,
            "scope": self.scope.value,
        }


@dataclass(frozen=True, slots=True)
class DependencyMapping:
    """Result of a dependency query.

    Entries are in depth-first pre-order with children visited by
    `(kind, name)`, so repeated queries over unchanged input are identical.

    Attributes:
        root: The queried artifact.
        view: The requested view.
        upstream: Transitive dependencies (UPSTREAM and ALL views).
        downstream: Transitive dependents (DOWNSTREAM and ALL views).
    """

    root: ArtifactId
    view: DependencyView
    upstream: tuple[DependencyEntry, ...] = ()
    downstream: tuple[DependencyEntry, ...] = ()

    @property
    def artifacts(self) -> tuple[ArtifactId, ...]:
        """Return each artifact in the mapping once, the root first for ALL."""
        ordered: list[ArtifactId] = [self.root] if self.view is DependencyView.ALL else []
        for entry in (*self.upstream, *self.downstream):
            if entry.artifact not in ordered:
                ordered.append(entry.artifact)
        return tuple(ordered)

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "root": str(self.root),
            "view": self.view.value,
            "upstream": [entry.to_dict() for entry in self.upstream],
            "downstream": [entry.to_dict() for entry in self.downstream],
        }
