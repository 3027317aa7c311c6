"""Artifact identities and discovery."""

from ._discovery import discover_artifacts
from ._models import ArtifactId, ArtifactKind

__all__ = ["ArtifactId", "ArtifactKind", "discover_artifacts"]
