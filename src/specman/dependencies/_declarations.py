# pyright: reportAny=false, reportExplicitAny=false
"""Dependency declarations in artifact front matter.

An artifact's primary document declares what it depends on in its YAML front
matter:

    ---
    dependencies:
      - spec/core
      - ref: ../../impl/runtime/impl.md
    ---

Implementation documents may also name their specification (`spec:`) and
scratch pads their target artifact (`target:`). A reference is either a
`<kind>/<name>` identity or a path to another artifact's primary document,
relative to the declaring document.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from specman.artifacts import ArtifactId, ArtifactKind
from specman.exceptions import DependencyParseError, PathEscapeError, SpecmanIOError
from specman.utils import read_markdown_frontmatter
from specman.workspace import WorkspacePaths, resolve_within_workspace

DEPENDENCIES_KEY: Final = "dependencies"

# Single-reference keys honored per artifact kind
_KIND_REFERENCE_KEYS: Final[dict[ArtifactKind, str]] = {
    ArtifactKind.IMPLEMENTATION: "spec",
    ArtifactKind.SCRATCH_PAD: "target",
}


@dataclass(frozen=True, slots=True)
class DependencyDeclaration:
    """A reference declared by an artifact.

    Attributes:
        reference: The reference as written.
        target: The artifact the reference names. It may not exist.
    """

    reference: str
    target: ArtifactId


def _parse_error(artifact: ArtifactId, path: Path, detail: str) -> DependencyParseError:
    msg = f"Cannot parse dependencies of {artifact} ({path}): {detail}"
    return DependencyParseError(msg, artifact=str(artifact), path=path)


def _is_path_reference(raw: str) -> bool:
    return raw.endswith(".md") or raw.startswith(("./", "../", "/"))


def _target_from_path(
    raw: str,
    *,
    artifact: ArtifactId,
    document: Path,
    workspace: WorkspacePaths,
) -> ArtifactId:
    try:
        resolved = resolve_within_workspace(
            document.parent / raw, workspace.root, source=f"{artifact} dependency"
        )
    except PathEscapeError as e:
        raise _parse_error(artifact, document, str(e)) from e

    artifact_dir = resolved if not resolved.suffix else resolved.parent
    for kind in ArtifactKind:
        if artifact_dir.parent == kind.directory(workspace).resolve():
            return ArtifactId(kind, artifact_dir.name)

    detail = f"reference {raw!r} does not point into an artifact directory"
    raise _parse_error(artifact, document, detail)


def _reference_values(
    frontmatter: dict[str, Any], *, artifact: ArtifactId, document: Path
) -> list[str]:
    raw_items = frontmatter.get(DEPENDENCIES_KEY) or []
    if not isinstance(raw_items, list):
        detail = f"'{DEPENDENCIES_KEY}' must be a list"
        raise _parse_error(artifact, document, detail)

    values: list[str] = []
    for item in raw_items:
        if isinstance(item, dict):
            item = item.get("ref")  # noqa: PLW2901
        if not isinstance(item, str) or not item.strip():
            detail = f"invalid dependency entry {item!r}"
            raise _parse_error(artifact, document, detail)
        values.append(item.strip())

    key = _KIND_REFERENCE_KEYS.get(artifact.kind)
    if key is not None and frontmatter.get(key) is not None:
        value = frontmatter[key]
        if not isinstance(value, str) or not value.strip():
            detail = f"'{key}' must be an artifact reference"
            raise _parse_error(artifact, document, detail)
        values.append(value.strip())

    return values


def parse_declarations(
    artifact: ArtifactId, workspace: WorkspacePaths
) -> tuple[DependencyDeclaration, ...]:
    """Parse the dependencies declared by an artifact.

    An artifact without a primary document declares nothing.

    Args:
        artifact: The declaring artifact.
        workspace: The workspace the artifact lives in.

    Returns:
        Declarations in the order written, without duplicates.

    Raises:
        DependencyParseError: If the front matter or a reference is malformed.
    """
    document = artifact.document_path(workspace)
    if not document.is_file():
        return ()

    try:
        frontmatter, _ = read_markdown_frontmatter(document)
    except (SpecmanIOError, ValueError) as e:
        raise _parse_error(artifact, document, str(e)) from e

    declarations: list[DependencyDeclaration] = []
    seen: set[ArtifactId] = set()
    for raw in _reference_values(frontmatter, artifact=artifact, document=document):
        if _is_path_reference(raw):
            target = _target_from_path(
                raw, artifact=artifact, document=document, workspace=workspace
            )
        else:
            try:
                target = ArtifactId.parse(raw)
            except ValueError as e:
                raise _parse_error(artifact, document, str(e)) from e

        if target not in seen:
            seen.add(target)
            declarations.append(DependencyDeclaration(reference=raw, target=target))

    return tuple(declarations)
