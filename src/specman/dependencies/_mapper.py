"""Dependency graph queries over workspace artifacts.

The graph is rebuilt from disk for every query: nodes are the discovered
artifacts and an edge `A -> B` means "A depends on B".
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Final, NoReturn

import rustworkx as rx
from structlog.typing import FilteringBoundLogger

from specman.artifacts import ArtifactId, discover_artifacts
from specman.exceptions import (
    ArtifactNotFoundError,
    CircularDependencyError,
    DanglingDependencyError,
    DependencyParseError,
)
from specman.utils import create_null_logger
from specman.workspace import WorkspacePaths

from ._declarations import DependencyDeclaration, parse_declarations
from ._models import DependencyEntry, DependencyMapping, DependencyScope, DependencyView


@dataclass(slots=True)
class _ArtifactGraph:
    """Graph of discovered artifacts plus what could not be linked.

    Attributes:
        graph: Directed graph with ArtifactId payloads.
        indices: Node index for each artifact.
        parse_errors: Declaration errors, raised only when the artifact is
            queried or visited.
        dangling: Declarations naming artifacts that do not exist.
    """

    graph: rx.PyDiGraph  # pyright: ignore[reportMissingTypeArgument]
    indices: dict[ArtifactId, int] = field(default_factory=dict)
    parse_errors: dict[ArtifactId, DependencyParseError] = field(default_factory=dict)
    dangling: dict[ArtifactId, list[DependencyDeclaration]] = field(
        default_factory=dict
    )


class FilesystemDependencyMapper:
    """Answers dependency queries for the artifacts in a workspace.

    Args:
        workspace: The workspace to query.
        logger: Logger for graph diagnostics.
    """

    __slots__: Final = ("_logger", "_workspace")

    def __init__(
        self,
        workspace: WorkspacePaths,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._workspace = workspace
        self._logger = logger or create_null_logger()

    @property
    def workspace(self) -> WorkspacePaths:
        return self._workspace

    def dependency_tree(
        self,
        artifact: ArtifactId,
        view: DependencyView = DependencyView.DOWNSTREAM,
    ) -> DependencyMapping:
        """Compute an artifact's dependency view.

        The query either returns a complete, cycle-checked mapping or raises
        the first problem found.

        Args:
            artifact: The artifact to query.
            view: Which direction(s) of the graph to return.

        Returns:
            The mapping for the requested view.

        Raises:
            ArtifactNotFoundError: If the artifact does not exist.
            DependencyParseError: If the artifact's declarations, or those of
                an artifact reached by the traversal, cannot be parsed.
            DanglingDependencyError: If the artifact, or an artifact reached
                upstream, depends on a missing artifact.
            CircularDependencyError: If the traversal runs into a cycle.
        """
        if not artifact.exists(self._workspace):
            msg = f"Artifact {artifact} not found"
            raise ArtifactNotFoundError(msg, artifact=str(artifact))

        state = self._build_graph()
        self._check_declarations(state, artifact)

        root = state.indices[artifact]
        upstream: tuple[DependencyEntry, ...] = ()
        downstream: tuple[DependencyEntry, ...] = ()
        if view in {DependencyView.UPSTREAM, DependencyView.ALL}:
            upstream = self._traverse(state, root, upstream=True)
        if view in {DependencyView.DOWNSTREAM, DependencyView.ALL}:
            downstream = self._traverse(state, root, upstream=False)

        self._logger.debug(
            "dependency_tree_computed",
            artifact=str(artifact),
            view=view.value,
            upstream=len(upstream),
            downstream=len(downstream),
        )
        return DependencyMapping(
            root=artifact, view=view, upstream=upstream, downstream=downstream
        )

    def _build_graph(self) -> _ArtifactGraph:
        state = _ArtifactGraph(graph=rx.PyDiGraph(multigraph=False))
        artifacts = discover_artifacts(self._workspace)
        for artifact in artifacts:
            state.indices[artifact] = state.graph.add_node(artifact)

        for artifact in artifacts:
            try:
                declarations = parse_declarations(artifact, self._workspace)
            except DependencyParseError as e:
                state.parse_errors[artifact] = e
                continue

            source = state.indices[artifact]
            for declaration in declarations:
                target = state.indices.get(declaration.target)
                if target is None:
                    state.dangling.setdefault(artifact, []).append(declaration)
                else:
                    _ = state.graph.add_edge(source, target, None)

        return state

    def _check_declarations(self, state: _ArtifactGraph, artifact: ArtifactId) -> None:
        error = state.parse_errors.get(artifact)
        if error is not None:
            raise error

        missing = state.dangling.get(artifact)
        if missing:
            declaration = missing[0]
            msg = f"{artifact} depends on missing artifact {declaration.target}"
            raise DanglingDependencyError(
                msg, artifact=str(artifact), reference=declaration.reference
            )

    def _traverse(
        self,
        state: _ArtifactGraph,
        root: int,
        *,
        upstream: bool,
    ) -> tuple[DependencyEntry, ...]:
        """Depth-first pre-order walk from the root with an explicit stack.

        Upstream walks follow edges out of a node (its dependencies) and
        validate each reached artifact's declarations. Downstream walks follow
        edges into a node (its dependents); an artifact
        whose declarations cannot be parsed has no edges, so it never shows up
        as a dependent.
        """
        graph = state.graph
        neighbors: Callable[[int], rx.NodeIndices] = (
            graph.successor_indices if upstream else graph.predecessor_indices
        )

        def ordered(index: int) -> Iterator[int]:
            return iter(sorted(neighbors(index), key=lambda i: graph[i].sort_key))

        entries: list[DependencyEntry] = []
        visited = {root}
        path = [root]
        stack = [ordered(root)]

        while stack:
            child = next(stack[-1], None)
            if child is None:
                _ = stack.pop()
                _ = path.pop()
                continue

            if child in path:
                self._raise_cycle(state, path[path.index(child) :], child, upstream=upstream)
            if child in visited:
                continue

            visited.add(child)
            artifact: ArtifactId = graph[child]
            if upstream:
                self._check_declarations(state, artifact)

            entries.append(
                DependencyEntry(
                    artifact=artifact,
                    parent=graph[path[-1]],
                    depth=len(path),
                    scope=DependencyScope.from_kind(artifact.kind),
                )
            )
            path.append(child)
            stack.append(ordered(child))

        return tuple(entries)

    def _raise_cycle(
        self,
        state: _ArtifactGraph,
        members: list[int],
        closing: int,
        *,
        upstream: bool,
    ) -> NoReturn:
        cycle = [str(state.graph[index]) for index in (*members, closing)]
        if not upstream:
            # Present downstream cycles in "depends on" order as well
            cycle.reverse()

        msg = f"Circular dependency: {' -> '.join(cycle)}"
        self._logger.warning("dependency_cycle_detected", cycle=cycle)
        raise CircularDependencyError(msg, artifact=cycle[0], cycle=cycle)
