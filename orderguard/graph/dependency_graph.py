"""Dependency graph construction from per-file dependency declarations.

Each known file declares the files it depends on as whitespace-separated
tokens in its content. The builder resolves every token through the
IdentifierRegistry and produces an immutable DependencyGraph mapping each
file id to the ordered ids of its direct dependencies.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

import structlog

from orderguard.errors import (
    InvalidIdError,
    UnknownDependencyError,
    UnknownNameError,
    UnreadableFileError,
)
from orderguard.graph.registry import IdentifierRegistry

logger = structlog.get_logger(__name__)

ContentReader = Callable[[str], str]


class DependencyGraph:
    """Immutable snapshot of file dependencies keyed by registry id.

    Duplicate edges are preserved as declared; they do not change
    reachability. Ids missing from the adjacency mapping read as having no
    dependencies.

    Example:
        >>> registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        >>> graph = DependencyGraph(registry, {1: [0]})
        >>> graph.dependencies_of(1)
        (0,)
        >>> graph.dependencies_of(0)
        ()
    """

    def __init__(
        self,
        registry: IdentifierRegistry,
        adjacency: Mapping[int, Sequence[int]],
    ):
        """Freeze an adjacency mapping into a graph.

        Args:
            registry: Registry the ids in ``adjacency`` were resolved against
            adjacency: Mapping from file id to the ids it depends on

        Raises:
            InvalidIdError: If any id is outside the registry's range
        """
        size = len(registry)
        edges: dict[int, tuple[int, ...]] = {file_id: () for file_id in range(size)}

        for file_id, dependencies in adjacency.items():
            deps = tuple(dependencies)
            for node in (file_id, *deps):
                if not 0 <= node < size:
                    raise InvalidIdError(node, size)
            edges[file_id] = deps

        self.registry = registry
        self._edges = MappingProxyType(edges)

    def dependencies_of(self, file_id: int) -> tuple[int, ...]:
        """Return the direct dependencies of a file id (empty if none)."""
        return self._edges.get(file_id, ())

    def dependency_names_of(self, name: str) -> tuple[str, ...]:
        """Return the direct dependencies of a file by name.

        Raises:
            UnknownNameError: If the name is not a known file
        """
        file_id = self.registry.id_of(name)
        return tuple(self.registry.name_of(dep) for dep in self.dependencies_of(file_id))

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate over ``(owner, dependency)`` pairs in declaration order."""
        for file_id, deps in self._edges.items():
            for dep in deps:
                yield file_id, dep

    @property
    def adjacency(self) -> Mapping[int, tuple[int, ...]]:
        """Read-only view of the full adjacency mapping."""
        return self._edges

    def get_stats(self) -> dict[str, int]:
        """Get statistics about the graph.

        Returns:
            Dictionary with:
                - file_count: Number of files in the graph
                - edge_count: Number of declared edges, duplicates included
                - self_loop_count: Number of edges from a file to itself
        """
        return {
            "file_count": len(self._edges),
            "edge_count": sum(len(deps) for deps in self._edges.values()),
            "self_loop_count": sum(owner == dep for owner, dep in self.edges()),
        }

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._edges


class DependencyGraphBuilder:
    """Accumulates dependency declarations and freezes them into a graph.

    Example:
        >>> registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        >>> builder = DependencyGraphBuilder(registry)
        >>> builder.add_declarations("b.h", "a.h")
        >>> builder.build().dependency_names_of("b.h")
        ('a.h',)
    """

    def __init__(self, registry: IdentifierRegistry):
        self.registry = registry
        self._adjacency: dict[int, list[int]] = {}

    def add_declarations(self, filename: str, content: str) -> None:
        """Record the dependency tokens declared in a file's content.

        Args:
            filename: Known file owning the content
            content: Raw text; every whitespace-separated token names a file

        Raises:
            UnknownNameError: If ``filename`` itself is not registered
            UnknownDependencyError: If a token names an unknown file
        """
        owner = self.registry.id_of(filename)
        deps = self._adjacency.setdefault(owner, [])

        for token in content.split():
            try:
                deps.append(self.registry.id_of(token))
            except UnknownNameError:
                logger.error("unknown_dependency", filename=filename, token=token)
                raise UnknownDependencyError(filename, token) from None

        logger.debug("declarations_added", filename=filename, dependency_count=len(deps))

    def build(self) -> DependencyGraph:
        """Freeze the accumulated declarations into a DependencyGraph."""
        graph = DependencyGraph(self.registry, self._adjacency)
        logger.info("dependency_graph_built", **graph.get_stats())
        return graph


def build_graph(
    known_files: Iterable[str],
    read_content: ContentReader,
    registry: IdentifierRegistry | None = None,
) -> DependencyGraph:
    """Build a dependency graph for a collection of known files.

    A fresh registry is created from ``known_files`` unless one is supplied.
    The registry is reachable afterwards as ``graph.registry``.

    Args:
        known_files: Known file names in discovery order
        read_content: Callable returning the full text of a known file
        registry: Pre-populated registry covering ``known_files``

    Returns:
        The completed DependencyGraph

    Raises:
        DuplicateNameError: If ``known_files`` repeats a name
        UnreadableFileError: If a file's content cannot be obtained
        UnknownDependencyError: If a token names a file outside the known set
    """
    filenames = list(known_files)
    if registry is None:
        registry = IdentifierRegistry.from_names(filenames)

    logger.info("building_dependency_graph", file_count=len(filenames))

    builder = DependencyGraphBuilder(registry)
    for filename in filenames:
        try:
            content = read_content(filename)
        except (OSError, UnicodeDecodeError) as e:
            logger.exception("unreadable_file", filename=filename, error=str(e))
            raise UnreadableFileError(filename, str(e)) from e

        if content is None:
            logger.error("unreadable_file", filename=filename, error="no content")
            raise UnreadableFileError(filename, "no content")

        builder.add_declarations(filename, content)

    return builder.build()
