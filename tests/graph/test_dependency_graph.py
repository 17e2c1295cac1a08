"""Unit tests for DependencyGraph and the graph builder.

Tests cover:
- Tokenizing declarations into edges
- Empty entries for files without dependencies
- Self-loops and duplicate edges
- Unreadable files and unknown dependency tokens
- Graph statistics and immutability
"""

import pytest

from orderguard.errors import (
    GraphBuildError,
    InvalidIdError,
    UnknownDependencyError,
    UnknownNameError,
    UnreadableFileError,
)
from orderguard.graph.dependency_graph import (
    DependencyGraph,
    DependencyGraphBuilder,
    build_graph,
)
from orderguard.graph.registry import IdentifierRegistry


def reader_for(contents: dict[str, str]):
    """Build an in-memory content reader."""

    def read_content(filename: str) -> str:
        return contents[filename]

    return read_content


class TestDependencyGraph:
    """Test the frozen graph snapshot."""

    def test_absent_ids_read_as_empty(self):
        """Test that files without an adjacency entry have no dependencies."""
        registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        graph = DependencyGraph(registry, {1: [0]})

        assert graph.dependencies_of(0) == ()
        assert graph.dependencies_of(1) == (0,)
        assert len(graph) == 2

    def test_every_known_file_is_covered(self):
        registry = IdentifierRegistry.from_names(["a.h", "b.h", "c.h"])
        graph = DependencyGraph(registry, {})

        assert set(graph.adjacency) == {0, 1, 2}
        assert all(deps == () for deps in graph.adjacency.values())

    def test_rejects_out_of_range_ids(self):
        """Test that edges must stay inside the registry."""
        registry = IdentifierRegistry.from_names(["a.h"])

        with pytest.raises(InvalidIdError):
            DependencyGraph(registry, {0: [1]})
        with pytest.raises(InvalidIdError):
            DependencyGraph(registry, {5: []})

    def test_snapshot_is_independent_of_source(self):
        """Test that mutating the input mapping does not change the graph."""
        registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        adjacency = {1: [0]}
        graph = DependencyGraph(registry, adjacency)

        adjacency[1].append(1)

        assert graph.dependencies_of(1) == (0,)
        with pytest.raises(TypeError):
            graph.adjacency[0] = (1,)  # type: ignore[index]

    def test_edges_and_stats(self):
        registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        graph = DependencyGraph(registry, {0: [0], 1: [0, 0]})

        assert list(graph.edges()) == [(0, 0), (1, 0), (1, 0)]
        assert graph.get_stats() == {
            "file_count": 2,
            "edge_count": 3,
            "self_loop_count": 1,
        }


class TestBuildGraph:
    """Test building graphs from file contents."""

    def test_chain(self):
        """Test A <- B <- C declarations become id edges."""
        graph = build_graph(
            ["A.h", "B.h", "C.h"],
            reader_for({"A.h": "", "B.h": "A.h", "C.h": "B.h\n"}),
        )

        assert graph.dependency_names_of("A.h") == ()
        assert graph.dependency_names_of("B.h") == ("A.h",)
        assert graph.dependency_names_of("C.h") == ("B.h",)

    def test_tokens_split_on_any_whitespace(self):
        """Test tokens across spaces, tabs and lines keep declaration order."""
        graph = build_graph(
            ["a.h", "b.h", "c.h", "d.h"],
            reader_for({"a.h": "d.h  b.h\n\tc.h\n\n", "b.h": "", "c.h": "", "d.h": ""}),
        )

        assert graph.dependency_names_of("a.h") == ("d.h", "b.h", "c.h")

    def test_duplicate_edges_kept(self):
        graph = build_graph(
            ["a.h", "b.h"],
            reader_for({"a.h": "b.h b.h\nb.h", "b.h": ""}),
        )

        assert graph.dependency_names_of("a.h") == ("b.h", "b.h", "b.h")

    def test_self_loop_is_structurally_permitted(self):
        graph = build_graph(["a.h"], reader_for({"a.h": "a.h"}))

        assert graph.dependencies_of(0) == (0,)
        assert graph.get_stats()["self_loop_count"] == 1

    def test_registry_exposed_on_graph(self):
        graph = build_graph(["b.h", "a.h"], reader_for({"a.h": "", "b.h": ""}))

        assert graph.registry.id_of("b.h") == 0
        assert graph.registry.id_of("a.h") == 1

    def test_uses_supplied_registry(self):
        registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        graph = build_graph(["a.h", "b.h"], reader_for({"a.h": "b.h", "b.h": ""}), registry)

        assert graph.registry is registry

    def test_empty_file_collection(self):
        graph = build_graph([], reader_for({}))

        assert len(graph) == 0
        assert graph.get_stats()["edge_count"] == 0

    def test_unknown_dependency(self):
        """Test that a token outside the known set names file and token."""
        with pytest.raises(UnknownDependencyError) as exc_info:
            build_graph(["A.h"], reader_for({"A.h": "E.h"}))

        error = exc_info.value
        assert error.filename == "A.h"
        assert error.token == "E.h"
        assert isinstance(error, GraphBuildError)
        assert not isinstance(error, UnknownNameError)

    @pytest.mark.parametrize(
        "exception",
        [
            FileNotFoundError("gone"),
            PermissionError("denied"),
            UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
        ],
    )
    def test_unreadable_file(self, exception):
        """Test that reader failures surface as UnreadableFileError."""

        def failing_reader(filename: str) -> str:
            if filename == "b.h":
                raise exception
            return ""

        with pytest.raises(UnreadableFileError) as exc_info:
            build_graph(["a.h", "b.h"], failing_reader)

        assert exc_info.value.filename == "b.h"
        assert exc_info.value.__cause__ is exception

    def test_reader_returning_none_is_unreadable(self):
        with pytest.raises(UnreadableFileError, match="a.h"):
            build_graph(["a.h"], lambda _name: None)  # type: ignore[arg-type,return-value]


class TestDependencyGraphBuilder:
    """Test incremental building."""

    def test_add_declarations_for_unregistered_owner(self):
        builder = DependencyGraphBuilder(IdentifierRegistry.from_names(["a.h"]))

        with pytest.raises(UnknownNameError):
            builder.add_declarations("z.h", "a.h")

    def test_declarations_accumulate(self):
        builder = DependencyGraphBuilder(IdentifierRegistry.from_names(["a.h", "b.h"]))
        builder.add_declarations("a.h", "b.h")
        builder.add_declarations("a.h", "a.h")

        assert builder.build().dependencies_of(0) == (1, 0)
