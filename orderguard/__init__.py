"""Header include-order validation.

Builds a dependency graph from the whitespace-separated dependency tokens of
each known file and decides whether a candidate ordering is achievable, i.e.
whether no dependency cycle is reachable from any of its files.
"""

from orderguard.errors import (
    DuplicateNameError,
    GraphBuildError,
    InvalidIdError,
    OrderGuardError,
    RegistryError,
    RequestFormatError,
    UnknownDependencyError,
    UnknownNameError,
    UnreadableFileError,
)
from orderguard.graph import (
    DependencyGraph,
    DependencyGraphBuilder,
    FileIdentity,
    IdentifierRegistry,
    OrderValidator,
    build_graph,
    validate_order,
)

__version__ = "0.1.0"

__all__ = [
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DuplicateNameError",
    "FileIdentity",
    "GraphBuildError",
    "IdentifierRegistry",
    "InvalidIdError",
    "OrderGuardError",
    "OrderValidator",
    "RegistryError",
    "RequestFormatError",
    "UnknownDependencyError",
    "UnknownNameError",
    "UnreadableFileError",
    "build_graph",
    "validate_order",
]
