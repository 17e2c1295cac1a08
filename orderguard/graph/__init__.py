"""Graph module for include-order validation.

This module provides the identifier registry, the dependency graph builder
and the cycle-based order validator.
"""

from orderguard.graph.dependency_graph import (
    ContentReader,
    DependencyGraph,
    DependencyGraphBuilder,
    build_graph,
)
from orderguard.graph.registry import FileIdentity, IdentifierRegistry
from orderguard.graph.validator import OrderValidator, validate_order

__all__ = [
    "ContentReader",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "FileIdentity",
    "IdentifierRegistry",
    "OrderValidator",
    "build_graph",
    "validate_order",
]
