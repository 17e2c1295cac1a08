"""Using orderguard as a library with in-memory dependency declarations.

This example builds a graph without touching the file system, validates a
few candidate orderings and shows how build errors surface.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from orderguard import UnknownDependencyError, build_graph, validate_order
from orderguard.log_config import configure_logging, get_logger

HEADERS = {
    "types.h": "",
    "alloc.h": "types.h",
    "vector.h": "types.h alloc.h",
    "app.h": "vector.h",
}


def main() -> None:
    """Validate orderings over an acyclic and a cyclic header set."""
    configure_logging(level="INFO", json_logs=False)
    logger = get_logger(__name__)

    graph = build_graph(list(HEADERS), HEADERS.__getitem__)
    logger.info("graph_ready", **graph.get_stats())

    for candidates in (["types.h", "alloc.h", "vector.h", "app.h"], ["app.h"]):
        is_correct = validate_order(graph, graph.registry, candidates)
        logger.info("ordering_checked", candidates=candidates, is_correct=is_correct)

    cyclic = {**HEADERS, "types.h": "app.h"}
    cyclic_graph = build_graph(list(cyclic), cyclic.__getitem__)
    is_correct = validate_order(cyclic_graph, cyclic_graph.registry, ["alloc.h"])
    logger.info("ordering_checked", candidates=["alloc.h"], is_correct=is_correct)

    broken = {**HEADERS, "app.h": "vector.h string.h"}
    try:
        build_graph(list(broken), broken.__getitem__)
    except UnknownDependencyError as e:
        logger.warning("build_failed", filename=e.filename, token=e.token)


if __name__ == "__main__":
    main()
