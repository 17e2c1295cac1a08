"""End-to-end include-order validation.

The engine wires the collaborators together: it reads a request, lists the
known files of the scope, builds a fresh registry and dependency graph,
validates the candidate ordering and writes a one-line verdict.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import structlog

from orderguard.config import OrderGuardConfig
from orderguard.graph.dependency_graph import build_graph
from orderguard.graph.validator import validate_order
from orderguard.log_config import bind_context, unbind_context
from orderguard.sources import list_known_files, make_content_reader, read_request

logger = structlog.get_logger(__name__)

CORRECT_VERDICT = "The order of filenames is correct."
INCORRECT_VERDICT = "The order of filenames is not correct."


class OrderValidatingEngine:
    """Runs one validation per call with no state carried between calls."""

    def __init__(self, config: OrderGuardConfig | None = None):
        self.config = config if config is not None else OrderGuardConfig()

    def run(self, directory: str | Path, candidates: Sequence[str]) -> bool:
        """Validate a candidate ordering against the files of ``directory``.

        Args:
            directory: Scope directory holding the known files
            candidates: Candidate ordering of file names

        Returns:
            True if the ordering is achievable, False if a cycle blocks it

        Raises:
            OSError: If the scope directory cannot be listed
            OrderGuardError: For registry, build or lookup failures
        """
        scan = self.config.scan
        bind_context(scope=str(directory))
        try:
            known_files = list_known_files(directory, scan.extension)
            graph = build_graph(known_files, make_content_reader(directory, scan.encoding))
            is_correct = validate_order(graph, graph.registry, candidates)
        finally:
            unbind_context("scope")

        logger.info(
            "order_validation_complete",
            directory=str(directory),
            candidate_count=len(candidates),
            is_correct=is_correct,
        )
        return is_correct

    def execute(self, in_stream: TextIO, out_stream: TextIO) -> bool:
        """Read a request from ``in_stream`` and write the verdict line.

        Raises:
            RequestFormatError: If the request has no scope line
        """
        request = read_request(in_stream)
        is_correct = self.run(request.directory, request.candidates)
        out_stream.write(f"{CORRECT_VERDICT if is_correct else INCORRECT_VERDICT}\n")
        return is_correct
