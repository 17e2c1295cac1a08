"""File-system and stream collaborators feeding the validation core.

These helpers list the known files of a scope directory, read their content
and parse a validation request from a text stream. The graph and validator
modules never touch the file system themselves.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import structlog

from orderguard.errors import RequestFormatError
from orderguard.graph.dependency_graph import ContentReader

logger = structlog.get_logger(__name__)

DEFAULT_EXTENSION = ".h"


@dataclass
class ValidationRequest:
    """A scope directory plus the candidate ordering to check against it.

    Attributes:
        directory: Directory whose files form the known set
        candidates: Candidate ordering of file names
    """

    directory: Path
    candidates: list[str] = field(default_factory=list)


def list_known_files(directory: str | Path, extension: str = DEFAULT_EXTENSION) -> list[str]:
    """List regular files in ``directory`` with the given suffix.

    Names are returned sorted so that id assignment is deterministic across
    platforms and file systems.

    Args:
        directory: Scope directory to scan (not recursive)
        extension: File suffix including the leading dot, e.g. ".h"

    Returns:
        Sorted list of bare file names

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory
    """
    scope = Path(directory)
    if not scope.exists():
        msg = f"Scope directory not found: {scope}"
        raise FileNotFoundError(msg)
    if not scope.is_dir():
        msg = f"Scope is not a directory: {scope}"
        raise NotADirectoryError(msg)

    filenames = sorted(
        entry.name for entry in scope.iterdir() if entry.is_file() and entry.suffix == extension
    )

    logger.info(
        "known_files_listed",
        directory=str(scope),
        extension=extension,
        file_count=len(filenames),
    )
    return filenames


def make_content_reader(directory: str | Path, encoding: str = "utf-8") -> ContentReader:
    """Return a reader that loads a known file's text from ``directory``.

    The returned callable raises OSError or UnicodeDecodeError on failure;
    the graph builder turns those into UnreadableFileError.
    """
    scope = Path(directory)

    def read_content(filename: str) -> str:
        return (scope / filename).read_text(encoding=encoding)

    return read_content


def parse_request(lines: Iterable[str]) -> ValidationRequest:
    """Parse a validation request from an iterable of lines.

    The first line names the scope directory. Each following non-blank line
    is one candidate file name; surrounding whitespace is stripped.

    Raises:
        RequestFormatError: If there is no scope line or it is blank
    """
    iterator = iter(lines)
    first = next(iterator, None)
    if first is None:
        msg = "Validation request is empty: expected a scope directory on the first line"
        raise RequestFormatError(msg)

    directory = first.strip()
    if not directory:
        msg = "Validation request has a blank scope directory line"
        raise RequestFormatError(msg)

    candidates = [line.strip() for line in iterator if line.strip()]

    logger.debug(
        "validation_request_parsed",
        directory=directory,
        candidate_count=len(candidates),
    )
    return ValidationRequest(directory=Path(directory), candidates=candidates)


def read_request(stream: TextIO) -> ValidationRequest:
    """Read a validation request from a text stream (e.g. stdin)."""
    return parse_request(stream)
