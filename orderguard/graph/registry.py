"""Identifier registry mapping known file names to stable integer ids.

Ids are handed out in discovery order starting at zero and never change once
assigned. The registry is caller-owned: build a fresh one for every
validation run.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import structlog

from orderguard.errors import DuplicateNameError, InvalidIdError, UnknownNameError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FileIdentity:
    """A known file together with its assigned id.

    Attributes:
        name: File name as listed in the scanned scope
        id: Integer handle in [0, N)
    """

    name: str
    id: int


class IdentifierRegistry:
    """Bidirectional name <-> id lookup for known files.

    Example:
        >>> registry = IdentifierRegistry()
        >>> registry.register("a.h")
        0
        >>> registry.register("b.h")
        1
        >>> registry.id_of("b.h")
        1
        >>> registry.name_of(0)
        'a.h'
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._ids: dict[str, int] = {}
        self._names: list[str] = []

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "IdentifierRegistry":
        """Create a registry by registering names in iteration order.

        Args:
            names: Known file names in discovery order

        Returns:
            Populated registry

        Raises:
            DuplicateNameError: If a name occurs more than once
        """
        registry = cls()
        for name in names:
            registry.register(name)

        logger.debug("registry_built", file_count=len(registry))
        return registry

    def register(self, name: str) -> int:
        """Assign the next unused id to a file name.

        Args:
            name: File name to register

        Returns:
            The id assigned to the name

        Raises:
            DuplicateNameError: If the name is already registered
        """
        if name in self._ids:
            logger.error("duplicate_file_name", name=name)
            raise DuplicateNameError(name)

        file_id = len(self._names)
        self._ids[name] = file_id
        self._names.append(name)
        return file_id

    def id_of(self, name: str) -> int:
        """Look up the id of a registered file.

        Raises:
            UnknownNameError: If the name was never registered
        """
        try:
            return self._ids[name]
        except KeyError:
            raise UnknownNameError(name) from None

    def name_of(self, file_id: int) -> str:
        """Look up the name of a registered id.

        Raises:
            InvalidIdError: If the id is outside [0, len(self))
        """
        if not 0 <= file_id < len(self._names):
            raise InvalidIdError(file_id, len(self._names))
        return self._names[file_id]

    def identities(self) -> Iterator[FileIdentity]:
        """Iterate over all registered files in id order."""
        for file_id, name in enumerate(self._names):
            yield FileIdentity(name=name, id=file_id)

    @property
    def names(self) -> tuple[str, ...]:
        """Registered names in id order."""
        return tuple(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._ids
