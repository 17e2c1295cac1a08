"""Error taxonomy for include-order validation.

Every error raised by the registry, the graph builder or the request reader
derives from OrderGuardError. All of them abort the current validation run.
A negative verdict (a cycle was found) is not an error and is reported as
``False`` by the validator instead.
"""


class OrderGuardError(Exception):
    """Base class for all orderguard errors."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Human-readable description of the error
        """
        super().__init__(message)
        self.message = message


class RegistryError(OrderGuardError):
    """Raised for inconsistent use of the identifier registry."""


class DuplicateNameError(RegistryError):
    """A file name was registered twice."""

    def __init__(self, name: str):
        super().__init__(f"File already registered: {name}")
        self.name = name


class UnknownNameError(RegistryError):
    """A file name was looked up that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown file: {name}")
        self.name = name


class InvalidIdError(RegistryError):
    """A file id outside the assigned range was looked up."""

    def __init__(self, file_id: int, size: int):
        super().__init__(f"Invalid file id {file_id} (registry holds {size} files)")
        self.file_id = file_id
        self.size = size


class GraphBuildError(OrderGuardError):
    """Raised when the dependency graph cannot be constructed."""


class UnreadableFileError(GraphBuildError):
    """The content of a known file could not be obtained."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"Could not read file {filename}: {reason}")
        self.filename = filename
        self.reason = reason


class UnknownDependencyError(GraphBuildError):
    """A dependency token names a file outside the known set."""

    def __init__(self, filename: str, token: str):
        super().__init__(f"File {filename} depends on unknown file {token}")
        self.filename = filename
        self.token = token


class RequestFormatError(OrderGuardError):
    """The validation request stream is malformed."""


__all__ = [
    "DuplicateNameError",
    "GraphBuildError",
    "InvalidIdError",
    "OrderGuardError",
    "RegistryError",
    "RequestFormatError",
    "UnknownDependencyError",
    "UnknownNameError",
    "UnreadableFileError",
]
