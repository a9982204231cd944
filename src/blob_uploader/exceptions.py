"""Custom exceptions for the blob uploader."""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure kinds reported across the upload boundary."""

    SIZE_EXCEEDED = "size_exceeded"
    UNSUPPORTED_FORMAT = "unsupported_format"
    NAME_RESOLUTION_EXHAUSTED = "name_resolution_exhausted"
    CONTAINER_ACCESS = "container_access"
    TRANSFER = "transfer"
    REPOSITORY = "repository"


class UploaderError(Exception):
    """Base class for every failure the upload pipeline reports."""

    kind: ErrorKind

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class PolicyViolation(UploaderError):
    """Raised when a file is rejected before any I/O."""


class SizeExceededError(PolicyViolation):
    """Raised when a file is larger than the configured limit."""

    kind = ErrorKind.SIZE_EXCEEDED

    def __init__(self, file_name: str, size: int, limit_bytes: int):
        self.file_name = file_name
        self.size = size
        self.limit_bytes = limit_bytes
        limit_mb = limit_bytes / (1024 * 1024)
        super().__init__(f"File '{file_name}' exceeds the {limit_mb:g}MB size limit")


class UnsupportedFormatError(PolicyViolation):
    """Raised when a file extension is in neither accepted format set."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, file_name: str, extension: str):
        self.file_name = file_name
        self.extension = extension
        super().__init__(
            f"Unsupported file format '{extension or '(none)'}' for '{file_name}'"
        )


class NameResolutionExhaustedError(UploaderError):
    """Raised when no free remote name is found for a desired path."""

    kind = ErrorKind.NAME_RESOLUTION_EXHAUSTED

    def __init__(self, desired_path: str, attempts: int):
        self.desired_path = desired_path
        self.attempts = attempts
        super().__init__(
            f"Could not find a free name for '{desired_path}' "
            f"after {attempts} attempts"
        )


class ContainerAccessError(UploaderError):
    """Raised when the storage container cannot be probed or created."""

    kind = ErrorKind.CONTAINER_ACCESS

    def __init__(self, container_name: str, cause: Exception | None = None):
        self.container_name = container_name
        detail = f": {cause}" if cause else ""
        super().__init__(
            f"Failed to access storage container '{container_name}'{detail}", cause
        )


class TransferError(UploaderError):
    """Raised when the bytes of an object cannot be transferred."""

    kind = ErrorKind.TRANSFER

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to upload '{object_name}' to storage{detail}", cause)


class ThumbnailError(UploaderError):
    """Raised when a thumbnail cannot be derived. Never leaves a backend."""

    def __init__(self, source: str, reason: str, cause: Exception | None = None):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to derive thumbnail for '{source}': {reason}", cause)


class RepositoryError(UploaderError):
    """Raised when upload history cannot be read or written."""

    kind = ErrorKind.REPOSITORY

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        detail = f": {cause}" if cause else ""
        super().__init__(f"Upload history {operation} failed{detail}", cause)
