"""Domain layer exports."""

from .models import (
    FileDescriptor,
    UploadFailure,
    UploadOutcome,
    UploadPolicy,
    UploadProgressEvent,
    UploadResult,
    utc_now,
)
from .path_resolver import PathResolver
from .policy_validator import PolicyValidator
from .progress import ProgressReporter, ProgressSink

__all__ = [
    "FileDescriptor",
    "UploadFailure",
    "UploadOutcome",
    "UploadPolicy",
    "UploadProgressEvent",
    "UploadResult",
    "utc_now",
    "PathResolver",
    "PolicyValidator",
    "ProgressReporter",
    "ProgressSink",
]
