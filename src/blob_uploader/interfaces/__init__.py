"""Abstract interfaces for infrastructure dependencies."""

from .byte_source import ByteSource
from .history import HistorySink
from .object_store import ExistsProbe, ObjectStore
from .storage_backend import StorageBackend
from .thumbnail import DEFAULT_THUMBNAIL_WIDTH, ThumbnailDeriver

__all__ = [
    "ByteSource",
    "DEFAULT_THUMBNAIL_WIDTH",
    "ExistsProbe",
    "HistorySink",
    "ObjectStore",
    "StorageBackend",
    "ThumbnailDeriver",
]
