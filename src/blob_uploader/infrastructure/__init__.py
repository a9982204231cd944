"""Concrete implementations of infrastructure interfaces."""

from .blob_storage_backend import BlobStorageBackend
from .byte_sources import InMemoryByteSource, LocalFileByteSource, describe_local_file
from .history_repository import SqlHistoryRepository
from .minio_object_store import MinioObjectStore
from .pillow_thumbnail import PillowThumbnailDeriver, is_image_file
from .simulated_backend import SIMULATED_BASE_URL, SimulatedStorageBackend

__all__ = [
    "BlobStorageBackend",
    "InMemoryByteSource",
    "LocalFileByteSource",
    "MinioObjectStore",
    "PillowThumbnailDeriver",
    "SIMULATED_BASE_URL",
    "SimulatedStorageBackend",
    "SqlHistoryRepository",
    "describe_local_file",
    "is_image_file",
]
