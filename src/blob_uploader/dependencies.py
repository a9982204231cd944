"""Dependency injection configuration."""

from functools import lru_cache, partial

from minio import Minio
from sqlmodel import Session as DBSession

from blob_uploader.config import AppConfig, StorageConfig, load_config
from blob_uploader.handlers import UploadOrchestrator
from blob_uploader.infrastructure import (
    BlobStorageBackend,
    LocalFileByteSource,
    MinioObjectStore,
    PillowThumbnailDeriver,
    SimulatedStorageBackend,
    SqlHistoryRepository,
)
from blob_uploader.infrastructure.database import get_engine, init_db
from blob_uploader.interfaces import HistorySink, StorageBackend

_config = load_config()
_engine = get_engine(_config.history.database_url)
_byte_source = LocalFileByteSource()
_thumbnail_deriver = PillowThumbnailDeriver()


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _config


def build_storage_backend(storage: StorageConfig) -> StorageBackend:
    """Creates a MinIO-backed storage backend for a configured credential."""
    client = Minio(
        endpoint=storage.endpoint,
        access_key=storage.access_key,
        secret_key=storage.secret_key,
        secure=storage.secure,
    )
    store = MinioObjectStore(client, storage.container_name, storage.endpoint_url)
    return BlobStorageBackend(
        store,
        _byte_source,
        _thumbnail_deriver,
        base_url=storage.base_url,
    )


@lru_cache
def get_history() -> HistorySink:
    """Returns the history repository, creating its table on first use."""
    init_db(_engine)
    return SqlHistoryRepository(partial(DBSession, _engine))


@lru_cache
def get_orchestrator() -> UploadOrchestrator:
    """Returns the configured upload orchestrator."""
    return UploadOrchestrator(
        history=get_history(),
        backend_factory=build_storage_backend,
        simulated_backend=SimulatedStorageBackend(
            _thumbnail_deriver, step_delay=_config.simulated_step_delay
        ),
    )
