"""Shared pytest fixtures for all tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

import pytest
from PIL import Image
from sqlmodel import Session

from blob_uploader.domain import FileDescriptor, UploadPolicy
from blob_uploader.exceptions import ThumbnailError, TransferError
from blob_uploader.infrastructure import SqlHistoryRepository
from blob_uploader.infrastructure.database import get_engine, init_db
from blob_uploader.interfaces import ObjectStore, ThumbnailDeriver

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 15, tzinfo=timezone.utc)


class FakeObjectStore(ObjectStore):
    """In-memory object store that records every call."""

    def __init__(self, existing=(), container_exists=True, chunk_size=None, fail_paths=()):
        self.objects = {path: (b"", "application/octet-stream") for path in existing}
        self.container_exists = container_exists
        self.container_created = False
        self.chunk_size = chunk_size
        self.fail_paths = set(fail_paths)
        self.probes = []
        self.put_order = []

    @property
    def container_name(self) -> str:
        return "uploads"

    async def ensure_container(self) -> None:
        if not self.container_exists:
            self.container_exists = True
            self.container_created = True

    async def exists(self, path: str) -> bool:
        self.probes.append(path)
        return path in self.objects

    async def put(self, path: str, data: BinaryIO, size: int, content_type: str, on_bytes=None) -> None:
        if path in self.fail_paths:
            raise TransferError(path, RuntimeError("connection reset"))
        content = data.read()
        if on_bytes:
            step = self.chunk_size or max(size, 1)
            for offset in range(0, size, step):
                on_bytes(min(step, size - offset))
        self.objects[path] = (content, content_type)
        self.put_order.append(path)

    def object_url(self, path: str) -> str:
        return f"http://store.test/uploads/{path}"


class FailingThumbnailDeriver(ThumbnailDeriver):
    """Deriver that always fails and counts its calls."""

    def __init__(self):
        self.calls = 0

    async def derive(self, source: str, target_width: int = 320) -> Path:
        self.calls += 1
        raise ThumbnailError(source, "decoder exploded")


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def policy():
    """Default 10MB policy accepting png/jpg/jpeg images and pdf documents."""
    return UploadPolicy(
        max_size_bytes=10 * 1024 * 1024,
        image_formats={"png", "jpg", "jpeg"},
        document_formats={"pdf"},
    )


@pytest.fixture
def make_file():
    """Factory for FileDescriptor instances."""

    def _make(name="report.pdf", size=1024, source=None, mime_type="application/pdf"):
        return FileDescriptor(
            name=name,
            source=source or f"/nonexistent/{name}",
            size=size,
            mime_type=mime_type,
            last_modified=datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def make_png(tmp_path):
    """Factory writing a solid PNG of the given size into tmp_path."""

    def _make(name="photo.png", width=640, height=480):
        path = tmp_path / name
        Image.new("RGB", (width, height), color=(200, 30, 30)).save(path)
        return path

    return _make


@pytest.fixture
def thumbnail_dir(tmp_path):
    """Directory that receives generated thumbnails."""
    directory = tmp_path / "thumbnails"
    directory.mkdir()
    return directory


@pytest.fixture
def object_store():
    """Empty in-memory object store."""
    return FakeObjectStore()


@pytest.fixture
def history_repository():
    """History repository backed by an in-memory SQLite database."""
    engine = get_engine("sqlite://")
    init_db(engine)
    return SqlHistoryRepository(lambda: Session(engine))
