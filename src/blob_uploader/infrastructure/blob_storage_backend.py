"""Storage backend that uploads to a real object store."""

import asyncio
import io
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from blob_uploader.domain import (
    FileDescriptor,
    PathResolver,
    ProgressReporter,
    ProgressSink,
    UploadResult,
    utc_now,
)
from blob_uploader.exceptions import TransferError
from blob_uploader.interfaces import (
    DEFAULT_THUMBNAIL_WIDTH,
    ByteSource,
    ObjectStore,
    StorageBackend,
    ThumbnailDeriver,
)
from blob_uploader.logging import setup_logging

from .pillow_thumbnail import is_image_file

logger = setup_logging()


class BlobStorageBackend(StorageBackend):
    """
    Uploads files to an object store under ``{year}/{month}/``.

    Ensures the container exists, resolves a free object name, streams the
    file with progress, then stores a thumbnail next to image uploads.
    Thumbnail failures are logged and leave ``thumbnail_url`` unset.
    """

    def __init__(
        self,
        store: ObjectStore,
        byte_source: ByteSource,
        thumbnail_deriver: ThumbnailDeriver,
        path_resolver: PathResolver | None = None,
        base_url: str | None = None,
        thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._byte_source = byte_source
        self._thumbnail_deriver = thumbnail_deriver
        self._path_resolver = path_resolver or PathResolver(clock)
        self._base_url = base_url.rstrip("/") if base_url else None
        self._thumbnail_width = thumbnail_width
        self._clock = clock

    async def upload(
        self, file: FileDescriptor, on_progress: ProgressSink | None = None
    ) -> UploadResult:
        await self._store.ensure_container()

        desired_path = self._path_resolver.desired_path(file.name)
        object_path = await self._path_resolver.resolve(self._store, desired_path)

        await self._transfer(file, object_path, on_progress)

        thumbnail_url = None
        if is_image_file(file.name):
            thumbnail_url = await self._upload_thumbnail(file, object_path)

        result = UploadResult(
            file=file,
            url=self.public_url(object_path),
            thumbnail_url=thumbnail_url,
            uploaded_at=self._clock(),
        )
        logger.info(
            "Upload completed",
            extra={
                "file_name": file.name,
                "object_name": object_path,
                "container": self._store.container_name,
                "has_thumbnail": thumbnail_url is not None,
            },
        )
        return result

    def public_url(self, object_path: str) -> str:
        """Uses the configured base URL if set, the store's native URL otherwise."""
        if self._base_url:
            return f"{self._base_url}/{object_path}"
        return self._store.object_url(object_path)

    async def _transfer(
        self, file: FileDescriptor, object_path: str, on_progress: ProgressSink | None
    ) -> None:
        try:
            content = await self._byte_source.read(file.source)
        except OSError as e:
            logger.exception("Reading file content failed", extra={"source": file.source})
            raise TransferError(object_path, e) from e

        reporter = ProgressReporter(file.name, len(content), on_progress)
        await self._store.put(
            object_path,
            io.BytesIO(content),
            len(content),
            file.mime_type,
            on_bytes=reporter.advance if on_progress else None,
        )
        if on_progress:
            reporter.complete()

    async def _upload_thumbnail(self, file: FileDescriptor, object_path: str) -> str | None:
        local_path: Path | None = None
        try:
            local_path = await self._thumbnail_deriver.derive(
                file.source, self._thumbnail_width
            )
            thumbnail_path = self._path_resolver.thumbnail_path(
                object_path, self._thumbnail_width
            )
            content = await asyncio.to_thread(local_path.read_bytes)
            await self._store.put(
                thumbnail_path, io.BytesIO(content), len(content), file.mime_type
            )
            return self.public_url(thumbnail_path)
        except Exception:
            logger.exception(
                "Thumbnail upload skipped",
                extra={"file_name": file.name, "object_name": object_path},
            )
            return None
        finally:
            if local_path is not None:
                await _remove_local(local_path)


async def _remove_local(path: Path) -> None:
    try:
        await asyncio.to_thread(path.unlink, missing_ok=True)
    except OSError:
        logger.exception("Temporary thumbnail cleanup failed", extra={"path": str(path)})
