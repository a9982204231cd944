"""Storage backend used when no storage credential is configured."""

import asyncio
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
from blob_uploader.domain.path_resolver import with_suffix
from blob_uploader.interfaces import (
    DEFAULT_THUMBNAIL_WIDTH,
    StorageBackend,
    ThumbnailDeriver,
)
from blob_uploader.logging import setup_logging

from .pillow_thumbnail import is_image_file

logger = setup_logging()

SIMULATED_BASE_URL = "https://example.com/mock"
PROGRESS_STEPS = 10


class SimulatedStorageBackend(StorageBackend):
    """
    Pretends to upload without touching the network.

    Emits ten evenly spaced progress events with a short delay between them
    and returns URLs under a fixed example base. When the source is a local
    file, a thumbnail is still generated (and removed) so the result looks
    like a real image upload.
    """

    def __init__(
        self,
        thumbnail_deriver: ThumbnailDeriver,
        step_delay: float = 0.2,
        thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._thumbnail_deriver = thumbnail_deriver
        self._step_delay = step_delay
        self._thumbnail_width = thumbnail_width
        self._path_resolver = PathResolver(clock)
        self._clock = clock

    async def upload(
        self, file: FileDescriptor, on_progress: ProgressSink | None = None
    ) -> UploadResult:
        reporter = ProgressReporter(file.name, file.size, on_progress)
        for step in range(1, PROGRESS_STEPS + 1):
            reporter.update(
                step * file.size // PROGRESS_STEPS,
                percentage=step * 100 // PROGRESS_STEPS,
            )
            await asyncio.sleep(self._step_delay)

        thumbnail_url = None
        if is_image_file(file.name):
            thumbnail_url = await self._thumbnail_url(file)

        logger.info(
            "Simulated upload completed",
            extra={"file_name": file.name, "size": file.size},
        )
        return UploadResult(
            file=file,
            url=f"{SIMULATED_BASE_URL}/{file.name}",
            thumbnail_url=thumbnail_url,
            uploaded_at=self._clock(),
        )

    async def _thumbnail_url(self, file: FileDescriptor) -> str:
        source = Path(file.source)
        if not await asyncio.to_thread(source.is_file):
            name = self._path_resolver.thumbnail_path(file.name, self._thumbnail_width)
            return f"{SIMULATED_BASE_URL}/{name}"

        try:
            local_path = await self._thumbnail_deriver.derive(
                file.source, self._thumbnail_width
            )
        except Exception:
            logger.exception("Simulated thumbnail generation failed", extra={"file_name": file.name})
            name = with_suffix(file.name, f"_{self._thumbnail_width}")
            return f"{SIMULATED_BASE_URL}/{name}"

        try:
            await asyncio.to_thread(local_path.unlink, missing_ok=True)
        except OSError:
            logger.exception("Temporary thumbnail cleanup failed", extra={"path": str(local_path)})

        name = self._path_resolver.thumbnail_path(file.name, self._thumbnail_width)
        return f"{SIMULATED_BASE_URL}/{name}"
