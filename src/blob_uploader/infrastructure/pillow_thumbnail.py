"""Pillow implementation of the ThumbnailDeriver interface."""

import asyncio
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from blob_uploader.domain.models import utc_now
from blob_uploader.domain.path_resolver import TIMESTAMP_FORMAT
from blob_uploader.exceptions import ThumbnailError
from blob_uploader.interfaces import DEFAULT_THUMBNAIL_WIDTH, ThumbnailDeriver
from blob_uploader.logging import setup_logging

logger = setup_logging()

THUMBNAIL_EXTENSIONS = (".jpg", ".jpeg", ".png")


def is_image_file(name: str) -> bool:
    """Whether a file name has a thumbnail-capable image extension."""
    return Path(name).suffix.lower() in THUMBNAIL_EXTENSIONS


class PillowThumbnailDeriver(ThumbnailDeriver):
    """Resizes images to a fixed width, preserving the aspect ratio."""

    def __init__(
        self,
        output_dir: Path | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._output_dir = output_dir
        self._clock = clock

    async def derive(self, source: str, target_width: int = DEFAULT_THUMBNAIL_WIDTH) -> Path:
        return await asyncio.to_thread(self._derive, Path(source), target_width)

    def _derive(self, source: Path, target_width: int) -> Path:
        extension = source.suffix.lower()
        if extension not in THUMBNAIL_EXTENSIONS:
            raise ThumbnailError(str(source), f"unsupported image format '{extension}'")

        output_dir = self._output_dir or Path(tempfile.gettempdir())
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        target = output_dir / f"{source.stem}_{timestamp}_{target_width}{source.suffix}"

        try:
            with Image.open(source) as image:
                width, height = image.size
                if width > target_width:
                    target_height = max(1, round(height * target_width / width))
                    resized = image.resize(
                        (target_width, target_height), Image.Resampling.LANCZOS
                    )
                else:
                    resized = image.copy()

                if extension in (".jpg", ".jpeg") and resized.mode not in ("RGB", "L"):
                    resized = resized.convert("RGB")
                resized.save(target)
        except (OSError, UnidentifiedImageError, ValueError) as e:
            target.unlink(missing_ok=True)
            raise ThumbnailError(str(source), str(e), e) from e

        logger.info(
            "Thumbnail generated",
            extra={"source": str(source), "thumbnail": str(target), "width": resized.width},
        )
        return target
