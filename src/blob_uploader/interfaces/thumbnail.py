"""Abstract interface for thumbnail derivation."""

from abc import ABC, abstractmethod
from pathlib import Path

DEFAULT_THUMBNAIL_WIDTH = 320


class ThumbnailDeriver(ABC):
    """Produces a resized companion image for an image file."""

    @abstractmethod
    async def derive(self, source: str, target_width: int = DEFAULT_THUMBNAIL_WIDTH) -> Path:
        """
        Writes a thumbnail of ``source`` to a local temporary file.

        The caller owns the returned file and must delete it.

        Args:
            source: Local path of a .jpg, .jpeg or .png image.
            target_width: Width of the thumbnail; narrower sources keep their width.

        Returns:
            Path of the generated thumbnail.

        Raises:
            ThumbnailError: If the thumbnail cannot be produced.
        """
