"""Abstract interface for upload backends."""

from abc import ABC, abstractmethod

from blob_uploader.domain.models import FileDescriptor, UploadResult
from blob_uploader.domain.progress import ProgressSink


class StorageBackend(ABC):
    """Transfers a file and returns where it can be reached."""

    @abstractmethod
    async def upload(
        self, file: FileDescriptor, on_progress: ProgressSink | None = None
    ) -> UploadResult:
        """
        Uploads a file and, for images, a companion thumbnail.

        Args:
            file: The file to upload.
            on_progress: Optional sink for progress events.

        Returns:
            The upload result; thumbnail_url is None if no thumbnail was stored.

        Raises:
            ContainerAccessError: If the container cannot be reached or created.
            NameResolutionExhaustedError: If no free remote name exists.
            TransferError: If the primary transfer fails.
        """
