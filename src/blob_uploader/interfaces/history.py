"""Abstract interface for upload history persistence."""

from abc import ABC, abstractmethod

from blob_uploader.domain.models import UploadResult


class HistorySink(ABC):
    """Abstract base class for upload history stores."""

    @abstractmethod
    async def save_history(self, result: UploadResult) -> None:
        """
        Records a completed upload.

        Raises:
            RepositoryError: If the record cannot be written.
        """

    @abstractmethod
    async def get_history(self) -> list[UploadResult]:
        """
        Returns recorded uploads, oldest first.

        Raises:
            RepositoryError: If the records cannot be read.
        """

    @abstractmethod
    async def delete_history(self, url: str) -> None:
        """
        Removes every record of the upload at ``url``.

        Raises:
            RepositoryError: If the records cannot be deleted.
        """
