"""Abstract interfaces for the remote object namespace."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import BinaryIO


class ExistsProbe(ABC):
    """Answers whether an object path is already taken."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """
        Checks whether an object exists at the given path.

        Args:
            path: Object path inside the container.

        Raises:
            ContainerAccessError: If the probe itself fails.
        """


class ObjectStore(ExistsProbe, ABC):
    """Abstract base class for a single storage container."""

    @property
    @abstractmethod
    def container_name(self) -> str:
        """Name of the container this store writes to."""

    @abstractmethod
    async def ensure_container(self) -> None:
        """
        Ensures the container exists, creating it if necessary.

        Creation that loses a race with another caller counts as success.

        Raises:
            ContainerAccessError: If the container cannot be probed or created.
        """

    @abstractmethod
    async def put(
        self,
        path: str,
        data: BinaryIO,
        size: int,
        content_type: str,
        on_bytes: Callable[[int], None] | None = None,
    ) -> None:
        """
        Stores an object.

        Args:
            path: Destination object path.
            data: File-like object containing the data.
            size: Size of the data in bytes.
            content_type: MIME type recorded on the object.
            on_bytes: Called with the size of each chunk as it is sent.

        Raises:
            TransferError: If the upload fails.
        """

    @abstractmethod
    def object_url(self, path: str) -> str:
        """Returns the native public URL of an object path."""
