"""Abstract interface for reading file content."""

from abc import ABC, abstractmethod


class ByteSource(ABC):
    """Resolves a file handle to its bytes."""

    @abstractmethod
    async def read(self, handle: str) -> bytes:
        """
        Reads the full content behind a handle.

        Raises:
            OSError: If the content cannot be read.
        """
