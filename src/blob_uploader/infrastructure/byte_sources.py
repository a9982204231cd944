"""ByteSource implementations and local file description."""

import asyncio
import mimetypes
from datetime import datetime, timezone
from pathlib import Path

from blob_uploader.domain import FileDescriptor
from blob_uploader.interfaces import ByteSource

DEFAULT_MIME_TYPE = "application/octet-stream"


class LocalFileByteSource(ByteSource):
    """Reads file content from the local filesystem."""

    async def read(self, handle: str) -> bytes:
        return await asyncio.to_thread(Path(handle).read_bytes)


class InMemoryByteSource(ByteSource):
    """Serves named in-memory buffers, such as captured clipboard images."""

    def __init__(self, buffers: dict[str, bytes] | None = None):
        self._buffers = dict(buffers or {})

    async def read(self, handle: str) -> bytes:
        try:
            return self._buffers[handle]
        except KeyError:
            raise FileNotFoundError(f"No buffer registered for '{handle}'") from None


def guess_mime_type(file_name: str) -> str:
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or DEFAULT_MIME_TYPE


def describe_local_file(path: str | Path, name: str | None = None) -> FileDescriptor:
    """
    Builds a FileDescriptor for a file on disk.

    Args:
        path: Location of the file.
        name: Name to upload under; defaults to the file's own name.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    resolved = Path(path).resolve()
    stat = resolved.stat()
    file_name = name or resolved.name
    return FileDescriptor(
        name=file_name,
        source=str(resolved),
        size=stat.st_size,
        mime_type=guess_mime_type(file_name),
        last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )
