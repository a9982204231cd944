"""SQLModel implementation of the HistorySink interface."""

import asyncio

from sqlmodel import select

from blob_uploader.db_models import UploadHistoryEntry
from blob_uploader.domain import FileDescriptor, UploadResult
from blob_uploader.exceptions import RepositoryError
from blob_uploader.interfaces import HistorySink
from blob_uploader.logging import setup_logging

logger = setup_logging()


class SqlHistoryRepository(HistorySink):
    """
    Stores upload history in a SQL database.

    Each save appends a row, so the same URL may appear more than once;
    deleting by URL removes all of them. Reads return rows in insertion
    order.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    async def save_history(self, result: UploadResult) -> None:
        await asyncio.to_thread(self._save, result)

    async def get_history(self) -> list[UploadResult]:
        return await asyncio.to_thread(self._list)

    async def delete_history(self, url: str) -> None:
        await asyncio.to_thread(self._delete, url)

    def _save(self, result: UploadResult) -> None:
        try:
            with self._session_factory() as db_session:
                db_session.add(_to_entry(result))
                db_session.commit()
            logger.info("Upload recorded", extra={"url": result.url})
        except Exception as e:
            logger.exception("Failed to record upload", extra={"url": result.url})
            raise RepositoryError("save", e) from e

    def _list(self) -> list[UploadResult]:
        try:
            with self._session_factory() as db_session:
                statement = select(UploadHistoryEntry).order_by(UploadHistoryEntry.id)
                entries = db_session.exec(statement).all()
                return [_to_result(entry) for entry in entries]
        except Exception as e:
            logger.exception("Failed to read upload history")
            raise RepositoryError("read", e) from e

    def _delete(self, url: str) -> None:
        try:
            with self._session_factory() as db_session:
                statement = select(UploadHistoryEntry).where(UploadHistoryEntry.url == url)
                for entry in db_session.exec(statement).all():
                    db_session.delete(entry)
                db_session.commit()
            logger.info("Upload history entry deleted", extra={"url": url})
        except Exception as e:
            logger.exception("Failed to delete upload history", extra={"url": url})
            raise RepositoryError("delete", e) from e


def _to_entry(result: UploadResult) -> UploadHistoryEntry:
    return UploadHistoryEntry(
        file_name=result.file.name,
        source=result.file.source,
        size=result.file.size,
        mime_type=result.file.mime_type,
        last_modified=result.file.last_modified,
        url=result.url,
        thumbnail_url=result.thumbnail_url,
        uploaded_at=result.uploaded_at,
    )


def _to_result(entry: UploadHistoryEntry) -> UploadResult:
    return UploadResult(
        file=FileDescriptor(
            name=entry.file_name,
            source=entry.source,
            size=entry.size,
            mime_type=entry.mime_type,
            last_modified=entry.last_modified,
        ),
        url=entry.url,
        thumbnail_url=entry.thumbnail_url,
        uploaded_at=entry.uploaded_at,
    )
