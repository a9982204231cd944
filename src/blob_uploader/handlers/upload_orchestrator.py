"""Orchestrates validation, upload and history recording."""

from collections.abc import Callable

from blob_uploader.config import StorageConfig
from blob_uploader.domain import (
    FileDescriptor,
    PolicyValidator,
    ProgressSink,
    UploadOutcome,
    UploadPolicy,
    UploadResult,
)
from blob_uploader.exceptions import ErrorKind, PolicyViolation, RepositoryError, UploaderError
from blob_uploader.interfaces import HistorySink, StorageBackend
from blob_uploader.logging import setup_logging

logger = setup_logging()

BackendFactory = Callable[[StorageConfig], StorageBackend]


class UploadOrchestrator:
    """Runs one upload end to end and reports it as an UploadOutcome."""

    def __init__(
        self,
        history: HistorySink,
        backend_factory: BackendFactory,
        simulated_backend: StorageBackend,
        validator: PolicyValidator | None = None,
    ):
        self._history = history
        self._backend_factory = backend_factory
        self._simulated_backend = simulated_backend
        self._validator = validator or PolicyValidator()

    def select_backend(self, storage: StorageConfig) -> tuple[StorageBackend, bool]:
        """Returns the backend to use and whether it is the simulated one."""
        if not storage.is_configured:
            return self._simulated_backend, True
        return self._backend_factory(storage), False

    async def upload(
        self,
        file: FileDescriptor,
        policy: UploadPolicy,
        storage: StorageConfig,
        on_progress: ProgressSink | None = None,
    ) -> UploadOutcome:
        """
        Validates, uploads and records a file.

        Policy violations return before any backend is involved. A history
        failure after a successful upload returns a failed outcome that
        still carries the result, since the file is already live.

        Args:
            file: The file to upload.
            policy: Size and format limits for this upload.
            storage: Storage settings; an empty credential selects simulation.
            on_progress: Optional sink for transfer progress.
        """
        try:
            self._validator.validate(file, policy)
        except PolicyViolation as e:
            logger.info(
                "Upload rejected by policy",
                extra={"file_name": file.name, "kind": e.kind.value, "reason": e.message},
            )
            return UploadOutcome.failed(e.kind, e.message)

        backend, used_simulated = self.select_backend(storage)
        logger.info(
            "Upload started",
            extra={
                "file_name": file.name,
                "size": file.size,
                "simulated": used_simulated,
                "container": storage.container_name,
            },
        )

        try:
            result = await backend.upload(file, on_progress)
        except UploaderError as e:
            logger.error(
                "Upload failed",
                extra={"file_name": file.name, "kind": e.kind.value, "reason": e.message},
            )
            return UploadOutcome.failed(e.kind, e.message, used_simulated=used_simulated)

        try:
            await self._history.save_history(result)
        except RepositoryError as e:
            logger.error(
                "Upload succeeded but was not recorded",
                extra={"file_name": file.name, "url": result.url, "reason": e.message},
            )
            return UploadOutcome.failed(
                ErrorKind.REPOSITORY, e.message, result=result, used_simulated=used_simulated
            )

        return UploadOutcome.succeeded(result, used_simulated)

    async def get_history(self) -> list[UploadResult]:
        """Returns recorded uploads, oldest first."""
        return await self._history.get_history()

    async def delete_history(self, url: str) -> None:
        """Removes the history entries of an upload."""
        await self._history.delete_history(url)
