"""File upload endpoint."""

import asyncio
import shutil
import tempfile
from pathlib import Path
from typing import Annotated, BinaryIO

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from blob_uploader.config import AppConfig
from blob_uploader.dependencies import get_config, get_orchestrator
from blob_uploader.domain import UploadProgressEvent
from blob_uploader.exceptions import ErrorKind
from blob_uploader.handlers import UploadOrchestrator
from blob_uploader.infrastructure import describe_local_file
from blob_uploader.logging import setup_logging
from blob_uploader.response_models import UploadResponse

logger = setup_logging()

router = APIRouter(prefix="/uploads", tags=["uploads"])

OrchestratorDep = Annotated[UploadOrchestrator, Depends(get_orchestrator)]
ConfigDep = Annotated[AppConfig, Depends(get_config)]

STATUS_BY_KIND = {
    ErrorKind.SIZE_EXCEEDED: 413,
    ErrorKind.UNSUPPORTED_FORMAT: 415,
    ErrorKind.NAME_RESOLUTION_EXHAUSTED: 409,
    ErrorKind.CONTAINER_ACCESS: 502,
    ErrorKind.TRANSFER: 502,
    ErrorKind.REPOSITORY: 500,
}


def _safe_file_name(raw: str | None) -> str:
    """Returns the plain file name of an upload, or raises a 422."""
    file_name = Path(raw or "").name
    if file_name in ("", ".", "..") or "\\" in file_name:
        raise HTTPException(status_code=422, detail="A plain file name is required")
    return file_name


def _spool(data: BinaryIO, target: Path) -> None:
    with target.open("wb") as out:
        shutil.copyfileobj(data, out)


def _log_progress(event: UploadProgressEvent) -> None:
    logger.info(
        "Upload progress",
        extra={
            "file_name": event.file_name,
            "bytes_transferred": event.bytes_transferred,
            "total_bytes": event.total_bytes,
            "percentage": event.percentage,
        },
    )


@router.post("", response_model=UploadResponse, status_code=201)
async def upload_file(
    file: UploadFile,
    orchestrator: OrchestratorDep,
    config: ConfigDep,
) -> UploadResponse:
    """
    Uploads a file to storage and records it in the history.

    A file that reaches storage but cannot be recorded is still reported as
    created, with ``recorded`` set to false.
    """
    file_name = _safe_file_name(file.filename)

    tmp_dir = await asyncio.to_thread(tempfile.mkdtemp)
    try:
        local_path = Path(tmp_dir) / file_name
        await asyncio.to_thread(_spool, file.file, local_path)
        descriptor = await asyncio.to_thread(describe_local_file, local_path)
        if file.content_type and file.content_type != "application/octet-stream":
            descriptor = descriptor.model_copy(update={"mime_type": file.content_type})

        outcome = await orchestrator.upload(
            descriptor, config.policy, config.storage, on_progress=_log_progress
        )
    finally:
        await asyncio.to_thread(shutil.rmtree, tmp_dir, ignore_errors=True)

    if not outcome.uploaded:
        raise HTTPException(
            status_code=STATUS_BY_KIND[outcome.error.kind],
            detail=outcome.error.message,
        )

    return UploadResponse(
        result=outcome.result,
        used_simulated=outcome.used_simulated,
        recorded=outcome.recorded,
        warning=outcome.error.message if outcome.error else None,
    )
