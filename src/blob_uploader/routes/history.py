"""Upload history endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Response

from blob_uploader.dependencies import get_orchestrator
from blob_uploader.domain import UploadResult
from blob_uploader.exceptions import RepositoryError
from blob_uploader.handlers import UploadOrchestrator
from blob_uploader.logging import setup_logging

logger = setup_logging()

router = APIRouter(prefix="/history", tags=["history"])

OrchestratorDep = Annotated[UploadOrchestrator, Depends(get_orchestrator)]


@router.get("", response_model=List[UploadResult])
async def list_history(orchestrator: OrchestratorDep):
    """Returns all recorded uploads, oldest first."""
    try:
        return await orchestrator.get_history()
    except RepositoryError as e:
        logger.error(f"Error reading upload history: {e}")
        raise HTTPException(status_code=500, detail="Could not read upload history")


@router.delete("", status_code=204)
async def delete_history(url: str, orchestrator: OrchestratorDep) -> Response:
    """Removes the history entries of the upload at ``url``."""
    try:
        await orchestrator.delete_history(url)
    except RepositoryError as e:
        logger.error(f"Error deleting upload history for {url}: {e}")
        raise HTTPException(status_code=500, detail="Could not delete upload history")
    return Response(status_code=204)
