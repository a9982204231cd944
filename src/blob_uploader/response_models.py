"""Response models for the uploader API."""

from pydantic import BaseModel

from blob_uploader.domain import UploadResult


class UploadResponse(BaseModel):
    """Response returned once a file is live in storage."""

    result: UploadResult
    used_simulated: bool
    recorded: bool
    warning: str | None = None
