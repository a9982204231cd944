"""API route exports."""

from .history import router as history_router
from .uploads import router as upload_router

__all__ = ["history_router", "upload_router"]
