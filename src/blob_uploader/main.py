"""FastAPI application entry point."""

from ddtrace import patch_all
from fastapi import FastAPI

from blob_uploader.routes import history_router, upload_router

patch_all()

app = FastAPI(title="Blob Uploader")
app.include_router(upload_router)
app.include_router(history_router)
