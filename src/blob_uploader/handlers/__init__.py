"""Upload use case orchestration."""

from .upload_orchestrator import BackendFactory, UploadOrchestrator

__all__ = ["BackendFactory", "UploadOrchestrator"]
