"""Application configuration loaded from environment variables."""

import os
from urllib.parse import unquote, urlsplit

from pydantic import BaseModel, computed_field, field_validator

from blob_uploader.domain import UploadPolicy


class StorageConfig(BaseModel, frozen=True):
    """
    Object storage connection configuration.

    ``connection_string`` has the form
    ``http(s)://ACCESS_KEY:SECRET_KEY@host[:port]``. An empty value means no
    storage is configured and uploads are simulated.
    """

    connection_string: str = ""
    container_name: str = "uploads"
    base_url: str | None = None

    @field_validator("connection_string")
    @classmethod
    def _check_connection_string(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return value
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError("connection string must be an http(s) URL with a host")
        if not parts.username or parts.password is None:
            raise ValueError("connection string must carry ACCESS_KEY:SECRET_KEY")
        return value

    @field_validator("base_url")
    @classmethod
    def _blank_base_url_is_unset(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @computed_field
    @property
    def is_configured(self) -> bool:
        return bool(self.connection_string)

    @property
    def endpoint(self) -> str:
        """``host[:port]`` as the MinIO client expects it."""
        parts = urlsplit(self.connection_string)
        return f"{parts.hostname}:{parts.port}" if parts.port else parts.hostname

    @property
    def secure(self) -> bool:
        return urlsplit(self.connection_string).scheme == "https"

    @property
    def access_key(self) -> str:
        return unquote(urlsplit(self.connection_string).username or "")

    @property
    def secret_key(self) -> str:
        return unquote(urlsplit(self.connection_string).password or "")

    @property
    def endpoint_url(self) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}"


class HistoryConfig(BaseModel, frozen=True):
    """Upload history database configuration."""

    database_url: str = "sqlite:///upload_history.db"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    storage: StorageConfig
    policy: UploadPolicy
    history: HistoryConfig
    simulated_step_delay: float = 0.2


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        storage=StorageConfig(
            connection_string=os.getenv("STORAGE_CONNECTION_STRING", ""),
            container_name=os.getenv("STORAGE_CONTAINER_NAME", "uploads"),
            base_url=os.getenv("STORAGE_BASE_URL"),
        ),
        policy=UploadPolicy(
            max_size_bytes=int(os.getenv("MAX_FILE_SIZE_BYTES", "10485760")),
            image_formats=os.getenv("SUPPORTED_IMAGE_FORMATS", "jpg,jpeg,png"),
            document_formats=os.getenv("SUPPORTED_DOCUMENT_FORMATS", "pdf"),
        ),
        history=HistoryConfig(
            database_url=os.getenv("HISTORY_DATABASE_URL", "sqlite:///upload_history.db"),
        ),
        simulated_step_delay=float(os.getenv("SIMULATED_STEP_DELAY_SECONDS", "0.2")),
    )
