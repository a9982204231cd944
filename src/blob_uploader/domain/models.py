"""Domain models for file uploads."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, PositiveInt, field_validator

from blob_uploader.exceptions import ErrorKind


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive values are taken to be UTC already.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class FileDescriptor(BaseModel, frozen=True):
    """A file selected for upload, described before any I/O happens."""

    name: str = Field(min_length=1)
    source: str
    size: int = Field(ge=0)
    mime_type: str
    last_modified: datetime

    @field_validator("name")
    @classmethod
    def _reject_path_separators(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("file name must not contain path separators")
        return value

    @field_validator("last_modified")
    @classmethod
    def _last_modified_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def extension(self) -> str:
        """Lower-cased text after the last dot of the name, empty if none."""
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""


def _normalize_formats(values) -> frozenset[str]:
    if isinstance(values, str):
        values = values.split(",")
    return frozenset(v.strip().lstrip(".").lower() for v in values if v.strip())


class UploadPolicy(BaseModel, frozen=True):
    """Size and format limits applied before an upload starts."""

    max_size_bytes: PositiveInt = 10 * 1024 * 1024
    image_formats: frozenset[str] = frozenset({"jpg", "jpeg", "png"})
    document_formats: frozenset[str] = frozenset({"pdf"})

    @field_validator("image_formats", "document_formats", mode="before")
    @classmethod
    def _normalize(cls, value):
        return _normalize_formats(value)

    def accepts(self, extension: str) -> bool:
        return extension in self.image_formats or extension in self.document_formats


class UploadProgressEvent(BaseModel, frozen=True):
    """Byte progress of a single in-flight transfer."""

    bytes_transferred: int = Field(ge=0)
    total_bytes: int = Field(ge=0)
    file_name: str
    percentage: int = Field(ge=0, le=100)

    @classmethod
    def measure(
        cls, file_name: str, bytes_transferred: int, total_bytes: int
    ) -> "UploadProgressEvent":
        """Builds an event with the percentage floored from the byte counts."""
        if total_bytes == 0:
            percentage = 100
        else:
            percentage = bytes_transferred * 100 // total_bytes
        return cls(
            bytes_transferred=bytes_transferred,
            total_bytes=total_bytes,
            file_name=file_name,
            percentage=percentage,
        )


class UploadResult(BaseModel, frozen=True):
    """A completed upload, as persisted to history."""

    file: FileDescriptor
    url: str
    thumbnail_url: str | None = None
    uploaded_at: datetime

    @field_validator("uploaded_at")
    @classmethod
    def _uploaded_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class UploadFailure(BaseModel, frozen=True):
    """Error kind and message of a failed orchestration."""

    kind: ErrorKind
    message: str


class UploadOutcome(BaseModel, frozen=True):
    """
    Result of one orchestration call.

    ``result`` is set whenever the file is live remotely. A failed outcome
    with a result means the upload succeeded but could not be recorded.
    """

    success: bool
    result: UploadResult | None = None
    used_simulated: bool = False
    error: UploadFailure | None = None

    @classmethod
    def succeeded(cls, result: UploadResult, used_simulated: bool) -> "UploadOutcome":
        return cls(success=True, result=result, used_simulated=used_simulated)

    @classmethod
    def failed(
        cls,
        kind: ErrorKind,
        message: str,
        result: UploadResult | None = None,
        used_simulated: bool = False,
    ) -> "UploadOutcome":
        return cls(
            success=False,
            result=result,
            used_simulated=used_simulated,
            error=UploadFailure(kind=kind, message=message),
        )

    @property
    def uploaded(self) -> bool:
        return self.result is not None

    @property
    def recorded(self) -> bool:
        return self.success
