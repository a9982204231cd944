from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class UploadHistoryEntry(SQLModel, table=True):
    __tablename__ = "upload_history"

    id: int | None = Field(default=None, primary_key=True)
    file_name: str = Field(max_length=255)
    source: str
    size: int
    mime_type: str = Field(max_length=255)
    last_modified: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    url: str = Field(index=True)
    thumbnail_url: str | None = None
    uploaded_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
