"""File schemas for API validation."""

from datetime import datetime
from pydantic import BaseModel, Field

from app.models.database.file import Visibility


class FileResponse(BaseModel):
    """Schema for file response."""

    id: str
    owner_id: str
    filename: str
    mime_type: str | None
    size_bytes: int
    content_hash: str
    visibility: Visibility
    category_id: int | None
    storage_provider: str
    is_shared: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FileUpdate(BaseModel):
    """Schema for updating file metadata.

    ``category_id`` set to null detaches the file from its category; leaving
    it out keeps the current one.
    """

    filename: str | None = Field(None, min_length=1, max_length=255)
    visibility: Visibility | None = None
    category_id: int | None = None


class FileListResponse(BaseModel):
    """Schema for a page of the owner's files."""

    files: list[FileResponse]
    total: int
    page: int
    total_pages: int


class DownloadUrlResponse(BaseModel):
    """Schema for a signed download URL."""

    url: str
    expires_in: int


class DownloadedFile(BaseModel):
    """File content ready to be streamed back to a client."""

    content: bytes
    filename: str
    mime_type: str | None = None
