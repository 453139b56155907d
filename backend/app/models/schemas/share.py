"""Share link schemas."""

from datetime import datetime
from pydantic import BaseModel, Field


class ShareCreate(BaseModel):
    """Options for creating (or rotating) a share link."""

    expires_in_seconds: int | None = Field(
        None,
        gt=0,
        le=10 * 365 * 24 * 3600,
        description="Lifetime of the link in seconds; omit for a permanent link",
    )
    password: str | None = Field(
        None, min_length=1, max_length=128, description="Password required to download"
    )
    max_downloads: int | None = Field(
        None,
        ge=1,
        le=2**31 - 1,
        description="Number of downloads allowed before the link is exhausted",
    )


class ShareInfo(BaseModel):
    """Owner view of a file's share link."""

    share_token: str
    share_url: str
    expires_at: datetime | None
    has_password: bool
    max_downloads: int | None
    downloads: int
    is_expired: bool = False
    is_exhausted: bool = False


class ShareStatusResponse(BaseModel):
    """Share state of a file; ``share`` is null when the file is not shared."""

    shared: bool
    share: ShareInfo | None = None


class PublicFileInfo(BaseModel):
    """Anonymous view of a shared file."""

    id: str
    filename: str
    mime_type: str | None
    size_bytes: int
    created_at: datetime
    has_password: bool
    owner_username: str | None


class PublicListedFile(PublicFileInfo):
    """Entry of the public file listing, linkable through its token."""

    share_token: str


class PublicFileListResponse(BaseModel):
    """Page of publicly listed files."""

    files: list[PublicListedFile]
    total: int
    page: int
    total_pages: int


class SharedDownloadRequest(BaseModel):
    """Body for password-gated downloads."""

    password: str | None = None


class SharedUrlResponse(BaseModel):
    """Signed URL minted for a shared file."""

    url: str
    expires_in: int
