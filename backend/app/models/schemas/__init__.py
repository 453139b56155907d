"""API schemas."""

from app.models.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from app.models.schemas.file import (
    DownloadedFile,
    DownloadUrlResponse,
    FileListResponse,
    FileResponse,
    FileUpdate,
)
from app.models.schemas.share import (
    PublicFileInfo,
    PublicFileListResponse,
    PublicListedFile,
    ShareCreate,
    ShareInfo,
    SharedDownloadRequest,
    SharedUrlResponse,
    ShareStatusResponse,
)
from app.models.schemas.user import (
    SettingsResponse,
    SettingsUpdate,
    StorageUsageResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryListResponse",
    "CategoryResponse",
    "CategoryUpdate",
    "DownloadedFile",
    "DownloadUrlResponse",
    "FileListResponse",
    "FileResponse",
    "FileUpdate",
    "PublicFileInfo",
    "PublicFileListResponse",
    "PublicListedFile",
    "SettingsResponse",
    "SettingsUpdate",
    "ShareCreate",
    "ShareInfo",
    "SharedDownloadRequest",
    "SharedUrlResponse",
    "ShareStatusResponse",
    "StorageUsageResponse",
    "UserResponse",
    "UserUpdate",
]
