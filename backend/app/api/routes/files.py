"""File API routes."""

from fastapi import APIRouter, Depends, Form, Query, UploadFile, status
from fastapi import File as FormFile

from app.api.deps import get_current_user, get_file_service, get_settings
from app.api.rate_limit import upload_rate_limit
from app.api.responses import attachment_response
from app.core.config import Settings
from app.models.database import User, Visibility
from app.models.schemas import (
    DownloadUrlResponse,
    FileListResponse,
    FileResponse,
    FileUpdate,
)
from app.services import FileService

router = APIRouter(prefix="/files", tags=["files"])


@router.post(
    "/upload",
    response_model=FileResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(upload_rate_limit)],
)
async def upload_file(
    file: UploadFile = FormFile(...),
    filename: str | None = Form(None),
    category_id: int | None = Form(None),
    visibility: Visibility = Form(Visibility.PRIVATE),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
    settings: Settings = Depends(get_settings),
):
    """Upload a file for the authenticated user."""
    # One byte past the limit is enough to reject an oversized upload
    data = await file.read(settings.max_upload_size_bytes + 1)

    record = await service.upload_file(
        owner_id=current_user.id,
        data=data,
        filename=filename or file.filename or "",
        mime_type=file.content_type,
        category_id=category_id,
        visibility=visibility,
    )
    return FileResponse.model_validate(record)


@router.get("", response_model=FileListResponse)
async def list_files(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category_id: int | None = None,
    search: str | None = Query(None, max_length=255),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """List the user's files, newest first."""
    files, total, page, total_pages = await service.list_files(
        current_user.id,
        page=page,
        limit=limit,
        category_id=category_id,
        search=search,
    )
    return FileListResponse(
        files=[FileResponse.model_validate(f) for f in files],
        total=total,
        page=page,
        total_pages=total_pages,
    )


@router.get("/{file_id}", response_model=FileResponse)
async def get_file(
    file_id: str,
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Get file metadata."""
    return FileResponse.model_validate(await service.get_file(file_id, current_user.id))


@router.get("/{file_id}/download")
async def download_file(
    file_id: str,
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Download one of the user's files."""
    return attachment_response(await service.download_file(file_id, current_user.id))


@router.get("/{file_id}/url", response_model=DownloadUrlResponse)
async def get_download_url(
    file_id: str,
    expires_in: int | None = Query(None, ge=1),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Get a signed, time-limited download URL."""
    return await service.get_download_url(file_id, current_user.id, expires_in)


@router.patch("/{file_id}", response_model=FileResponse)
async def update_file(
    file_id: str,
    data: FileUpdate,
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Rename, recategorize or change the visibility of a file."""
    return FileResponse.model_validate(await service.update_file(file_id, current_user.id, data))


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    file_id: str,
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Delete a file and its stored content."""
    await service.delete_file(file_id, current_user.id)
