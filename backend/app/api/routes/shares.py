"""Share link routes.

Owner routes manage the link of a file; the public routes below them need
no credentials and go through the share access checks.
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_current_user, get_share_service
from app.api.rate_limit import share_access_rate_limit
from app.api.responses import attachment_response
from app.models.database import User
from app.models.schemas import (
    PublicFileInfo,
    PublicFileListResponse,
    ShareCreate,
    ShareInfo,
    SharedDownloadRequest,
    SharedUrlResponse,
    ShareStatusResponse,
)
from app.services import ShareService

router = APIRouter(tags=["shares"])


# Owner endpoints
@router.post(
    "/files/{file_id}/share", response_model=ShareInfo, status_code=status.HTTP_201_CREATED
)
async def create_share_link(
    file_id: str,
    options: ShareCreate | None = None,
    current_user: User = Depends(get_current_user),
    service: ShareService = Depends(get_share_service),
):
    """Create a share link, rotating any existing one."""
    return await service.create_share(file_id, current_user.id, options or ShareCreate())


@router.get("/files/{file_id}/share", response_model=ShareStatusResponse)
async def get_share_info(
    file_id: str,
    current_user: User = Depends(get_current_user),
    service: ShareService = Depends(get_share_service),
):
    """Get the share state of a file."""
    share = await service.get_share_info(file_id, current_user.id)
    return ShareStatusResponse(shared=share is not None, share=share)


@router.delete("/files/{file_id}/share", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_share_link(
    file_id: str,
    current_user: User = Depends(get_current_user),
    service: ShareService = Depends(get_share_service),
):
    """Revoke the share link of a file."""
    await service.revoke_share(file_id, current_user.id)


# Public endpoints
@router.get("/public/files", response_model=PublicFileListResponse)
async def list_public_files(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    service: ShareService = Depends(get_share_service),
):
    """List public files without a password or past expiry."""
    return await service.list_public_files(page=page, limit=limit)


@router.get("/share/{token}", response_model=PublicFileInfo)
async def get_public_file_info(
    token: str,
    service: ShareService = Depends(get_share_service),
):
    """Get public metadata for a share link."""
    return await service.resolve_public_metadata(token)


@router.get("/share/{token}/download", dependencies=[Depends(share_access_rate_limit)])
async def download_shared_file(
    token: str,
    password: str | None = None,
    service: ShareService = Depends(get_share_service),
):
    """Download a shared file, password in the query string."""
    return attachment_response(await service.download_shared(token, password))


@router.post("/share/{token}/download", dependencies=[Depends(share_access_rate_limit)])
async def download_shared_file_with_password(
    token: str,
    body: SharedDownloadRequest | None = None,
    service: ShareService = Depends(get_share_service),
):
    """Download a shared file, password in the request body."""
    password = body.password if body else None
    return attachment_response(await service.download_shared(token, password))


@router.get(
    "/share/{token}/url",
    response_model=SharedUrlResponse,
    dependencies=[Depends(share_access_rate_limit)],
)
async def get_shared_file_url(
    token: str,
    password: str | None = None,
    expires_in: int | None = Query(None, ge=1),
    service: ShareService = Depends(get_share_service),
):
    """Get a signed URL for a shared file."""
    return await service.get_shared_file_url(token, password, expires_in)
