"""Serves signed blob URLs minted by stores that route downloads through the API."""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_blob_store
from app.api.responses import attachment_response
from app.core.storage.blob_store import BlobStore
from app.models.schemas import DownloadedFile

router = APIRouter(prefix="/blobs", tags=["blobs"])


@router.get("/{path:path}")
async def read_signed_blob(
    path: str,
    expires: int = Query(...),
    signature: str = Query(..., min_length=1),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Download a blob through a signed URL."""
    content = await blob_store.read_signed(path, expires, signature)
    filename = path.rsplit("/", 1)[-1]
    return attachment_response(DownloadedFile(content=content, filename=filename))
