"""Blob storage capability interface and provider selection."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from app.core.errors import NotFoundError


class StoredBlob(BaseModel):
    """Handle returned by ``BlobStore.put``."""

    path: str
    provider: str


class BlobNotFoundError(NotFoundError):
    default_message = "File content not found"


class BlobStore(ABC):
    """Async blob storage used by the file and share services.

    Implementations raise ``BlobNotFoundError`` for missing paths and
    ``StorageBackendError`` for anything else that goes wrong in the backend.
    """

    provider: str

    async def initialize(self) -> None:
        """Prepare the backend at startup (create directories, buckets)."""
        pass

    @abstractmethod
    async def put(
        self,
        owner_id: str,
        filename: str,
        data: bytes,
        mime_type: str | None = None,
    ) -> StoredBlob:
        """Store bytes for an owner and return their location."""
        pass

    @abstractmethod
    async def get(self, path: str) -> bytes:
        """Read a blob."""
        pass

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete a blob. Deleting a missing blob is not an error."""
        pass

    @abstractmethod
    async def sign(self, path: str, ttl_seconds: int) -> str:
        """Mint a time-limited direct download URL."""
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check whether a blob exists."""
        pass

    async def read_signed(self, path: str, expires: int, signature: str) -> bytes:
        """
        Serve a URL minted by ``sign``.

        Only stores whose URLs point back at this API implement this; object
        stores hand out URLs that the provider serves directly.
        """
        raise NotFoundError("Signed URL not served by this API")


def create_blob_store(settings) -> BlobStore:
    """Build the blob store selected by ``settings.storage_provider``."""
    if settings.storage_provider == "local":
        from app.core.security.signing import UrlSigner
        from app.core.storage.local_storage import LocalBlobStore

        return LocalBlobStore(
            base_path=settings.local_storage_path,
            signer=UrlSigner(settings.signing_secret),
            public_base_url=settings.public_api_url,
        )
    if settings.storage_provider == "s3":
        from app.core.storage.object_storage import ObjectBlobStore

        return ObjectBlobStore.from_settings(settings)

    raise ValueError(f"Unknown storage provider: {settings.storage_provider}")
