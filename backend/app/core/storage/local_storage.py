"""Local filesystem blob store."""

import asyncio
import logging
import os
from pathlib import Path
from urllib.parse import quote, urlencode

from app.core.errors import NotFoundError, StorageBackendError
from app.core.security.signing import UrlSigner
from app.core.storage.blob_store import BlobNotFoundError, BlobStore, StoredBlob
from app.core.storage.paths import generate_storage_path, sanitize_filename

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """Store blobs under a base directory on local disk.

    Signed URLs point at this API's ``/blobs`` route and carry an HMAC over
    the path and expiry.
    """

    provider = "local"

    def __init__(self, base_path: str, signer: UrlSigner, public_base_url: str):
        """
        Initialize local storage.

        Args:
            base_path: Base directory for blob storage
            signer: Signer used for download URLs
            public_base_url: Externally reachable API prefix, e.g. ``https://host/api/v1``
        """
        self.base_path = Path(base_path).resolve()
        self.signer = signer
        self.public_base_url = public_base_url.rstrip("/")

    async def initialize(self) -> None:
        await asyncio.to_thread(self.base_path.mkdir, parents=True, exist_ok=True)
        logger.info("Local storage initialized at %s", self.base_path)

    def _full_path(self, path: str) -> Path:
        """Resolve a relative storage path, refusing anything outside the base."""
        full_path = (self.base_path / path).resolve()
        if full_path != self.base_path and self.base_path not in full_path.parents:
            raise NotFoundError("File content not found")
        return full_path

    def _write_new(self, owner_id: str, filename: str, data: bytes) -> str:
        safe_filename = sanitize_filename(filename)
        relative_path = generate_storage_path(owner_id, safe_filename)
        full_path = self._full_path(relative_path)

        # Handle duplicate filenames
        if full_path.exists():
            base, ext = os.path.splitext(safe_filename)
            counter = 1
            while full_path.exists():
                relative_path = generate_storage_path(owner_id, f"{base}_{counter}{ext}")
                full_path = self._full_path(relative_path)
                counter += 1

        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(data)
        return relative_path

    async def put(
        self,
        owner_id: str,
        filename: str,
        data: bytes,
        mime_type: str | None = None,
    ) -> StoredBlob:
        try:
            path = await asyncio.to_thread(self._write_new, owner_id, filename, data)
        except OSError as e:
            logger.error("Local upload failed for owner %s: %s", owner_id, e)
            raise StorageBackendError("Failed to store file") from e

        logger.info("Stored blob locally: %s", path)
        return StoredBlob(path=path, provider=self.provider)

    async def get(self, path: str) -> bytes:
        full_path = self._full_path(path)
        try:
            return await asyncio.to_thread(full_path.read_bytes)
        except FileNotFoundError as e:
            raise BlobNotFoundError() from e
        except OSError as e:
            logger.error("Local read failed for %s: %s", path, e)
            raise StorageBackendError("Failed to read file") from e

    async def delete(self, path: str) -> None:
        full_path = self._full_path(path)
        try:
            await asyncio.to_thread(full_path.unlink, missing_ok=True)
        except OSError as e:
            logger.error("Local delete failed for %s: %s", path, e)
            raise StorageBackendError("Failed to delete file") from e

        logger.info("Deleted local blob: %s", path)

    async def sign(self, path: str, ttl_seconds: int) -> str:
        expires, signature = self.signer.sign(path, ttl_seconds)
        query = urlencode({"expires": expires, "signature": signature})
        return f"{self.public_base_url}/blobs/{quote(path)}?{query}"

    async def exists(self, path: str) -> bool:
        try:
            full_path = self._full_path(path)
        except NotFoundError:
            return False
        return await asyncio.to_thread(full_path.is_file)

    async def read_signed(self, path: str, expires: int, signature: str) -> bytes:
        if not self.signer.verify(path, expires, signature):
            raise NotFoundError("Download link is invalid or has expired")
        return await self.get(path)
