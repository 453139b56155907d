"""S3-compatible object storage blob store (AWS S3, MinIO, ...)."""

import asyncio
import io
import logging
from datetime import timedelta

from minio import Minio
from minio.error import S3Error

from app.core.errors import StorageBackendError
from app.core.storage.blob_store import BlobNotFoundError, BlobStore, StoredBlob
from app.core.storage.paths import generate_storage_path, sanitize_filename

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = {"NoSuchKey", "NoSuchObject", "NotFound"}


class ObjectBlobStore(BlobStore):
    """Blob store backed by an S3-compatible bucket.

    The MinIO client is synchronous, so every call runs in a worker thread.
    """

    provider = "s3"

    def __init__(self, client: Minio, bucket: str):
        self._client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings) -> "ObjectBlobStore":
        client = Minio(
            endpoint=settings.s3_endpoint,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            secure=settings.s3_secure,
            region=settings.s3_region,
        )
        return cls(client, settings.s3_bucket)

    async def initialize(self) -> None:
        try:
            if not await asyncio.to_thread(self._client.bucket_exists, bucket_name=self.bucket):
                await asyncio.to_thread(self._client.make_bucket, bucket_name=self.bucket)
        except S3Error as e:
            logger.error("Could not prepare bucket %s: %s", self.bucket, e)
            raise StorageBackendError("Failed to initialize object storage") from e

        logger.info("Object storage initialized for bucket %s", self.bucket)

    async def put(
        self,
        owner_id: str,
        filename: str,
        data: bytes,
        mime_type: str | None = None,
    ) -> StoredBlob:
        path = generate_storage_path(owner_id, sanitize_filename(filename))
        try:
            await asyncio.to_thread(
                self._client.put_object,
                bucket_name=self.bucket,
                object_name=path,
                data=io.BytesIO(data),
                length=len(data),
                content_type=mime_type or "application/octet-stream",
            )
        except S3Error as e:
            logger.error("S3 upload failed for %s: %s", path, e)
            raise StorageBackendError("Failed to store file") from e

        logger.info("Stored blob in bucket %s: %s", self.bucket, path)
        return StoredBlob(path=path, provider=self.provider)

    def _read(self, path: str) -> bytes:
        response = self._client.get_object(bucket_name=self.bucket, object_name=path)
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()

    async def get(self, path: str) -> bytes:
        try:
            return await asyncio.to_thread(self._read, path)
        except S3Error as e:
            if e.code in MISSING_OBJECT_CODES:
                raise BlobNotFoundError() from e
            logger.error("S3 download failed for %s: %s", path, e)
            raise StorageBackendError("Failed to read file") from e

    async def delete(self, path: str) -> None:
        try:
            await asyncio.to_thread(
                self._client.remove_object, bucket_name=self.bucket, object_name=path
            )
        except S3Error as e:
            logger.error("S3 delete failed for %s: %s", path, e)
            raise StorageBackendError("Failed to delete file") from e

        logger.info("Deleted blob from bucket %s: %s", self.bucket, path)

    async def sign(self, path: str, ttl_seconds: int) -> str:
        try:
            return await asyncio.to_thread(
                self._client.presigned_get_object,
                bucket_name=self.bucket,
                object_name=path,
                expires=timedelta(seconds=ttl_seconds),
            )
        except S3Error as e:
            logger.error("S3 presign failed for %s: %s", path, e)
            raise StorageBackendError("Failed to generate download URL") from e

    async def exists(self, path: str) -> bool:
        try:
            await asyncio.to_thread(
                self._client.stat_object, bucket_name=self.bucket, object_name=path
            )
            return True
        except S3Error as e:
            if e.code in MISSING_OBJECT_CODES:
                return False
            logger.error("S3 stat failed for %s: %s", path, e)
            raise StorageBackendError("Failed to check file") from e
