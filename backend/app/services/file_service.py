"""File upload, listing and lifecycle service."""

import logging
import math

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import (
    DuplicateContentError,
    FileTooLargeError,
    InvalidInputError,
    NotFoundError,
    StorageBackendError,
)
from app.core.security.hashing import compute_content_hash
from app.core.storage.blob_store import BlobStore
from app.models.database import Category, File, Visibility
from app.models.schemas import DownloadedFile, DownloadUrlResponse, FileUpdate
from app.services.quota import QuotaAccountant

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _base_mime_type(mime_type: str) -> str:
    return mime_type.split(";", 1)[0].strip().lower()


class FileService:
    """Owner-scoped file operations backed by the blob store."""

    def __init__(self, db: AsyncSession, blob_store: BlobStore, settings: Settings):
        self.db = db
        self.blob_store = blob_store
        self.settings = settings
        self.quota = QuotaAccountant(db, settings)

    async def _check_category(self, category_id: int, owner_id: str) -> None:
        query = select(Category.id).where(
            Category.id == category_id, Category.owner_id == owner_id
        )
        result = await self.db.execute(query)
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Category not found")

    async def _has_content(self, owner_id: str, content_hash: str) -> bool:
        query = select(File.id).where(
            File.owner_id == owner_id, File.content_hash == content_hash
        )
        return (await self.db.execute(query)).scalar_one_or_none() is not None

    async def upload_file(
        self,
        owner_id: str,
        data: bytes,
        filename: str,
        mime_type: str | None = None,
        category_id: int | None = None,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> File:
        """
        Store a new file for ``owner_id``.

        Size, quota and duplicate checks all run before the blob store is
        touched, so a rejected upload leaves no orphaned blob behind.

        Raises:
            InvalidInputError: If the filename is unusable or the MIME type is forbidden
            FileTooLargeError: If the file exceeds the per-upload ceiling
            QuotaExceededError: If the owner's storage limit would be exceeded
            DuplicateContentError: If the owner already stores identical bytes
            NotFoundError: If ``category_id`` is not one of the owner's categories
        """
        filename = (filename or "").strip()
        if not filename:
            raise InvalidInputError("Filename is required")
        if len(filename) > 255:
            raise InvalidInputError("Filename must be at most 255 characters")

        if mime_type and _base_mime_type(mime_type) in self.settings.forbidden_mime_type_set:
            raise InvalidInputError("File type not allowed")

        size = len(data)
        if size > self.settings.max_upload_size_bytes:
            raise FileTooLargeError()

        await self.quota.check_and_maybe_reject(owner_id, size)

        content_hash = compute_content_hash(data)
        if await self._has_content(owner_id, content_hash):
            raise DuplicateContentError()

        if category_id is not None:
            await self._check_category(category_id, owner_id)

        stored = await self.blob_store.put(owner_id, filename, data, mime_type)

        file = File(
            owner_id=owner_id,
            category_id=category_id,
            filename=filename,
            storage_path=stored.path,
            storage_provider=stored.provider,
            mime_type=mime_type,
            size_bytes=size,
            content_hash=content_hash,
            visibility=visibility,
        )
        self.db.add(file)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            await self.blob_store.delete(stored.path)
            # A concurrent upload of the same bytes won the unique constraint
            if await self._has_content(owner_id, content_hash):
                raise DuplicateContentError() from e
            # The category was deleted while the blob was being stored
            if category_id is not None:
                await self._check_category(category_id, owner_id)
            raise

        await self.db.refresh(file)
        logger.info("File uploaded: %s by user %s", file.id, owner_id)
        return file

    async def list_files(
        self,
        owner_id: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        category_id: int | None = None,
        search: str | None = None,
    ) -> tuple[list[File], int, int, int]:
        """
        List the owner's files, newest first.

        Returns:
            Tuple of (files, total, page, total_pages)
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        query = select(File).where(File.owner_id == owner_id)
        if category_id is not None:
            query = query.where(File.category_id == category_id)
        if search:
            query = query.where(File.filename.ilike(f"%{search}%"))

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar_one()

        query = (
            query.order_by(File.created_at.desc(), File.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        files = list(result.scalars().all())

        return files, total, page, math.ceil(total / limit)

    async def get_file(self, file_id: str, owner_id: str) -> File:
        """Get a file owned by ``owner_id``; foreign files are reported as missing."""
        query = select(File).where(File.id == file_id, File.owner_id == owner_id)
        result = await self.db.execute(query)
        file = result.scalar_one_or_none()
        if not file:
            raise NotFoundError("File not found")
        return file

    async def download_file(self, file_id: str, owner_id: str) -> DownloadedFile:
        file = await self.get_file(file_id, owner_id)
        content = await self.blob_store.get(file.storage_path)
        return DownloadedFile(content=content, filename=file.filename, mime_type=file.mime_type)

    async def get_download_url(
        self, file_id: str, owner_id: str, ttl_seconds: int | None = None
    ) -> DownloadUrlResponse:
        ttl = ttl_seconds or self.settings.signed_url_ttl_seconds
        ttl = max(1, min(ttl, self.settings.max_signed_url_ttl_seconds))

        file = await self.get_file(file_id, owner_id)
        url = await self.blob_store.sign(file.storage_path, ttl)
        return DownloadUrlResponse(url=url, expires_in=ttl)

    async def update_file(self, file_id: str, owner_id: str, data: FileUpdate) -> File:
        """
        Update file metadata.

        Making a file private also revokes its share link.
        """
        file = await self.get_file(file_id, owner_id)
        fields = data.model_fields_set

        if "filename" in fields and data.filename is not None:
            file.filename = data.filename.strip() or file.filename

        if "category_id" in fields:
            if data.category_id is not None:
                await self._check_category(data.category_id, owner_id)
            file.category_id = data.category_id

        if "visibility" in fields and data.visibility is not None:
            if data.visibility == Visibility.PRIVATE:
                file.clear_share()
            else:
                file.visibility = data.visibility

        await self.db.commit()
        await self.db.refresh(file)
        logger.info("File updated: %s", file_id)
        return file

    async def delete_file(self, file_id: str, owner_id: str) -> None:
        """
        Delete a file's record, then its blob.

        A blob left behind by a failed delete is logged; a record pointing at
        a missing blob is never left behind.
        """
        file = await self.get_file(file_id, owner_id)
        storage_path = file.storage_path

        await self.db.delete(file)
        await self.db.commit()
        logger.info("File deleted: %s", file_id)

        try:
            await self.blob_store.delete(storage_path)
        except StorageBackendError:
            logger.error(
                "Orphaned blob %s of deleted file %s", storage_path, file_id, exc_info=True
            )
