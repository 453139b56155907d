"""Share link management and public access."""

import asyncio
import logging
import math
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import NotFoundError
from app.core.security.passwords import hash_password
from app.core.security.tokens import issue_share_token
from app.core.storage.blob_store import BlobStore
from app.models.database import File, User, Visibility
from app.models.schemas import (
    DownloadedFile,
    PublicFileInfo,
    PublicFileListResponse,
    PublicListedFile,
    ShareCreate,
    ShareInfo,
    SharedUrlResponse,
)
from app.services.download_counter import DownloadCounter
from app.services.share_access import ShareAccessEvaluator

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class ShareService:
    """Creates, inspects and revokes share links, and serves them publicly."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        settings: Settings,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.db = db
        self.blob_store = blob_store
        self.settings = settings
        self.clock = clock
        self.evaluator = ShareAccessEvaluator(db, clock)
        self.counter = DownloadCounter(db)

    async def _get_owned_file(self, file_id: str, owner_id: str) -> File:
        # Foreign files are reported exactly like missing ones
        query = select(File).where(File.id == file_id, File.owner_id == owner_id)
        result = await self.db.execute(query)
        file = result.scalar_one_or_none()
        if not file:
            raise NotFoundError("File not found")
        return file

    def _to_share_info(self, file: File) -> ShareInfo:
        now = self.clock()
        return ShareInfo(
            share_token=file.share_token,
            share_url=self.settings.build_share_url(file.share_token),
            expires_at=file.share_expires_at,
            has_password=file.has_share_password,
            max_downloads=file.share_max_downloads,
            downloads=file.share_download_count,
            is_expired=file.share_expires_at is not None and file.share_expires_at < now,
            is_exhausted=(
                file.share_max_downloads is not None
                and file.share_download_count >= file.share_max_downloads
            ),
        )

    # Owner operations

    async def create_share(self, file_id: str, owner_id: str, options: ShareCreate) -> ShareInfo:
        """
        Share a file, replacing any existing link.

        A new token is issued on every call, so the previous link stops
        working and the download count starts again from zero.
        """
        file = await self._get_owned_file(file_id, owner_id)

        password_hash = None
        if options.password:
            password_hash = await asyncio.to_thread(hash_password, options.password)

        expires_at = None
        if options.expires_in_seconds:
            expires_at = self.clock() + timedelta(seconds=options.expires_in_seconds)

        file.visibility = Visibility.PUBLIC
        file.share_token = issue_share_token()
        file.share_expires_at = expires_at
        file.share_password_hash = password_hash
        file.share_max_downloads = options.max_downloads
        file.share_download_count = 0

        await self.db.commit()
        await self.db.refresh(file)

        logger.info("Share link created for file %s by user %s", file_id, owner_id)
        return self._to_share_info(file)

    async def get_share_info(self, file_id: str, owner_id: str) -> ShareInfo | None:
        """Current share state, or None when the file is not shared."""
        file = await self._get_owned_file(file_id, owner_id)
        if not file.is_shared:
            return None
        return self._to_share_info(file)

    async def revoke_share(self, file_id: str, owner_id: str) -> None:
        """Remove a file's share link. Revoking an unshared file is a no-op."""
        file = await self._get_owned_file(file_id, owner_id)
        if not file.is_shared and file.visibility == Visibility.PRIVATE:
            return

        file.clear_share()
        await self.db.commit()
        logger.info("Share link revoked for file %s", file_id)

    # Public operations

    async def resolve_public_metadata(self, token: str) -> PublicFileInfo:
        """Anonymous metadata for a share link; no password needed."""
        decision = await self.evaluator.check(token)
        file = decision.raise_for_denial()

        return PublicFileInfo(
            id=file.id,
            filename=file.filename,
            mime_type=file.mime_type,
            size_bytes=file.size_bytes,
            created_at=file.created_at,
            has_password=file.has_share_password,
            owner_username=file.owner.username if file.owner else None,
        )

    async def download_shared(self, token: str, password: str | None = None) -> DownloadedFile:
        """
        Download a shared file.

        The blob is fetched before the download is counted, so a failed or
        cancelled transfer leaves the counter untouched.
        """
        decision = await self.evaluator.check(token, password=password, require_password=True)
        file = decision.raise_for_denial()

        content = await self.blob_store.get(file.storage_path)
        count = await self.counter.record_download(file)

        logger.info("Shared file downloaded: %s (download %d)", file.id, count)
        return DownloadedFile(content=content, filename=file.filename, mime_type=file.mime_type)

    async def get_shared_file_url(
        self,
        token: str,
        password: str | None = None,
        ttl_seconds: int | None = None,
    ) -> SharedUrlResponse:
        """
        Mint a signed blob URL for a shared file.

        Handing out the URL counts as a download, otherwise the download
        ceiling could be sidestepped.
        """
        ttl = ttl_seconds or self.settings.signed_url_ttl_seconds
        ttl = max(1, min(ttl, self.settings.max_signed_url_ttl_seconds))

        decision = await self.evaluator.check(token, password=password, require_password=True)
        file = decision.raise_for_denial()

        url = await self.blob_store.sign(file.storage_path, ttl)
        count = await self.counter.record_download(file)

        logger.info("Signed URL issued for shared file %s (download %d)", file.id, count)
        return SharedUrlResponse(url=url, expires_in=ttl)

    async def list_public_files(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> PublicFileListResponse:
        """
        List shares that are safe to show anonymously.

        Only public files with a live token, no password and no expiry in the
        past are included, newest first.
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        now = self.clock()

        conditions = (
            File.visibility == Visibility.PUBLIC,
            File.share_token.is_not(None),
            File.share_password_hash.is_(None),
            or_(File.share_expires_at.is_(None), File.share_expires_at > now),
        )

        count_query = select(func.count()).select_from(File).where(*conditions)
        total = (await self.db.execute(count_query)).scalar_one()

        query = (
            select(File, User.username)
            .join(User, File.owner_id == User.id)
            .where(*conditions)
            .order_by(File.created_at.desc(), File.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)

        files = [
            PublicListedFile(
                id=file.id,
                filename=file.filename,
                mime_type=file.mime_type,
                size_bytes=file.size_bytes,
                created_at=file.created_at,
                has_password=False,
                owner_username=username,
                share_token=file.share_token,
            )
            for file, username in result.all()
        ]

        return PublicFileListResponse(
            files=files,
            total=total,
            page=page,
            total_pages=math.ceil(total / limit),
        )
