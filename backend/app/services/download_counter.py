"""Atomic per-share download counting."""

import logging

from sqlalchemy import or_, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DownloadLimitReachedError
from app.models.database import File

logger = logging.getLogger(__name__)


class DownloadCounter:
    """Increments ``share_download_count`` without racing past the ceiling.

    The increment is a single conditional UPDATE. Concurrent downloads of the
    last remaining slot cannot both succeed: the loser's UPDATE matches no row.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_download(self, file: File) -> int:
        """
        Count one download of ``file`` under its current share token.

        Returns:
            The new download count

        Raises:
            DownloadLimitReachedError: If the ceiling was reached (or the share
                was rotated or revoked) since the file was read
        """
        file_id = file.id
        stmt = (
            update(File)
            .where(
                File.id == file_id,
                File.share_token.is_not(None),
                File.share_token == file.share_token,
                or_(
                    File.share_max_downloads.is_(None),
                    File.share_download_count < File.share_max_downloads,
                ),
            )
            .values(share_download_count=File.share_download_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)

        if result.rowcount != 1:
            await self.db.rollback()
            logger.info("Download refused for file %s: limit reached", file_id)
            raise DownloadLimitReachedError()

        await self.db.commit()
        await self.db.refresh(file)
        return file.share_download_count
