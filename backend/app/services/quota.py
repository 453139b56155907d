"""Storage quota accounting."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import QuotaExceededError
from app.models.database import File
from app.models.schemas import StorageUsageResponse
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class QuotaAccountant:
    """Compares a user's stored bytes against their storage limit.

    The check runs before anything is written to the blob store. It is not
    atomic against concurrent uploads by the same user, so usage can overshoot
    the limit by at most the size of the uploads in flight.
    """

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.users = UserService(db, settings)

    async def current_usage(self, owner_id: str) -> int:
        """Sum of ``size_bytes`` over all of the owner's files."""
        query = select(func.coalesce(func.sum(File.size_bytes), 0)).where(
            File.owner_id == owner_id
        )
        result = await self.db.execute(query)
        return int(result.scalar_one())

    async def storage_limit(self, owner_id: str) -> int:
        user_settings = await self.users.get_settings(owner_id)
        return int(user_settings.storage_limit_bytes)

    async def check_and_maybe_reject(self, owner_id: str, incoming_size: int) -> int:
        """
        Reject an upload that would push the owner over their limit.

        Args:
            owner_id: Owner of the pending upload
            incoming_size: Size of the pending upload in bytes

        Returns:
            Current usage in bytes, excluding the pending upload

        Raises:
            QuotaExceededError: If usage + incoming_size exceeds the limit
        """
        limit = await self.storage_limit(owner_id)
        usage = await self.current_usage(owner_id)

        if usage + incoming_size > limit:
            logger.info(
                "Quota exceeded for user %s: %d used + %d incoming > %d",
                owner_id,
                usage,
                incoming_size,
                limit,
            )
            raise QuotaExceededError()

        return usage

    async def get_storage_summary(self, owner_id: str) -> StorageUsageResponse:
        used = await self.current_usage(owner_id)
        limit = await self.storage_limit(owner_id)
        return StorageUsageResponse(
            used_bytes=used,
            limit_bytes=limit,
            available_bytes=max(limit - used, 0),
            percent_used=round(used * 100 / limit, 2) if limit else 100.0,
        )
