"""User profile and settings service."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import NotFoundError
from app.core.security.identity import VerifiedIdentity
from app.models.database import User, UserSettings
from app.models.schemas import SettingsUpdate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Users are created lazily from verified identities."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def find_or_create_user(self, identity: VerifiedIdentity) -> User:
        """Return the user for ``identity``, creating it with default settings."""
        user = await self.db.get(User, identity.user_id)
        if user:
            return user

        user = User(id=identity.user_id, email=identity.email)
        user.settings = UserSettings(
            storage_limit_bytes=self.settings.default_storage_limit_bytes,
            preferences={},
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Another request created the same user first
            await self.db.rollback()
            user = await self.db.get(User, identity.user_id)
            if user is None:
                raise
            return user

        logger.info("New user created: %s", user.id)
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        if data.username is not None:
            user.username = data.username

        await self.db.commit()
        await self.db.refresh(user)
        logger.info("User updated: %s", user_id)
        return user

    async def get_settings(self, user_id: str) -> UserSettings:
        """Return the user's settings, creating the defaults on first access."""
        query = select(UserSettings).where(UserSettings.owner_id == user_id)
        result = await self.db.execute(query)
        user_settings = result.scalar_one_or_none()
        if user_settings:
            return user_settings

        user_settings = UserSettings(
            owner_id=user_id,
            storage_limit_bytes=self.settings.default_storage_limit_bytes,
            preferences={},
        )
        self.db.add(user_settings)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            result = await self.db.execute(query)
            return result.scalar_one()

        await self.db.refresh(user_settings)
        return user_settings

    async def update_settings(self, user_id: str, data: SettingsUpdate) -> UserSettings:
        user_settings = await self.get_settings(user_id)
        if data.storage_limit_bytes is not None:
            user_settings.storage_limit_bytes = data.storage_limit_bytes
        if data.preferences is not None:
            user_settings.preferences = data.preferences

        await self.db.commit()
        await self.db.refresh(user_settings)
        logger.info("Settings updated for user: %s", user_id)
        return user_settings
