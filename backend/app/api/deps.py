"""FastAPI dependencies wiring services to the per-request session."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import AuthInvalidError
from app.core.security.identity import IdentityProvider
from app.core.storage.blob_store import BlobStore
from app.core.storage.database import get_db
from app.models.database import User
from app.services import CategoryService, FileService, QuotaAccountant, ShareService, UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_identity_provider(request: Request) -> IdentityProvider | None:
    return getattr(request.app.state, "identity_provider", None)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity_provider: IdentityProvider | None = Depends(get_identity_provider),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Verify the bearer credential and return the matching user."""
    if credentials is None or not credentials.credentials:
        raise AuthInvalidError("No token provided")
    if identity_provider is None:
        raise AuthInvalidError("Authentication is not configured")

    identity = await identity_provider.verify(credentials.credentials)
    return await UserService(db, settings).find_or_create_user(identity)


def get_user_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, settings)


def get_quota_accountant(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> QuotaAccountant:
    return QuotaAccountant(db, settings)


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_file_service(
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
) -> FileService:
    return FileService(db, blob_store, settings)


def get_share_service(
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
) -> ShareService:
    return ShareService(db, blob_store, settings)
