"""Current user profile, settings and storage usage routes."""

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_quota_accountant, get_user_service
from app.models.database import User
from app.models.schemas import (
    SettingsResponse,
    SettingsUpdate,
    StorageUsageResponse,
    UserResponse,
    UserUpdate,
)
from app.services import QuotaAccountant, UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile."""
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update the authenticated user's profile."""
    user = await service.update_user(current_user.id, data)
    return UserResponse.model_validate(user)


@router.get("/me/settings", response_model=SettingsResponse)
async def get_my_settings(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Get the authenticated user's settings."""
    return SettingsResponse.model_validate(await service.get_settings(current_user.id))


@router.put("/me/settings", response_model=SettingsResponse)
async def update_my_settings(
    data: SettingsUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update storage limit and preferences."""
    user_settings = await service.update_settings(current_user.id, data)
    return SettingsResponse.model_validate(user_settings)


@router.get("/me/storage", response_model=StorageUsageResponse)
async def get_my_storage(
    current_user: User = Depends(get_current_user),
    quota: QuotaAccountant = Depends(get_quota_accountant),
):
    """Get storage usage against the quota."""
    return await quota.get_storage_summary(current_user.id)
