"""User and settings schemas."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Schema for the current user's profile."""

    id: str
    email: str
    username: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Schema for updating the profile."""

    username: str | None = Field(None, min_length=1, max_length=50)


class SettingsResponse(BaseModel):
    """Schema for user settings."""

    storage_limit_bytes: int
    preferences: dict[str, Any]

    class Config:
        from_attributes = True


class SettingsUpdate(BaseModel):
    """Schema for updating user settings."""

    storage_limit_bytes: int | None = Field(None, gt=0)
    preferences: dict[str, Any] | None = None


class StorageUsageResponse(BaseModel):
    """Storage usage against the user's quota."""

    used_bytes: int
    limit_bytes: int
    available_bytes: int
    percent_used: float
