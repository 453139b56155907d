"""Category schemas."""

from datetime import datetime
from pydantic import BaseModel, Field

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    color: str | None = Field(None, pattern=COLOR_PATTERN)


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""

    name: str | None = Field(None, min_length=1, max_length=100)
    color: str | None = Field(None, pattern=COLOR_PATTERN)


class CategoryResponse(BaseModel):
    """Schema for category response."""

    id: int
    name: str
    color: str
    created_at: datetime
    file_count: int = 0

    class Config:
        from_attributes = True


class CategoryListResponse(BaseModel):
    """Schema for category list response."""

    categories: list[CategoryResponse]
