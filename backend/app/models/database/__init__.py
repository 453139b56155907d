"""Database models."""

from app.models.database.user import User
from app.models.database.user_settings import UserSettings
from app.models.database.category import Category
from app.models.database.file import File, Visibility

__all__ = ["User", "UserSettings", "Category", "File", "Visibility"]
