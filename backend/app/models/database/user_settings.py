"""User settings database model."""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, BigInteger, JSON
from sqlalchemy.orm import relationship

from app.core.storage.database import Base

DEFAULT_STORAGE_LIMIT_BYTES = 5 * 1024 * 1024 * 1024


class UserSettings(Base):
    """Per-user settings, one row per user."""

    __tablename__ = "user_settings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    storage_limit_bytes = Column(BigInteger, default=DEFAULT_STORAGE_LIMIT_BYTES, nullable=False)
    preferences = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="settings")
