"""File database model."""

import uuid
from datetime import datetime
from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
import enum

from app.core.storage.database import Base


class Visibility(str, enum.Enum):
    """File visibility enum."""

    PRIVATE = "private"
    PUBLIC = "public"


class File(Base):
    """Stored file and its optional public share.

    The ``share_*`` columns move together: when ``share_token`` is null the
    others are null and ``share_download_count`` is 0.
    """

    __tablename__ = "files"
    __table_args__ = (
        UniqueConstraint("owner_id", "content_hash", name="uq_files_owner_content_hash"),
        CheckConstraint(
            "share_max_downloads IS NULL OR share_max_downloads >= 1",
            name="ck_files_share_max_downloads_positive",
        ),
        CheckConstraint("share_download_count >= 0", name="ck_files_share_download_count"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    filename = Column(String(255), nullable=False)
    storage_path = Column(String(500), nullable=False)
    storage_provider = Column(String(32), nullable=False)
    mime_type = Column(String(100), nullable=True)
    size_bytes = Column(BigInteger, nullable=False)
    content_hash = Column(String(64), nullable=False)  # SHA-256 hex
    visibility = Column(Enum(Visibility), default=Visibility.PRIVATE, nullable=False)

    # Share link
    share_token = Column(String(64), nullable=True, unique=True, index=True)
    share_expires_at = Column(DateTime, nullable=True)
    share_password_hash = Column(String(255), nullable=True)
    share_max_downloads = Column(Integer, nullable=True)
    share_download_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="files")
    category = relationship("Category", back_populates="files")

    @property
    def is_shared(self) -> bool:
        return self.share_token is not None

    @property
    def has_share_password(self) -> bool:
        return self.share_password_hash is not None

    def clear_share(self) -> None:
        """Reset every share field and make the file private."""
        self.visibility = Visibility.PRIVATE
        self.share_token = None
        self.share_expires_at = None
        self.share_password_hash = None
        self.share_max_downloads = None
        self.share_download_count = 0
