"""Category database model."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.storage.database import Base

DEFAULT_CATEGORY_COLOR = "#6366f1"


class Category(Base):
    """Owner-scoped file category."""

    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_categories_owner_name"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    color = Column(String(7), default=DEFAULT_CATEGORY_COLOR, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="categories")
    files = relationship("File", back_populates="category", passive_deletes=True)
