"""User database model."""

from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from app.core.storage.database import Base


class User(Base):
    """User known to the service.

    The id is the one issued by the identity provider; rows are created the
    first time a verified identity reaches the API.
    """

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    files = relationship("File", back_populates="owner", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="owner", cascade="all, delete-orphan")
    settings = relationship(
        "UserSettings", back_populates="owner", uselist=False, cascade="all, delete-orphan"
    )
