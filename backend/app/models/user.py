"""
User Model
"""
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
import uuid

from app.core.database import Base
from app.models.types import utc_now


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Status
    is_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime(timezone=True))

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
