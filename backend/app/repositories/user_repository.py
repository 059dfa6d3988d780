"""
User Repository
"""
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.models.user import User


class UserRepository:
    """User data access layer"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> User:
        """Create user"""
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def update(self, user: User) -> User:
        """Update user"""
        self.db.commit()
        self.db.refresh(user)
        return user
