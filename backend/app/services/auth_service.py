"""
Authentication Service (identity provider)
"""
from datetime import datetime, timezone
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from app.core.cache import TokenBlacklist
from app.core.config import settings
from app.core.exceptions import AuthenticationError, IdentityError
from app.core.logging import logger
from app.core import security
from app.models.user import User
from app.repositories.user_repository import UserRepository


class AuthService:
    """Authentication service for user management"""

    def __init__(self, db: Session, blacklist: Optional[TokenBlacklist] = None):
        self.db = db
        self.users = UserRepository(db)
        self.blacklist = blacklist

    def sign_up(self, email: str, password: str) -> Tuple[User, str]:
        """
        Register a new, unconfirmed user

        Returns the user and the confirmation token that the mail transport
        would deliver.
        """
        email = email.strip().lower()
        if self.users.get_by_email(email):
            raise IdentityError("User already registered")

        try:
            user = self.users.create(User(
                email=email,
                password_hash=security.hash_password(password),
                is_verified=False,
            ))
        except IntegrityError:
            self.db.rollback()
            raise IdentityError("User already registered")

        token = security.create_confirmation_token(user.id)
        logger.info(f"User signed up, confirmation pending: {user.id}")
        logger.debug(f"Confirmation token for {user.email}: {token}")
        return user, token

    def confirm(self, token: str) -> User:
        """Mark the account behind a confirmation token as verified"""
        payload = security.decode_token(token, expected_type="confirmation")
        user = self.users.get_by_id(UUID(payload["sub"]))
        if user is None:
            raise IdentityError("User not found")
        if not user.is_verified:
            user.is_verified = True
            user = self.users.update(user)
            logger.info(f"User confirmed: {user.id}")
        return user

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """Authenticate with email and password and issue tokens"""
        user = self.users.get_by_email(email)
        if user is None or not security.verify_password(password, user.password_hash):
            raise IdentityError("Invalid login credentials")
        if not user.is_verified:
            raise IdentityError("Email not confirmed")
        if not user.is_active:
            raise IdentityError("User is inactive")

        user.last_login_at = datetime.now(timezone.utc)
        user = self.users.update(user)
        return self._issue_tokens(user)

    def refresh(self, refresh_token: str) -> Dict[str, Any]:
        payload = security.decode_token(refresh_token, expected_type="refresh")
        user = self._active_user(payload)
        return self._issue_tokens(user)

    def sign_out(self, payload: Dict[str, Any]) -> None:
        """Revoke the access token described by a decoded payload"""
        if self.blacklist is None:
            raise RuntimeError("sign_out requires a token blacklist")
        self.blacklist.revoke(payload["jti"], security.seconds_until_expiry(payload))
        logger.info(f"User signed out: {payload['sub']}")

    def authenticate_token(self, token: str) -> Tuple[User, Dict[str, Any]]:
        """Resolve a bearer access token to its user"""
        payload = security.decode_token(token, expected_type="access")
        if self.blacklist is not None and self.blacklist.is_revoked(payload["jti"]):
            raise AuthenticationError("Token has been revoked")
        return self._active_user(payload), payload

    def _active_user(self, payload: Dict[str, Any]) -> User:
        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            raise AuthenticationError("Could not validate credentials")
        user = self.users.get_by_id(user_id)
        if user is None or not user.is_active:
            raise AuthenticationError("Could not validate credentials")
        return user

    def _issue_tokens(self, user: User) -> Dict[str, Any]:
        return {
            "access_token": security.create_access_token(user.id),
            "refresh_token": security.create_refresh_token(user.id),
            "token_type": "bearer",
            "expires_in": settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": user,
        }
