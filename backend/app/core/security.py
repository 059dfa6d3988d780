"""
Password hashing and JWT helpers
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import AuthenticationError

TOKEN_TYPES = ("access", "refresh", "confirmation")

# Password hashing (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """bcrypt hash of a plaintext password"""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash (unrecognised hashes never match)"""
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def _create_token(subject: str, token_type: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(subject),
        "type": token_type,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: Any) -> str:
    return _create_token(
        user_id, "access", timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def create_refresh_token(user_id: Any) -> str:
    return _create_token(
        user_id, "refresh", timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    )


def create_confirmation_token(user_id: Any) -> str:
    return _create_token(
        user_id, "confirmation", timedelta(hours=settings.CONFIRMATION_TOKEN_EXPIRE_HOURS)
    )


def decode_token(token: str, expected_type: str = "access") -> Dict[str, Any]:
    """
    Decode and validate a JWT

    Raises AuthenticationError when the signature, expiry, type or subject
    is wrong.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError("Could not validate credentials") from e

    if payload.get("type") != expected_type or not payload.get("sub") or not payload.get("jti"):
        raise AuthenticationError("Could not validate credentials")
    return payload


def seconds_until_expiry(payload: Dict[str, Any], now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    return max(0, int(payload["exp"] - now.timestamp()))
