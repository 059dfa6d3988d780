"""
Dependency Injection
"""
import hmac
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.cache import TokenBlacklist, get_token_blacklist
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.models.user import User
from app.services.auth_service import AuthService


# Security
security = HTTPBearer(auto_error=False)


def get_auth_service(
    db: Session = Depends(get_db),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> AuthService:
    return AuthService(db, blacklist)


def get_authenticated(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> Tuple[User, Dict[str, Any]]:
    """Resolve the bearer token to (user, token payload)"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    return auth_service.authenticate_token(credentials.credentials)


def get_current_user(
    authenticated: Tuple[User, Dict[str, Any]] = Depends(get_authenticated),
) -> User:
    """Get current authenticated user from JWT token"""
    return authenticated[0]


def require_worker(x_worker_token: Optional[str] = Header(default=None)) -> None:
    """Guard for the extraction / export worker API"""
    if not settings.WORKER_API_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Processing worker API disabled",
        )
    if not x_worker_token or not hmac.compare_digest(
        x_worker_token.encode("utf-8"), settings.WORKER_API_TOKEN.encode("utf-8")
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid worker token",
        )
