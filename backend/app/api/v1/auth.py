"""
Authentication API Routes
"""
from fastapi import APIRouter, Depends, status
from typing import Any, Dict, Tuple

from app.dependencies import get_auth_service, get_authenticated
from app.models.user import User
from app.schemas.user import (
    ConfirmRequest,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    TokenResponse,
    UserResponse,
)
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    회원가입

    The account stays pending until the emailed confirmation token is
    posted to /confirm.
    """
    user, _token = auth_service.sign_up(request.email, request.password)
    return SignUpResponse(user_id=user.id, email=user.email)


@router.post("/confirm", response_model=UserResponse)
def confirm(
    request: ConfirmRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """이메일 확인"""
    return auth_service.confirm(request.token)


@router.post("/sign-in", response_model=TokenResponse)
def sign_in(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """로그인"""
    return auth_service.sign_in(request.email, request.password)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(
    request: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """토큰 갱신"""
    return auth_service.refresh(request.refresh_token)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    authenticated: Tuple[User, Dict[str, Any]] = Depends(get_authenticated),
    auth_service: AuthService = Depends(get_auth_service),
):
    """로그아웃 - revokes the presented access token"""
    _user, payload = authenticated
    auth_service.sign_out(payload)
