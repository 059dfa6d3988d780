"""
User / Auth Schemas
"""
from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class UserResponse(BaseModel):
    """User response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    is_verified: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime


# Auth schemas
class SignUpRequest(BaseModel):
    """Sign-up request schema"""
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class SignUpResponse(BaseModel):
    """Sign-up result; the account stays unusable until confirmed"""
    user_id: UUID
    email: EmailStr
    confirmation_required: bool = True
    message: str = "Check your email for confirmation link"


class SignInRequest(BaseModel):
    """Sign-in request schema"""
    email: EmailStr
    password: str


class ConfirmRequest(BaseModel):
    token: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
