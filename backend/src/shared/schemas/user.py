"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from src.shared.schemas.common import BaseSchema


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """Schema for signup."""

    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(
        min_length=6,
        max_length=72,
        description="Password (6-72 characters)",
    )


class UserLogin(BaseModel):
    """Schema for login."""

    email: EmailStr
    password: str = Field(min_length=1)


class RefreshTokenRequest(BaseModel):
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILE / ACCOUNT REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class UserUpdate(BaseModel):
    """
    Partial user update. Only fields present in the request are applied.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    picture: Optional[str] = Field(default=None, max_length=500)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    picture: Optional[str] = Field(default=None, max_length=500)


class PasswordChange(BaseModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=72)


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordReset(BaseModel):
    token: str
    new_password: str = Field(min_length=6, max_length=72)


class ActivationRequest(BaseModel):
    token: str


class ResendActivationRequest(BaseModel):
    email: EmailStr


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class UserResponse(BaseSchema):
    """Public user representation (no credentials)."""

    id: int
    name: str
    email: str
    picture: str
    admin: bool
    activated: bool
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
