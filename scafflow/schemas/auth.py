"""Authentication and authorization schemas"""

import re
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime
from uuid import UUID

from scafflow.models.user import UserRole, OWNER_ROLES


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class SignupRequest(BaseModel):
    """Self-service signup; admin accounts cannot be created here"""
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    role: UserRole = Field(default=UserRole.SITE_ENGINEER, description="Owner role")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is not blank"""
        if not v.strip():
            raise ValueError("Name required")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate password meets security requirements"""
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain uppercase")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain lowercase")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must contain number")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        """Only owner roles may be self-assigned"""
        if v not in OWNER_ROLES:
            raise ValueError(
                f"Role must be one of: {', '.join(r.value for r in OWNER_ROLES)}"
            )
        return v


class UserInfo(BaseModel):
    """User information in token response"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="User UUID")
    name: str = Field(..., description="User display name")
    email: str = Field(..., description="User email")
    role: str = Field(..., description="User role")


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")
    user: UserInfo = Field(..., description="User information")


class RefreshTokenResponse(BaseModel):
    """Refresh token response schema"""
    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")


class UserResponse(BaseModel):
    """User response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    avatar_url: Optional[str] = None
    created_at: datetime


class UserSummary(UserResponse):
    """User with the number of projects they own (admin directory)"""
    project_count: int = 0
