"""User and authentication schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, UUID4

from .common import PageInfo, Role


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class NewUserRequest(BaseModel):
    """Create an account."""
    user_name: str = Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    display_name: str = Field(min_length=1, max_length=200)
    plaintext_password: str = Field(min_length=5, max_length=256)


class UpdateDisplayNameRequest(BaseModel):
    user_name: str
    new_display_name: str = Field(min_length=1, max_length=200)


class LoginRequest(BaseModel):
    user_name: str
    password: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserResponse(BaseModel):
    """User as sent over the wire. Never carries the password hash."""
    uuid: UUID4
    user_name: str
    display_name: str
    role: Role = Role.USER
    created_at: datetime


class UserPageResponse(BaseModel):
    data: List[UserResponse]
    pagination: PageInfo


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
