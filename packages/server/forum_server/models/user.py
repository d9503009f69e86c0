"""User model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, timestamp_field


class User(UUIDMixin, SQLModel, table=True):
    __tablename__ = "users"

    user_name: str = Field(nullable=False, unique=True, index=True)
    display_name: str = Field(nullable=False)
    password_hash: str = Field(nullable=False)  # bcrypt
    role: str = Field(default="user", nullable=False)  # user | moderator | admin
    created_at: datetime = timestamp_field()
