"""Post model. Posts form a tree through ``parent_id`` within one thread."""

from datetime import datetime
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, optional_timestamp_field, timestamp_field


class Post(UUIDMixin, SQLModel, table=True):
    __tablename__ = "posts"

    thread_id: uuid.UUID = Field(foreign_key="threads.id", ondelete="CASCADE", nullable=False, index=True)
    author_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    parent_id: Optional[uuid.UUID] = Field(default=None, foreign_key="posts.id", ondelete="CASCADE", index=True)
    content: str = Field(nullable=False)
    created_date: datetime = timestamp_field()
    modified_date: Optional[datetime] = optional_timestamp_field()
    censored: bool = Field(default=False, nullable=False)
