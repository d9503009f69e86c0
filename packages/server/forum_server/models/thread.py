"""Thread model. Lock and archive state are nullable timestamps."""

from datetime import datetime
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, optional_timestamp_field, timestamp_field


class Thread(UUIDMixin, SQLModel, table=True):
    __tablename__ = "threads"

    # RESTRICT: a forum cannot be dropped while it still holds threads
    forum_id: uuid.UUID = Field(foreign_key="forums.id", ondelete="RESTRICT", nullable=False, index=True)
    author_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    title: str = Field(nullable=False)
    created_date: datetime = timestamp_field()
    locked_at: Optional[datetime] = optional_timestamp_field()
    archived_at: Optional[datetime] = optional_timestamp_field()

    @property
    def locked(self) -> bool:
        return self.locked_at is not None

    @property
    def archived(self) -> bool:
        return self.archived_at is not None
