"""Base mixins for SQLModel tables."""

from datetime import datetime, timezone
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UUIDMixin(SQLModel):
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
        nullable=False,
    )


def timestamp_field(**kwargs):
    """A non-null timezone-aware column defaulting to the current time."""
    return Field(
        default_factory=utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
        **kwargs,
    )


def optional_timestamp_field(**kwargs):
    return Field(default=None, nullable=True, sa_type=sa.DateTime(timezone=True), **kwargs)
