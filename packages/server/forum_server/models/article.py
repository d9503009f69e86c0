"""Article model. An article is published while ``publish_date`` is set."""

from datetime import datetime
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, optional_timestamp_field


class Article(UUIDMixin, SQLModel, table=True):
    __tablename__ = "articles"

    author_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    title: str = Field(nullable=False)
    slug: str = Field(nullable=False, unique=True, index=True)
    body: str = Field(nullable=False)
    publish_date: Optional[datetime] = optional_timestamp_field(index=True)
