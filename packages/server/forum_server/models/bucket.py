"""Bucket and bucket membership models."""

from datetime import datetime
import uuid

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, timestamp_field


class Bucket(UUIDMixin, SQLModel, table=True):
    __tablename__ = "buckets"

    bucket_name: str = Field(nullable=False)
    is_public: bool = Field(default=True, nullable=False)
    created_date: datetime = timestamp_field()


class BucketUser(SQLModel, table=True):
    __tablename__ = "bucket_users"

    bucket_id: uuid.UUID = Field(foreign_key="buckets.id", ondelete="CASCADE", primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    owner: bool = Field(default=False, nullable=False)
    approved: bool = Field(default=False, nullable=False)
