"""Question and answer models."""

from datetime import datetime
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, timestamp_field


class Question(UUIDMixin, SQLModel, table=True):
    __tablename__ = "questions"

    bucket_id: uuid.UUID = Field(foreign_key="buckets.id", ondelete="CASCADE", nullable=False, index=True)
    author_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    question_text: str = Field(nullable=False)
    created_date: datetime = timestamp_field()


class Answer(UUIDMixin, SQLModel, table=True):
    __tablename__ = "answers"

    question_id: uuid.UUID = Field(foreign_key="questions.id", ondelete="CASCADE", nullable=False, index=True)
    author_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    answer_text: Optional[str] = None
