"""Chat, chat membership and message models."""

from datetime import datetime
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import UUIDMixin, timestamp_field


class Chat(UUIDMixin, SQLModel, table=True):
    __tablename__ = "chats"

    chat_name: str = Field(nullable=False)
    leader_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    created_date: datetime = timestamp_field()


class ChatUser(SQLModel, table=True):
    __tablename__ = "chat_users"

    chat_id: uuid.UUID = Field(foreign_key="chats.id", ondelete="CASCADE", primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)


class Message(UUIDMixin, SQLModel, table=True):
    __tablename__ = "messages"

    chat_id: uuid.UUID = Field(foreign_key="chats.id", ondelete="CASCADE", nullable=False, index=True)
    author_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    reply_id: Optional[uuid.UUID] = Field(default=None, foreign_key="messages.id", ondelete="SET NULL")
    message_content: str = Field(nullable=False)
    read_flag: bool = Field(default=False, nullable=False)
    create_date: datetime = timestamp_field(index=True)
