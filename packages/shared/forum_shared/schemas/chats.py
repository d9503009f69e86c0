"""Chat and message schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, UUID4

from .users import UserResponse


class NewChatRequest(BaseModel):
    chat_name: str = Field(min_length=1, max_length=200)
    user_uuids: List[UUID4] = Field(default_factory=list)


class ChatResponse(BaseModel):
    uuid: UUID4
    chat_name: str
    leader_uuid: UUID4
    created_date: datetime


class NewMessageRequest(BaseModel):
    chat_uuid: UUID4
    author_uuid: UUID4
    message_content: str = Field(min_length=1)
    reply_uuid: Optional[UUID4] = None


class MessageResponse(BaseModel):
    uuid: UUID4
    chat_uuid: UUID4
    author: UserResponse
    reply_uuid: Optional[UUID4] = None
    message_content: str
    read_flag: bool = False
    create_date: datetime
