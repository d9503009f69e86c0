"""Forum, thread and post schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, UUID4

from .common import PageInfo
from .users import UserResponse


# ---------------------------------------------------------------------------
# Forums
# ---------------------------------------------------------------------------

class NewForumRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""


class ForumResponse(BaseModel):
    uuid: UUID4
    title: str
    description: str


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------

class NewPostRequest(BaseModel):
    thread_uuid: UUID4
    author_uuid: UUID4
    parent_uuid: Optional[UUID4] = None
    content: str = Field(min_length=1)


class EditPostRequest(BaseModel):
    uuid: UUID4
    content: Optional[str] = Field(default=None, min_length=1)


class PostResponse(BaseModel):
    uuid: UUID4
    thread_uuid: UUID4
    parent_uuid: Optional[UUID4] = None
    author: UserResponse
    content: str
    created_date: datetime
    modified_date: Optional[datetime] = None
    censored: bool = False
    children: List["PostResponse"] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Threads
# ---------------------------------------------------------------------------

class NewThreadRequest(BaseModel):
    """A thread is always created together with its opening post."""
    forum_uuid: UUID4
    author_uuid: UUID4
    title: str = Field(min_length=1, max_length=300)
    post_content: str = Field(min_length=1)


class MinimalThreadResponse(BaseModel):
    uuid: UUID4
    forum_uuid: UUID4
    author: UserResponse
    title: str
    created_date: datetime
    locked: bool = False
    archived: bool = False


class ThreadResponse(MinimalThreadResponse):
    post: PostResponse


class MinimalThreadPageResponse(BaseModel):
    data: List[MinimalThreadResponse]
    pagination: PageInfo


PostResponse.model_rebuild()
