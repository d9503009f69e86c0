"""Article schemas: creation, changesets, and the full/minimal/preview projections."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, UUID4

from .common import PageInfo
from .users import UserResponse


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class NewArticleRequest(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    body: str
    author_uuid: UUID4


class UpdateArticleRequest(BaseModel):
    """Changeset for an article. ``None`` leaves the stored value untouched."""
    uuid: UUID4
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    body: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class MinimalArticleResponse(BaseModel):
    """The article alone, without its author."""
    uuid: UUID4
    author_uuid: UUID4
    title: str
    slug: str
    body: str
    publish_date: Optional[datetime] = None


class FullArticleResponse(BaseModel):
    uuid: UUID4
    author: UserResponse
    title: str
    slug: str
    body: str
    publish_date: Optional[datetime] = None


class ArticlePreviewResponse(BaseModel):
    """List-view projection: the body is cut down to a short excerpt."""
    uuid: UUID4
    author: UserResponse
    title: str
    slug: str
    body_preview: str
    publish_date: Optional[datetime] = None


class ArticlePageResponse(BaseModel):
    data: List[ArticlePreviewResponse]
    pagination: PageInfo
