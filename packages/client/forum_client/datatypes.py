"""View data built from wire responses.

Responses arrive as decoded JSON; each ``from_response`` validates the payload
against the shared pydantic schema before flattening it into what the
components render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from forum_shared.identifiers import ArticleUuid, BucketUuid, PostUuid, UserUuid
from forum_shared.schemas.articles import ArticlePageResponse, ArticlePreviewResponse
from forum_shared.schemas.buckets import BucketResponse
from forum_shared.schemas.common import Role
from forum_shared.schemas.forums import PostResponse
from forum_shared.schemas.users import UserResponse


@dataclass
class UserData:
    uuid: UserUuid
    user_name: str
    display_name: str
    role: Role = Role.USER

    @classmethod
    def from_response(cls, payload: Any) -> "UserData":
        return cls.from_schema(UserResponse.model_validate(payload))

    @classmethod
    def from_schema(cls, response: UserResponse) -> "UserData":
        return cls(
            uuid=UserUuid(response.uuid),
            user_name=response.user_name,
            display_name=response.display_name,
            role=response.role,
        )


@dataclass
class ArticlePreviewData:
    uuid: ArticleUuid
    author: UserData
    title: str
    slug: str
    body_preview: str
    publish_date: Optional[datetime] = None

    @classmethod
    def from_response(cls, payload: Any) -> "ArticlePreviewData":
        return cls.from_schema(ArticlePreviewResponse.model_validate(payload))

    @classmethod
    def from_schema(cls, response: ArticlePreviewResponse) -> "ArticlePreviewData":
        return cls(
            uuid=ArticleUuid(response.uuid),
            author=UserData.from_schema(response.author),
            title=response.title,
            slug=response.slug,
            body_preview=response.body_preview,
            publish_date=response.publish_date,
        )


@dataclass
class ArticlePage:
    """One page of published article previews."""
    articles: List[ArticlePreviewData]
    page_index: int
    page_count: int

    @classmethod
    def from_response(cls, payload: Any) -> "ArticlePage":
        response = ArticlePageResponse.model_validate(payload)
        return cls(
            articles=[ArticlePreviewData.from_schema(a) for a in response.data],
            page_index=response.pagination.page_index,
            page_count=response.pagination.page_count,
        )

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0


@dataclass
class BucketData:
    uuid: BucketUuid
    bucket_name: str
    is_public: bool

    @classmethod
    def from_response(cls, payload: Any) -> "BucketData":
        response = BucketResponse.model_validate(payload)
        return cls(
            uuid=BucketUuid(response.uuid),
            bucket_name=response.bucket_name,
            is_public=response.is_public,
        )


@dataclass
class PostData:
    uuid: PostUuid
    author: UserData
    created_date: datetime
    content: str
    modified_date: Optional[datetime] = None
    censored: bool = False
    children: List["PostData"] = field(default_factory=list)

    @classmethod
    def from_response(cls, payload: Any) -> "PostData":
        return cls.from_schema(PostResponse.model_validate(payload))

    @classmethod
    def from_schema(cls, response: PostResponse) -> "PostData":
        return cls(
            uuid=PostUuid(response.uuid),
            author=UserData.from_schema(response.author),
            created_date=response.created_date,
            content=response.content,
            modified_date=response.modified_date,
            censored=response.censored,
            children=[cls.from_schema(child) for child in response.children],
        )
