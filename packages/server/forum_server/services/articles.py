"""
Article service.

Handles:
- Article CRUD with slug generation
- Publishing (``publish_date`` set) and unpublishing (``publish_date`` cleared)
- The paginated listing of published articles joined with their authors
"""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import translate_db_errors
from forum_server.models.article import Article
from forum_server.models.base import utcnow
from forum_server.models.user import User
from forum_server.services.pagination import Page, paginate
from forum_server.services.repository import Repository
from forum_server.services.users import to_user_response, users
from forum_shared.identifiers import ArticleUuid, UserUuid
from forum_shared.schemas.articles import (
    ArticlePreviewResponse,
    FullArticleResponse,
    MinimalArticleResponse,
    NewArticleRequest,
    UpdateArticleRequest,
)

log = structlog.get_logger()

articles = Repository(Article)

PREVIEW_LENGTH = 300
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


@dataclass
class ArticleData:
    article: Article
    user: User


def slugify(title: str) -> str:
    """Lower-case the title, collapse everything else to dashes and add a random suffix."""
    base = _SLUG_STRIP.sub("-", title.lower()).strip("-") or "article"
    return f"{base[:80]}-{secrets.token_hex(4)}"


# ---------------------------------------------------------------------------
# Response conversion
# ---------------------------------------------------------------------------

def to_minimal_response(article: Article) -> MinimalArticleResponse:
    return MinimalArticleResponse(
        uuid=article.id,
        author_uuid=article.author_id,
        title=article.title,
        slug=article.slug,
        body=article.body,
        publish_date=article.publish_date,
    )


def to_full_response(data: ArticleData) -> FullArticleResponse:
    return FullArticleResponse(
        uuid=data.article.id,
        author=to_user_response(data.user),
        title=data.article.title,
        slug=data.article.slug,
        body=data.article.body,
        publish_date=data.article.publish_date,
    )


def to_preview_response(data: ArticleData) -> ArticlePreviewResponse:
    return ArticlePreviewResponse(
        uuid=data.article.id,
        author=to_user_response(data.user),
        title=data.article.title,
        slug=data.article.slug,
        body_preview=data.article.body[:PREVIEW_LENGTH],
        publish_date=data.article.publish_date,
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

async def get_article(session: AsyncSession, article_id: ArticleUuid) -> Article:
    return await articles.get(session, article_id)


async def get_article_data(session: AsyncSession, article_id: ArticleUuid) -> ArticleData:
    # Two separate reads; a concurrent delete of the author surfaces as NotFound
    article = await get_article(session, article_id)
    user = await users.get(session, article.author_id)
    return ArticleData(article=article, user=user)


async def get_paginated(
    session: AsyncSession, page_index: int, page_size: int
) -> Page[ArticleData]:
    """Published articles with their authors, oldest publication first."""
    stmt = (
        select(Article, User)
        .join(User, User.id == Article.author_id)
        .where(Article.publish_date.is_not(None))
        .order_by(Article.publish_date, Article.id)
    )
    page = await paginate(session, stmt, page_index, page_size)
    return page.map(lambda row: ArticleData(article=row[0], user=row[1]))


async def get_unpublished_articles_for_user(
    session: AsyncSession, user_id: UserUuid
) -> List[Article]:
    await users.get(session, user_id)
    async with translate_db_errors("Article"):
        result = await session.execute(
            select(Article)
            .where(Article.author_id == user_id, Article.publish_date.is_(None))
            .order_by(Article.title, Article.id)
        )
        return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

async def create_article(session: AsyncSession, req: NewArticleRequest) -> Article:
    article = Article(
        author_id=req.author_uuid,
        title=req.title,
        slug=slugify(req.title),
        body=req.body,
    )
    article = await articles.create(session, article)
    log.info("article.created", article_id=str(article.id), author_id=str(article.author_id))
    return article


async def update_article(session: AsyncSession, changeset: UpdateArticleRequest) -> Article:
    """Apply only the fields present in the changeset."""
    changes = changeset.model_dump(exclude_none=True, exclude={"uuid"})
    article = await articles.update(session, changeset.uuid, changes)
    log.info("article.updated", article_id=str(article.id), fields=sorted(changes))
    return article


async def delete_article(session: AsyncSession, article_id: ArticleUuid) -> Article:
    article = await articles.delete(session, article_id)
    log.info("article.deleted", article_id=str(article_id))
    return article


async def set_publish_status(
    session: AsyncSession, article_id: ArticleUuid, publish: bool
) -> Article:
    article = await articles.update(
        session, article_id, {"publish_date": utcnow() if publish else None}
    )
    log.info("article.published" if publish else "article.unpublished", article_id=str(article_id))
    return article
