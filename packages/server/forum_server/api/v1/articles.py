"""
Article endpoints.

GET    /api/v1/article/articles/{index}/{size}  - Page through published articles
GET    /api/v1/article/users_unpublished        - Your unpublished drafts
GET    /api/v1/article/{uuid}                   - Get an article with its author
POST   /api/v1/article/                         - Create an article
PUT    /api/v1/article/                         - Apply a changeset to an article
PUT    /api/v1/article/publish/{uuid}           - Publish
PUT    /api/v1/article/unpublish/{uuid}         - Unpublish
DELETE /api/v1/article/{uuid}                   - Delete
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, ensure_owner, get_current_user
from forum_server.core.database import get_session
from forum_server.services import articles as article_service
from forum_shared.schemas.articles import (
    ArticlePageResponse,
    FullArticleResponse,
    MinimalArticleResponse,
    NewArticleRequest,
    UpdateArticleRequest,
)

router = APIRouter()


async def _article_owner(session: AsyncSession, article_id: uuid.UUID) -> uuid.UUID | None:
    article = await article_service.articles.find(session, article_id)
    return article.author_id if article else None


@router.get("/articles/{index}/{size}", response_model=ArticlePageResponse)
async def get_published_articles(
    index: int,
    size: int,
    session: AsyncSession = Depends(get_session),
):
    page = await article_service.get_paginated(session, index, size)
    return ArticlePageResponse(
        data=[article_service.to_preview_response(d) for d in page.items],
        pagination=page.info(),
    )


@router.get("/users_unpublished", response_model=List[MinimalArticleResponse])
async def get_unpublished_articles(
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    drafts = await article_service.get_unpublished_articles_for_user(session, auth.user_id)
    return [article_service.to_minimal_response(a) for a in drafts]


@router.get("/{article_uuid}", response_model=FullArticleResponse)
async def get_article(
    article_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    data = await article_service.get_article_data(session, article_uuid)
    return article_service.to_full_response(data)


@router.post("/", response_model=MinimalArticleResponse, status_code=201)
async def create_article(
    body: NewArticleRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """Articles can only be created in your own name."""
    ensure_owner(body.author_uuid, auth)
    article = await article_service.create_article(session, body)
    await session.commit()
    return article_service.to_minimal_response(article)


@router.put("/", response_model=MinimalArticleResponse)
async def update_article(
    body: UpdateArticleRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner(await _article_owner(session, body.uuid), auth)
    article = await article_service.update_article(session, body)
    await session.commit()
    return article_service.to_minimal_response(article)


@router.put("/publish/{article_uuid}", status_code=204)
async def publish_article(
    article_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner(await _article_owner(session, article_uuid), auth)
    await article_service.set_publish_status(session, article_uuid, True)
    await session.commit()
    return Response(status_code=204)


@router.put("/unpublish/{article_uuid}", status_code=204)
async def unpublish_article(
    article_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner(await _article_owner(session, article_uuid), auth)
    await article_service.set_publish_status(session, article_uuid, False)
    await session.commit()
    return Response(status_code=204)


@router.delete("/{article_uuid}", response_model=MinimalArticleResponse)
async def delete_article(
    article_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner(await _article_owner(session, article_uuid), auth)
    article = await article_service.delete_article(session, article_uuid)
    await session.commit()
    return article_service.to_minimal_response(article)
