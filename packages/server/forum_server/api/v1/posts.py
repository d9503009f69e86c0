"""
Post endpoints.

GET /api/v1/post/{uuid}         - A post with its replies
POST /api/v1/post/              - Reply in a thread
PUT /api/v1/post/               - Edit your own post
PUT /api/v1/post/censor/{uuid}  - Censor a post (Moderator)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import (
    AuthenticatedUser,
    ensure_owner,
    get_current_user,
    require_moderator,
)
from forum_server.core.database import get_session
from forum_server.services import posts as post_service
from forum_shared.schemas.forums import EditPostRequest, NewPostRequest, PostResponse

router = APIRouter()


@router.get("/{post_uuid}", response_model=PostResponse)
async def get_post(
    post_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return post_service.to_post_response(await post_service.get_post_data(session, post_uuid))


@router.post("/", response_model=PostResponse, status_code=201)
async def create_post(
    body: NewPostRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """403 when the thread is locked."""
    ensure_owner(body.author_uuid, auth)
    data = await post_service.create_post(session, body)
    await session.commit()
    return post_service.to_post_response(data)


@router.put("/", response_model=PostResponse)
async def edit_post(
    body: EditPostRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    post = await post_service.posts.find(session, body.uuid)
    ensure_owner(post.author_id if post else None, auth)
    data = await post_service.edit_post(session, body)
    await session.commit()
    return post_service.to_post_response(data)


@router.put("/censor/{post_uuid}", response_model=PostResponse)
async def censor_post(
    post_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(require_moderator),
    session: AsyncSession = Depends(get_session),
):
    data = await post_service.censor_post(session, post_uuid)
    await session.commit()
    return post_service.to_post_response(data)
