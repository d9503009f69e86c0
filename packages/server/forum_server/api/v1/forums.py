"""
Forum endpoints.

GET    /api/v1/forum/forums  - All forums, by title
GET    /api/v1/forum/{uuid}  - Get a forum
POST   /api/v1/forum/        - Create a forum (Admin only)
DELETE /api/v1/forum/{uuid}  - Delete an empty forum (Admin only)
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, require_admin
from forum_server.core.database import get_session
from forum_server.services import forums as forum_service
from forum_shared.schemas.forums import ForumResponse, NewForumRequest

router = APIRouter()


@router.get("/forums", response_model=List[ForumResponse])
async def get_forums(session: AsyncSession = Depends(get_session)):
    return [forum_service.to_forum_response(f) for f in await forum_service.get_forums(session)]


@router.get("/{forum_uuid}", response_model=ForumResponse)
async def get_forum(
    forum_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return forum_service.to_forum_response(await forum_service.get_forum(session, forum_uuid))


@router.post("/", response_model=ForumResponse, status_code=201)
async def create_forum(
    body: NewForumRequest,
    auth: AuthenticatedUser = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    forum = await forum_service.create_forum(session, body)
    await session.commit()
    return forum_service.to_forum_response(forum)


@router.delete("/{forum_uuid}", response_model=ForumResponse)
async def delete_forum(
    forum_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Fails with 409 while the forum still holds threads."""
    forum = await forum_service.delete_forum(session, forum_uuid)
    await session.commit()
    return forum_service.to_forum_response(forum)
