"""
Thread endpoints.

GET /api/v1/thread/forum/{forum_uuid}/{index}/{size}  - Page through a forum's open threads
GET /api/v1/thread/{uuid}                             - A thread with its post tree
POST /api/v1/thread/                                  - Start a thread with its opening post
PUT /api/v1/thread/lock/{uuid}                        - Lock (author or moderator)
PUT /api/v1/thread/unlock/{uuid}                      - Unlock (author or moderator)
PUT /api/v1/thread/archive/{uuid}                     - Archive (author or moderator)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import (
    AuthenticatedUser,
    ensure_owner,
    ensure_owner_or_moderator,
    get_current_user,
)
from forum_server.core.database import get_session
from forum_server.services import threads as thread_service
from forum_shared.schemas.forums import (
    MinimalThreadPageResponse,
    NewThreadRequest,
    ThreadResponse,
)

router = APIRouter()


async def _thread_owner(session: AsyncSession, thread_id: uuid.UUID) -> uuid.UUID | None:
    thread = await thread_service.threads.find(session, thread_id)
    return thread.author_id if thread else None


@router.get("/forum/{forum_uuid}/{index}/{size}", response_model=MinimalThreadPageResponse)
async def get_threads_in_forum(
    forum_uuid: uuid.UUID,
    index: int,
    size: int,
    session: AsyncSession = Depends(get_session),
):
    page = await thread_service.get_threads_in_forum(session, forum_uuid, index, size)
    return MinimalThreadPageResponse(
        data=[thread_service.to_minimal_thread_response(d) for d in page.items],
        pagination=page.info(),
    )


@router.get("/{thread_uuid}", response_model=ThreadResponse)
async def get_thread(
    thread_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return thread_service.to_thread_response(await thread_service.get_thread_data(session, thread_uuid))


@router.post("/", response_model=ThreadResponse, status_code=201)
async def create_thread(
    body: NewThreadRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner(body.author_uuid, auth)
    data = await thread_service.create_thread_with_initial_post(session, body)
    await session.commit()
    return thread_service.to_thread_response(data)


@router.put("/lock/{thread_uuid}", status_code=204)
async def lock_thread(
    thread_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner_or_moderator(await _thread_owner(session, thread_uuid), auth)
    await thread_service.set_lock_status(session, thread_uuid, True)
    await session.commit()
    return Response(status_code=204)


@router.put("/unlock/{thread_uuid}", status_code=204)
async def unlock_thread(
    thread_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner_or_moderator(await _thread_owner(session, thread_uuid), auth)
    await thread_service.set_lock_status(session, thread_uuid, False)
    await session.commit()
    return Response(status_code=204)


@router.put("/archive/{thread_uuid}", status_code=204)
async def archive_thread(
    thread_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    ensure_owner_or_moderator(await _thread_owner(session, thread_uuid), auth)
    await thread_service.archive_thread(session, thread_uuid)
    await session.commit()
    return Response(status_code=204)
