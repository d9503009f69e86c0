"""
Chat and message endpoints.

POST /api/v1/chat/                          - Start a chat (you lead it)
GET  /api/v1/chat/chats                     - Chats you belong to
GET  /api/v1/chat/{uuid}/users              - Members (members only)
PUT  /api/v1/chat/{uuid}/add/{user_uuid}    - Add a member (leader only)
GET  /api/v1/message/{index}?chat_uuid=...  - A page of history, newest first (members only)
POST /api/v1/message/send                   - Send a message (members only)
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, ensure_owner, get_current_user
from forum_server.core.config import Settings, get_app_settings
from forum_server.core.database import get_session
from forum_server.core.errors import ForbiddenError
from forum_server.services import chats as chat_service
from forum_server.services.users import to_user_response
from forum_shared.schemas.chats import (
    ChatResponse,
    MessageResponse,
    NewChatRequest,
    NewMessageRequest,
)
from forum_shared.schemas.users import UserResponse

router = APIRouter()
message_router = APIRouter()


async def _require_member(
    session: AsyncSession, chat_id: uuid.UUID, auth: AuthenticatedUser
) -> None:
    if not await chat_service.is_user_in_chat(session, chat_id, auth.user_id):
        raise ForbiddenError("Not a member of this chat")


# ---------------------------------------------------------------------------
# Chats
# ---------------------------------------------------------------------------

@router.post("/", response_model=ChatResponse, status_code=201)
async def create_chat(
    body: NewChatRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    chat = await chat_service.create_chat(session, body.chat_name, auth.user_id, body.user_uuids)
    await session.commit()
    return chat_service.to_chat_response(chat)


@router.get("/chats", response_model=List[ChatResponse])
async def get_my_chats(
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    return [chat_service.to_chat_response(c) for c in await chat_service.get_chats_for_user(session, auth.user_id)]


@router.get("/{chat_uuid}/users", response_model=List[UserResponse])
async def get_chat_users(
    chat_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await _require_member(session, chat_uuid, auth)
    return [to_user_response(u) for u in await chat_service.get_users_in_chat(session, chat_uuid)]


@router.put("/{chat_uuid}/add/{user_uuid}", status_code=204)
async def add_user_to_chat(
    chat_uuid: uuid.UUID,
    user_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    chat = await chat_service.chats.find(session, chat_uuid)
    ensure_owner(chat.leader_id if chat else None, auth)
    await chat_service.add_user_to_chat(session, chat_uuid, user_uuid)
    await session.commit()
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@message_router.get("/{index}", response_model=List[MessageResponse])
async def get_messages(
    index: int,
    chat_uuid: uuid.UUID = Query(...),
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    await _require_member(session, chat_uuid, auth)
    page = await chat_service.get_messages_for_chat(
        session, chat_uuid, index, settings.messages_page_size
    )
    return [chat_service.to_message_response(m) for m in page.items]


@message_router.post("/send", response_model=MessageResponse, status_code=201)
async def send_message(
    body: NewMessageRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """The sender must be a member and must be the message's author."""
    ensure_owner(body.author_uuid, auth)
    await _require_member(session, body.chat_uuid, auth)
    data = await chat_service.create_message(session, body)
    await session.commit()
    return chat_service.to_message_response(data)
