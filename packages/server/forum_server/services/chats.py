"""
Chat and message service.

A chat has a leader and a set of members; only members read or write its
messages. History is served newest first in fixed-size pages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import BadRequestError, translate_db_errors
from forum_server.models.chat import Chat, ChatUser, Message
from forum_server.models.user import User
from forum_server.services.pagination import Page, paginate
from forum_server.services.repository import Repository
from forum_server.services.users import to_user_response, users
from forum_shared.identifiers import ChatUuid, UserUuid
from forum_shared.schemas.chats import ChatResponse, MessageResponse, NewMessageRequest

log = structlog.get_logger()

chats = Repository(Chat, updatable=False)
# Messages are append-only
messages = Repository(Message, updatable=False, deletable=False)

DEFAULT_MESSAGES_PAGE_SIZE = 25


@dataclass
class MessageData:
    message: Message
    user: User


def to_chat_response(chat: Chat) -> ChatResponse:
    return ChatResponse(
        uuid=chat.id,
        chat_name=chat.chat_name,
        leader_uuid=chat.leader_id,
        created_date=chat.created_date,
    )


def to_message_response(data: MessageData) -> MessageResponse:
    return MessageResponse(
        uuid=data.message.id,
        chat_uuid=data.message.chat_id,
        author=to_user_response(data.user),
        reply_uuid=data.message.reply_id,
        message_content=data.message.message_content,
        read_flag=data.message.read_flag,
        create_date=data.message.create_date,
    )


# ---------------------------------------------------------------------------
# Chats
# ---------------------------------------------------------------------------

async def create_chat(
    session: AsyncSession,
    chat_name: str,
    leader_id: UserUuid,
    user_ids: Iterable[UserUuid] = (),
) -> Chat:
    """Create a chat. The leader and every invited user become members."""
    chat = await chats.create(session, Chat(chat_name=chat_name, leader_id=leader_id))
    member_ids = {leader_id, *user_ids}
    async with translate_db_errors("Chat membership"):
        for member_id in member_ids:
            session.add(ChatUser(chat_id=chat.id, user_id=member_id))
        await session.flush()
    log.info("chat.created", chat_id=str(chat.id), members=len(member_ids))
    return chat


async def get_chat(session: AsyncSession, chat_id: ChatUuid) -> Chat:
    return await chats.get(session, chat_id)


async def get_chats_for_user(session: AsyncSession, user_id: UserUuid) -> List[Chat]:
    async with translate_db_errors("Chat"):
        result = await session.execute(
            select(Chat)
            .join(ChatUser, ChatUser.chat_id == Chat.id)
            .where(ChatUser.user_id == user_id)
            .order_by(Chat.created_date, Chat.id)
        )
        return list(result.scalars().all())


async def get_users_in_chat(session: AsyncSession, chat_id: ChatUuid) -> List[User]:
    await get_chat(session, chat_id)
    async with translate_db_errors("Chat membership"):
        result = await session.execute(
            select(User)
            .join(ChatUser, ChatUser.user_id == User.id)
            .where(ChatUser.chat_id == chat_id)
            .order_by(User.user_name)
        )
        return list(result.scalars().all())


async def is_user_in_chat(session: AsyncSession, chat_id: ChatUuid, user_id: UserUuid) -> bool:
    async with translate_db_errors("Chat membership"):
        return await session.get(ChatUser, (chat_id, user_id)) is not None


async def add_user_to_chat(session: AsyncSession, chat_id: ChatUuid, user_id: UserUuid) -> None:
    await get_chat(session, chat_id)
    if await is_user_in_chat(session, chat_id, user_id):
        return
    async with translate_db_errors("Chat membership"):
        session.add(ChatUser(chat_id=chat_id, user_id=user_id))
        await session.flush()
    log.info("chat.user_added", chat_id=str(chat_id), user_id=str(user_id))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

async def create_message(session: AsyncSession, req: NewMessageRequest) -> MessageData:
    if req.reply_uuid is not None:
        replied_to = await messages.get(session, req.reply_uuid)
        if replied_to.chat_id != req.chat_uuid:
            raise BadRequestError("Replied-to message belongs to another chat")
    message = await messages.create(
        session,
        Message(
            chat_id=req.chat_uuid,
            author_id=req.author_uuid,
            reply_id=req.reply_uuid,
            message_content=req.message_content,
        ),
    )
    log.info("message.created", message_id=str(message.id), chat_id=str(message.chat_id))
    return MessageData(message=message, user=await users.get(session, message.author_id))


async def get_messages_for_chat(
    session: AsyncSession,
    chat_id: ChatUuid,
    page_index: int,
    page_size: int = DEFAULT_MESSAGES_PAGE_SIZE,
) -> Page[MessageData]:
    """Newest messages first."""
    stmt = (
        select(Message, User)
        .join(User, User.id == Message.author_id)
        .where(Message.chat_id == chat_id)
        .order_by(Message.create_date.desc(), Message.id)
    )
    page = await paginate(session, stmt, page_index, page_size)
    return page.map(lambda row: MessageData(message=row[0], user=row[1]))
