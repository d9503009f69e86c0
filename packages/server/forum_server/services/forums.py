"""Forum service. Forums are created and removed by administrators only."""

from __future__ import annotations

from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import translate_db_errors
from forum_server.models.forum import Forum
from forum_server.services.repository import Repository
from forum_shared.identifiers import ForumUuid
from forum_shared.schemas.forums import ForumResponse, NewForumRequest

log = structlog.get_logger()

# Forums have no changeset; they are only created and deleted
forums = Repository(Forum, updatable=False)


def to_forum_response(forum: Forum) -> ForumResponse:
    return ForumResponse(uuid=forum.id, title=forum.title, description=forum.description)


async def get_forums(session: AsyncSession) -> List[Forum]:
    async with translate_db_errors("Forum"):
        result = await session.execute(select(Forum).order_by(Forum.title))
        return list(result.scalars().all())


async def get_forum(session: AsyncSession, forum_id: ForumUuid) -> Forum:
    return await forums.get(session, forum_id)


async def create_forum(session: AsyncSession, req: NewForumRequest) -> Forum:
    forum = await forums.create(session, Forum(title=req.title, description=req.description))
    log.info("forum.created", forum_id=str(forum.id), title=forum.title)
    return forum


async def delete_forum(session: AsyncSession, forum_id: ForumUuid) -> Forum:
    """Delete an empty forum. A forum that still holds threads is a constraint violation."""
    forum = await forums.delete(session, forum_id)
    log.info("forum.deleted", forum_id=str(forum_id))
    return forum
