"""
Thread service: creation together with the opening post, forum listings,
locking and archiving.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import NotFoundError, translate_db_errors
from forum_server.models.base import utcnow
from forum_server.models.post import Post
from forum_server.models.thread import Thread
from forum_server.models.user import User
from forum_server.services.forums import forums
from forum_server.services.pagination import Page, paginate
from forum_server.services.posts import PostData, get_post_data, posts, to_post_response
from forum_server.services.repository import Repository
from forum_server.services.users import to_user_response, users
from forum_shared.identifiers import ForumUuid, ThreadUuid
from forum_shared.schemas.forums import MinimalThreadResponse, NewThreadRequest, ThreadResponse

log = structlog.get_logger()

# Threads are never hard-deleted through the API; they are archived
threads = Repository(Thread, deletable=False)


@dataclass
class MinimalThreadData:
    thread: Thread
    user: User


@dataclass
class ThreadData:
    thread: Thread
    post: PostData
    user: User


def to_minimal_thread_response(data: MinimalThreadData) -> MinimalThreadResponse:
    return MinimalThreadResponse(
        uuid=data.thread.id,
        forum_uuid=data.thread.forum_id,
        author=to_user_response(data.user),
        title=data.thread.title,
        created_date=data.thread.created_date,
        locked=data.thread.locked,
        archived=data.thread.archived,
    )


def to_thread_response(data: ThreadData) -> ThreadResponse:
    return ThreadResponse(
        **to_minimal_thread_response(MinimalThreadData(data.thread, data.user)).model_dump(),
        post=to_post_response(data.post),
    )


async def _with_author(session: AsyncSession, thread: Thread) -> MinimalThreadData:
    return MinimalThreadData(thread=thread, user=await users.get(session, thread.author_id))


async def create_thread_with_initial_post(
    session: AsyncSession, req: NewThreadRequest
) -> ThreadData:
    thread = await threads.create(
        session,
        Thread(forum_id=req.forum_uuid, author_id=req.author_uuid, title=req.title),
    )
    post = await posts.create(
        session,
        Post(thread_id=thread.id, author_id=req.author_uuid, content=req.post_content),
    )
    user = await users.get(session, thread.author_id)
    log.info("thread.created", thread_id=str(thread.id), forum_id=str(thread.forum_id))
    return ThreadData(thread=thread, post=PostData(post=post, user=user), user=user)


async def get_thread(session: AsyncSession, thread_id: ThreadUuid) -> Thread:
    return await threads.get(session, thread_id)


async def get_thread_data(session: AsyncSession, thread_id: ThreadUuid) -> ThreadData:
    """The thread, its author and its opening post with the reply tree."""
    thread = await get_thread(session, thread_id)
    user = await users.get(session, thread.author_id)
    async with translate_db_errors("Post"):
        result = await session.execute(
            select(Post.id)
            .where(Post.thread_id == thread.id, Post.parent_id.is_(None))
            .order_by(Post.created_date, Post.id)
            .limit(1)
        )
        opening_post_id = result.scalar_one_or_none()
    if opening_post_id is None:
        raise NotFoundError("Thread has no opening post")
    return ThreadData(thread=thread, post=await get_post_data(session, opening_post_id), user=user)


async def get_threads_in_forum(
    session: AsyncSession, forum_id: ForumUuid, page_index: int, page_size: int
) -> Page[MinimalThreadData]:
    """Non-archived threads in a forum, oldest first."""
    await forums.get(session, forum_id)
    stmt = (
        select(Thread, User)
        .join(User, User.id == Thread.author_id)
        .where(Thread.forum_id == forum_id, Thread.archived_at.is_(None))
        .order_by(Thread.created_date, Thread.id)
    )
    page = await paginate(session, stmt, page_index, page_size)
    return page.map(lambda row: MinimalThreadData(thread=row[0], user=row[1]))


async def set_lock_status(
    session: AsyncSession, thread_id: ThreadUuid, locked: bool
) -> MinimalThreadData:
    thread = await threads.update(session, thread_id, {"locked_at": utcnow() if locked else None})
    log.info("thread.locked" if locked else "thread.unlocked", thread_id=str(thread_id))
    return await _with_author(session, thread)


async def archive_thread(session: AsyncSession, thread_id: ThreadUuid) -> MinimalThreadData:
    thread = await threads.update(session, thread_id, {"archived_at": utcnow()})
    log.info("thread.archived", thread_id=str(thread_id))
    return await _with_author(session, thread)
