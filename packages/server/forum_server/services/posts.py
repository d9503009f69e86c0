"""
Post service.

Posts hang off a thread and may reply to another post in the same thread,
forming a tree. Locked threads accept no new posts.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    translate_db_errors,
)
from forum_server.models.base import utcnow
from forum_server.models.post import Post
from forum_server.models.thread import Thread
from forum_server.models.user import User
from forum_server.services.repository import Repository
from forum_server.services.users import to_user_response, users
from forum_shared.identifiers import PostUuid
from forum_shared.schemas.forums import EditPostRequest, NewPostRequest, PostResponse

log = structlog.get_logger()

posts = Repository(Post)

CENSORED_TEXT = "This post has been censored by a moderator."


@dataclass
class PostData:
    post: Post
    user: User
    children: List["PostData"] = field(default_factory=list)


def to_post_response(data: PostData) -> PostResponse:
    return PostResponse(
        uuid=data.post.id,
        thread_uuid=data.post.thread_id,
        parent_uuid=data.post.parent_id,
        author=to_user_response(data.user),
        content=CENSORED_TEXT if data.post.censored else data.post.content,
        created_date=data.post.created_date,
        modified_date=data.post.modified_date,
        censored=data.post.censored,
        children=[to_post_response(child) for child in data.children],
    )


async def create_post(session: AsyncSession, req: NewPostRequest) -> PostData:
    """Reply in a thread.

    Raises Forbidden when the thread is locked and BadRequest when the parent
    post belongs to another thread.
    """
    thread = await session.get(Thread, req.thread_uuid)
    if thread is not None and thread.locked:
        raise ForbiddenError("Thread is locked")
    if req.parent_uuid is not None:
        parent = await posts.get(session, req.parent_uuid)
        if parent.thread_id != req.thread_uuid:
            raise BadRequestError("Parent post belongs to another thread")

    post = await posts.create(
        session,
        Post(
            thread_id=req.thread_uuid,
            author_id=req.author_uuid,
            parent_id=req.parent_uuid,
            content=req.content,
        ),
    )
    user = await users.get(session, post.author_id)
    log.info("post.created", post_id=str(post.id), thread_id=str(post.thread_id))
    return PostData(post=post, user=user)


async def get_post_data(session: AsyncSession, post_id: PostUuid) -> PostData:
    """A post with its author and every reply below it, oldest first."""
    root = await posts.get(session, post_id)

    async with translate_db_errors("Post"):
        result = await session.execute(
            select(Post, User)
            .join(User, User.id == Post.author_id)
            .where(Post.thread_id == root.thread_id)
            .order_by(Post.created_date, Post.id)
        )
        rows = result.all()

    nodes: Dict[uuid.UUID, PostData] = {post.id: PostData(post=post, user=user) for post, user in rows}
    if root.id not in nodes:
        # Deleted between the two reads
        raise NotFoundError("Post not found")
    for post, _ in rows:
        if post.parent_id is not None and post.parent_id in nodes:
            nodes[post.parent_id].children.append(nodes[post.id])
    return nodes[root.id]


async def edit_post(session: AsyncSession, req: EditPostRequest) -> PostData:
    """Raises Forbidden when the post's thread is locked."""
    post = await posts.get(session, req.uuid)
    thread = await session.get(Thread, post.thread_id)
    if thread is not None and thread.locked:
        raise ForbiddenError("Thread is locked")
    changes = req.model_dump(exclude_none=True, exclude={"uuid"})
    if changes:
        changes["modified_date"] = utcnow()
    await posts.update(session, req.uuid, changes)
    log.info("post.edited", post_id=str(req.uuid))
    return await get_post_data(session, req.uuid)


async def censor_post(session: AsyncSession, post_id: PostUuid) -> PostData:
    await posts.update(session, post_id, {"censored": True})
    log.info("post.censored", post_id=str(post_id))
    return await get_post_data(session, post_id)
