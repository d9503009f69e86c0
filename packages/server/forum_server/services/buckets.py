"""
Bucket service.

A bucket is a question board with members. The creator is its approved
owner; other users ask to join and are approved by an owner (immediately,
for public buckets).
"""

from __future__ import annotations

from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import NotFoundError, translate_db_errors
from forum_server.models.bucket import Bucket, BucketUser
from forum_server.models.user import User
from forum_server.services.pagination import Page, paginate
from forum_server.services.repository import Repository
from forum_shared.identifiers import BucketUuid, UserUuid
from forum_shared.schemas.buckets import BucketResponse, NewBucketRequest

log = structlog.get_logger()

buckets = Repository(Bucket, updatable=False)


def to_bucket_response(bucket: Bucket) -> BucketResponse:
    return BucketResponse(
        uuid=bucket.id,
        bucket_name=bucket.bucket_name,
        is_public=bucket.is_public,
        created_date=bucket.created_date,
    )


async def _membership(
    session: AsyncSession, bucket_id: BucketUuid, user_id: UserUuid
) -> BucketUser | None:
    async with translate_db_errors("Bucket membership"):
        return await session.get(BucketUser, (bucket_id, user_id))


async def create_bucket(
    session: AsyncSession, req: NewBucketRequest, creator_id: UserUuid
) -> Bucket:
    bucket = await buckets.create(
        session, Bucket(bucket_name=req.bucket_name, is_public=req.is_public)
    )
    async with translate_db_errors("Bucket membership"):
        session.add(BucketUser(bucket_id=bucket.id, user_id=creator_id, owner=True, approved=True))
        await session.flush()
    log.info("bucket.created", bucket_id=str(bucket.id), owner_id=str(creator_id))
    return bucket


async def get_bucket(session: AsyncSession, bucket_id: BucketUuid) -> Bucket:
    return await buckets.get(session, bucket_id)


async def get_public_buckets(
    session: AsyncSession, page_index: int, page_size: int
) -> Page[Bucket]:
    stmt = (
        select(Bucket)
        .where(Bucket.is_public.is_(True))
        .order_by(Bucket.created_date.desc(), Bucket.id)
    )
    return await paginate(session, stmt, page_index, page_size)


async def get_users_in_bucket(session: AsyncSession, bucket_id: BucketUuid) -> List[User]:
    """Approved members only."""
    await buckets.get(session, bucket_id)
    async with translate_db_errors("Bucket membership"):
        result = await session.execute(
            select(User)
            .join(BucketUser, BucketUser.user_id == User.id)
            .where(BucketUser.bucket_id == bucket_id, BucketUser.approved.is_(True))
            .order_by(User.user_name)
        )
        return list(result.scalars().all())


async def is_user_owner(session: AsyncSession, bucket_id: BucketUuid, user_id: UserUuid) -> bool:
    membership = await _membership(session, bucket_id, user_id)
    return membership is not None and membership.owner


async def is_user_approved(
    session: AsyncSession, bucket_id: BucketUuid, user_id: UserUuid
) -> bool:
    membership = await _membership(session, bucket_id, user_id)
    return membership is not None and membership.approved


async def request_join(session: AsyncSession, bucket_id: BucketUuid, user_id: UserUuid) -> BucketUser:
    """Ask to join. Public buckets approve immediately; repeating a request is harmless."""
    bucket = await buckets.get(session, bucket_id)
    membership = await _membership(session, bucket_id, user_id)
    if membership is not None:
        return membership
    membership = BucketUser(bucket_id=bucket_id, user_id=user_id, approved=bucket.is_public)
    async with translate_db_errors("Bucket membership"):
        session.add(membership)
        await session.flush()
    log.info("bucket.join_requested", bucket_id=str(bucket_id), user_id=str(user_id),
             approved=membership.approved)
    return membership


async def approve_user(session: AsyncSession, bucket_id: BucketUuid, user_id: UserUuid) -> BucketUser:
    membership = await _membership(session, bucket_id, user_id)
    if membership is None:
        raise NotFoundError("Join request not found")
    async with translate_db_errors("Bucket membership"):
        membership.approved = True
        session.add(membership)
        await session.flush()
    log.info("bucket.user_approved", bucket_id=str(bucket_id), user_id=str(user_id))
    return membership


async def remove_user_from_bucket(
    session: AsyncSession, bucket_id: BucketUuid, user_id: UserUuid
) -> BucketUser:
    membership = await _membership(session, bucket_id, user_id)
    if membership is None:
        raise NotFoundError("User is not in this bucket")
    async with translate_db_errors("Bucket membership"):
        await session.delete(membership)
        await session.flush()
    log.info("bucket.user_removed", bucket_id=str(bucket_id), user_id=str(user_id))
    return membership
