"""
Bucket endpoints.

POST   /api/v1/bucket/                           - Create a bucket (you become its owner)
GET    /api/v1/bucket/public/{index}/{size}      - Page through public buckets
GET    /api/v1/bucket/{uuid}                     - Get a bucket
GET    /api/v1/bucket/{uuid}/users               - Approved members
GET    /api/v1/bucket/{uuid}/is_owner            - Whether you own the bucket
POST   /api/v1/bucket/{uuid}/join                - Ask to join
PUT    /api/v1/bucket/{uuid}/approve/{user_uuid} - Approve a join request (Owner)
DELETE /api/v1/bucket/{uuid}/user/{user_uuid}    - Remove a member (Owner)
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, get_current_user
from forum_server.core.database import get_session
from forum_server.core.errors import ForbiddenError
from forum_server.services import buckets as bucket_service
from forum_server.services.users import to_user_response
from forum_shared.schemas.buckets import BucketPageResponse, BucketResponse, NewBucketRequest
from forum_shared.schemas.users import UserResponse

router = APIRouter()


async def _require_bucket_owner(
    session: AsyncSession, bucket_id: uuid.UUID, auth: AuthenticatedUser
) -> None:
    if not await bucket_service.is_user_owner(session, bucket_id, auth.user_id):
        raise ForbiddenError()


@router.post("/", response_model=BucketResponse, status_code=201)
async def create_bucket(
    body: NewBucketRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    bucket = await bucket_service.create_bucket(session, body, auth.user_id)
    await session.commit()
    return bucket_service.to_bucket_response(bucket)


@router.get("/public/{index}/{size}", response_model=BucketPageResponse)
async def get_public_buckets(
    index: int,
    size: int,
    session: AsyncSession = Depends(get_session),
):
    page = await bucket_service.get_public_buckets(session, index, size)
    return BucketPageResponse(
        data=[bucket_service.to_bucket_response(b) for b in page.items],
        pagination=page.info(),
    )


@router.get("/{bucket_uuid}", response_model=BucketResponse)
async def get_bucket(
    bucket_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return bucket_service.to_bucket_response(await bucket_service.get_bucket(session, bucket_uuid))


@router.get("/{bucket_uuid}/users", response_model=List[UserResponse])
async def get_users_in_bucket(
    bucket_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return [to_user_response(u) for u in await bucket_service.get_users_in_bucket(session, bucket_uuid)]


@router.get("/{bucket_uuid}/is_owner", response_model=bool)
async def is_owner(
    bucket_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    return await bucket_service.is_user_owner(session, bucket_uuid, auth.user_id)


@router.post("/{bucket_uuid}/join", status_code=204)
async def join_bucket(
    bucket_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await bucket_service.request_join(session, bucket_uuid, auth.user_id)
    await session.commit()
    return Response(status_code=204)


@router.put("/{bucket_uuid}/approve/{user_uuid}", status_code=204)
async def approve_user(
    bucket_uuid: uuid.UUID,
    user_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await _require_bucket_owner(session, bucket_uuid, auth)
    await bucket_service.approve_user(session, bucket_uuid, user_uuid)
    await session.commit()
    return Response(status_code=204)


@router.delete("/{bucket_uuid}/user/{user_uuid}", status_code=204)
async def remove_user(
    bucket_uuid: uuid.UUID,
    user_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    await _require_bucket_owner(session, bucket_uuid, auth)
    await bucket_service.remove_user_from_bucket(session, bucket_uuid, user_uuid)
    await session.commit()
    return Response(status_code=204)
