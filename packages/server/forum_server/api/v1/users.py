"""
User endpoints.

POST   /api/v1/user/                      - Create an account
GET    /api/v1/user/users/{index}/{size}  - Page through users
PUT    /api/v1/user/display_name          - Change your own display name
GET    /api/v1/user/{uuid}                - Get a user
DELETE /api/v1/user/{uuid}                - Delete your own account
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, ensure_owner, get_current_user
from forum_server.core.database import get_session
from forum_server.core.errors import ForbiddenError
from forum_server.services import users as user_service
from forum_shared.schemas.users import (
    NewUserRequest,
    UpdateDisplayNameRequest,
    UserPageResponse,
    UserResponse,
)

router = APIRouter()


@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(
    body: NewUserRequest,
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.create_user(session, body)
    await session.commit()
    return user_service.to_user_response(user)


@router.get("/users/{index}/{size}", response_model=UserPageResponse)
async def list_users(
    index: int,
    size: int,
    session: AsyncSession = Depends(get_session),
):
    page = await user_service.list_users(session, index, size)
    return UserPageResponse(
        data=[user_service.to_user_response(u) for u in page.items],
        pagination=page.info(),
    )


@router.put("/display_name", response_model=UserResponse)
async def update_display_name(
    body: UpdateDisplayNameRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """Only the account holder may rename themselves."""
    if body.user_name != auth.user_name:
        raise ForbiddenError()
    user = await user_service.update_display_name(session, body.user_name, body.new_display_name)
    await session.commit()
    return user_service.to_user_response(user)


@router.get("/{user_uuid}", response_model=UserResponse)
async def get_user(
    user_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.get_user(session, user_uuid)
    return user_service.to_user_response(user)


@router.delete("/{user_uuid}", response_model=UserResponse)
async def delete_user(
    user_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """Delete your own account along with everything you own."""
    ensure_owner(user_uuid, auth)
    user = await user_service.delete_user(session, user_uuid)
    await session.commit()
    return user_service.to_user_response(user)
