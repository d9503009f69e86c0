"""
User service: account creation, lookup, display-name changes and login.
"""

from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.auth import hash_password, verify_password
from forum_server.core.errors import NotFoundError, UnauthorizedError, translate_db_errors
from forum_server.models.user import User
from forum_server.services.pagination import Page, paginate
from forum_server.services.repository import Repository
from forum_shared.identifiers import UserUuid
from forum_shared.schemas.common import Role
from forum_shared.schemas.users import NewUserRequest, UserResponse

log = structlog.get_logger()

users = Repository(User)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        uuid=user.id,
        user_name=user.user_name,
        display_name=user.display_name,
        role=Role(user.role),
        created_at=user.created_at,
    )


async def create_user(
    session: AsyncSession, req: NewUserRequest, role: Role = Role.USER
) -> User:
    """Create an account. A taken user name is a constraint violation."""
    user = User(
        user_name=req.user_name,
        display_name=req.display_name,
        password_hash=hash_password(req.plaintext_password),
        role=role.value,
    )
    user = await users.create(session, user)
    log.info("user.created", user_id=str(user.id), user_name=user.user_name)
    return user


async def get_user(session: AsyncSession, user_id: UserUuid) -> User:
    return await users.get(session, user_id)


async def get_user_by_name(session: AsyncSession, user_name: str) -> Optional[User]:
    async with translate_db_errors("User"):
        result = await session.execute(select(User).where(User.user_name == user_name))
        return result.scalar_one_or_none()


async def list_users(session: AsyncSession, page_index: int, page_size: int) -> Page[User]:
    stmt = select(User).order_by(User.user_name, User.id)
    return await paginate(session, stmt, page_index, page_size)


async def update_display_name(
    session: AsyncSession, user_name: str, new_display_name: str
) -> User:
    user = await get_user_by_name(session, user_name)
    if user is None:
        raise NotFoundError("User not found")
    user = await users.update(session, user.id, {"display_name": new_display_name})
    log.info("user.display_name_changed", user_id=str(user.id))
    return user


async def delete_user(session: AsyncSession, user_id: UserUuid) -> User:
    """Delete a user. Everything the user owns goes with them."""
    user = await users.delete(session, user_id)
    log.info("user.deleted", user_id=str(user_id))
    return user


async def authenticate(session: AsyncSession, user_name: str, password: str) -> User:
    """Check credentials. Unknown names and wrong passwords look the same."""
    user = await get_user_by_name(session, user_name)
    if user is None or not verify_password(password, user.password_hash):
        log.info("user.login_failed", user_name=user_name)
        raise UnauthorizedError("Invalid user name or password")
    return user
