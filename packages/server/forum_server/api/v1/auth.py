"""
Authentication endpoints.

POST /api/v1/auth/login  - Exchange user name and password for a bearer token
GET  /api/v1/auth/me     - The identity behind the presented token
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, create_jwt, get_current_user
from forum_server.core.config import Settings, get_app_settings
from forum_server.core.database import get_session
from forum_server.services import users as user_service
from forum_shared.schemas.users import LoginRequest, LoginResponse, UserResponse

log = structlog.get_logger()
router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """Log in with user name and password. Returns a JWT for the Authorization header."""
    user = await user_service.authenticate(session, body.user_name, body.password)
    token, jti = create_jwt(user.id, user.user_name, user.role, settings=settings)
    log.info("auth.login", user_id=str(user.id), jti=jti)
    return LoginResponse(token=token, user=user_service.to_user_response(user))


@router.get("/me", response_model=UserResponse)
async def me(
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.get_user(session, auth.user_id)
    return user_service.to_user_response(user)
