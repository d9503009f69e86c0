"""
Authentication and authorization for the forum API.

Supports:
- Password hashing with bcrypt
- Stateless JWT bearer tokens (``Authorization: Bearer <jwt>``)
- Role checks for moderators and administrators
- Owner checks before mutating a resource
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
import structlog
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from forum_server.core.config import Settings, get_settings
from forum_server.core.errors import ForbiddenError, UnauthorizedError
from forum_shared.schemas.common import MODERATION_ROLES, Role

log = structlog.get_logger()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a password using bcrypt with cost factor 12."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=12)).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode(), hashed.encode())


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def create_jwt(
    user_id: uuid.UUID,
    user_name: str,
    role: str,
    *,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> tuple[str, str]:
    """Create a signed JWT. Returns (token, jti)."""
    settings = settings or get_settings()
    jti = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": str(user_id),
        "user_name": user_name,
        "role": role,
        "iat": now,
        "exp": exp,
        "jti": jti,
    }
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return token, jti


def decode_jwt(token: str, settings: Settings | None = None) -> dict:
    """Decode and verify a JWT. Raises jwt.PyJWTError on failure."""
    settings = settings or get_settings()
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


# ---------------------------------------------------------------------------
# Authentication dependencies
# ---------------------------------------------------------------------------

class AuthenticatedUser:
    """Identity resolved from a bearer token."""

    def __init__(self, user_id: uuid.UUID, user_name: str, role: Role):
        self.user_id = user_id
        self.user_name = user_name
        self.role = role

    @property
    def is_moderator(self) -> bool:
        return self.role in MODERATION_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __repr__(self) -> str:
        return f"AuthenticatedUser(user_id={self.user_id}, role={self.role.value})"


def _authenticate_jwt(token: str, settings: Settings) -> AuthenticatedUser:
    try:
        payload = decode_jwt(token, settings)
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid or expired token")

    try:
        return AuthenticatedUser(
            user_id=uuid.UUID(payload["sub"]),
            user_name=payload["user_name"],
            role=Role(payload.get("role", Role.USER.value)),
        )
    except (KeyError, ValueError):
        raise UnauthorizedError("Malformed token claims")


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Depends(api_key_header),
) -> AuthenticatedUser:
    """Main authentication dependency: resolves the bearer token to an identity."""
    if not authorization or authorization[:7].lower() != "bearer ":
        raise UnauthorizedError()

    settings: Settings = getattr(request.app.state, "settings", None) or get_settings()
    auth_user = _authenticate_jwt(authorization[7:].strip(), settings)
    request.state.auth = auth_user
    structlog.contextvars.bind_contextvars(user_id=str(auth_user.user_id))
    return auth_user


# ---------------------------------------------------------------------------
# Authorization dependencies (role checks)
# ---------------------------------------------------------------------------

async def require_moderator(
    auth: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Requires moderator or administrator role."""
    if not auth.is_moderator:
        raise ForbiddenError("Moderator access required")
    return auth


async def require_admin(
    auth: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Requires administrator role."""
    if not auth.is_admin:
        raise ForbiddenError("Administrator access required")
    return auth


# ---------------------------------------------------------------------------
# Owner checks
# ---------------------------------------------------------------------------

def ensure_owner(owner_id: uuid.UUID | None, auth: AuthenticatedUser) -> None:
    """Raise Forbidden unless ``auth`` owns the target.

    ``owner_id`` is ``None`` when the target does not exist; that case is
    reported exactly like a mismatch so callers cannot discover which ids exist.
    """
    if owner_id is None or owner_id != auth.user_id:
        log.info("auth.owner_check_failed", user_id=str(auth.user_id))
        raise ForbiddenError()


def ensure_owner_or_moderator(owner_id: uuid.UUID | None, auth: AuthenticatedUser) -> None:
    if auth.is_moderator and owner_id is not None:
        return
    ensure_owner(owner_id, auth)
