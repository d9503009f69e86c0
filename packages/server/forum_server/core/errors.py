"""
Error taxonomy shared by the data-access and route layers.

Services raise these; ``create_app`` installs handlers that turn them into a
status code and a machine-readable body::

    {"error": {"code": "NOT_FOUND", "message": "Article not found", "status": 404}}

Store-specific failures are converted at the service boundary by
``translate_db_errors``. Nothing here retries.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from sqlalchemy import exc as sa_exc

log = structlog.get_logger()


class ForumError(Exception):
    status_code: int = 500
    code: str = "INTERNAL"
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "status": self.status_code,
            }
        }


class NotFoundError(ForumError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class ConstraintViolationError(ForumError):
    """Foreign-key or uniqueness failure reported by the store."""
    status_code = 409
    code = "CONSTRAINT_VIOLATION"
    default_message = "Constraint violation"


class UnauthorizedError(ForumError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ForbiddenError(ForumError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class BadRequestError(ForumError):
    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Bad request"


class UnsupportedOperationError(ForumError):
    status_code = 405
    code = "UNSUPPORTED_OPERATION"
    default_message = "Operation not supported"


class ServiceUnavailableError(ForumError):
    status_code = 503
    code = "SERVICE_UNAVAILABLE"
    default_message = "Database connection pool exhausted"


class InternalError(ForumError):
    default_message = "Query failed"


@asynccontextmanager
async def translate_db_errors(entity: str) -> AsyncIterator[None]:
    """Convert SQLAlchemy failures raised inside the block into the taxonomy."""
    try:
        yield
    except ForumError:
        raise
    except sa_exc.IntegrityError as exc:
        log.info("db.constraint_violation", entity=entity, detail=str(exc.orig))
        raise ConstraintViolationError(f"{entity} violates a database constraint") from exc
    except sa_exc.NoResultFound as exc:
        raise NotFoundError(f"{entity} not found") from exc
    except sa_exc.TimeoutError as exc:
        log.warning("db.pool_exhausted", entity=entity)
        raise ServiceUnavailableError() from exc
    except sa_exc.SQLAlchemyError as exc:
        log.error("db.query_failed", entity=entity, error=str(exc))
        raise InternalError(f"{entity} query failed") from exc
