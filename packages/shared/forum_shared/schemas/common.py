from enum import Enum
from pydantic import BaseModel

class Role(str, Enum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

# Roles allowed to lock/archive threads and censor posts
MODERATION_ROLES: frozenset["Role"] = frozenset({Role.MODERATOR, Role.ADMIN})

class PageInfo(BaseModel):
    page_index: int
    page_size: int
    total_count: int
    page_count: int

class ErrorDetail(BaseModel):
    code: str
    message: str
    status: int

class ErrorResponse(BaseModel):
    error: ErrorDetail
