"""
Generic data-access interface shared by every entity service.

Each entity gets one ``Repository`` instance. Operations an entity does not
support are switched off with ``updatable=False`` / ``deletable=False`` and
raise ``UnsupportedOperationError`` instead of touching the store.
"""

from __future__ import annotations

import uuid
from typing import Any, Generic, Mapping, Optional, Type, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from forum_server.core.errors import (
    NotFoundError,
    UnsupportedOperationError,
    translate_db_errors,
)

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=SQLModel)


class Repository(Generic[ModelT]):
    """Find/get/create/update/delete for one table keyed by a UUID ``id``."""

    def __init__(
        self,
        model: Type[ModelT],
        *,
        name: str | None = None,
        updatable: bool = True,
        deletable: bool = True,
    ):
        self.model = model
        self.name = name or model.__name__
        self.updatable = updatable
        self.deletable = deletable

    async def find(self, session: AsyncSession, entity_id: uuid.UUID) -> Optional[ModelT]:
        async with translate_db_errors(self.name):
            return await session.get(self.model, entity_id)

    async def get(self, session: AsyncSession, entity_id: uuid.UUID) -> ModelT:
        entity = await self.find(session, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.name} not found")
        return entity

    async def create(self, session: AsyncSession, entity: ModelT) -> ModelT:
        async with translate_db_errors(self.name):
            session.add(entity)
            await session.flush()
            await session.refresh(entity)
        return entity

    async def update(
        self,
        session: AsyncSession,
        entity_id: uuid.UUID,
        changes: Mapping[str, Any],
    ) -> ModelT:
        """Apply ``changes`` to the stored row. The ``id`` key is never applied."""
        if not self.updatable:
            raise UnsupportedOperationError(f"{self.name} cannot be updated")
        entity = await self.get(session, entity_id)
        for field, value in changes.items():
            if field == "id":
                continue
            setattr(entity, field, value)
        async with translate_db_errors(self.name):
            session.add(entity)
            await session.flush()
            await session.refresh(entity)
        return entity

    async def delete(self, session: AsyncSession, entity_id: uuid.UUID) -> ModelT:
        """Delete and return the row as it was before deletion."""
        if not self.deletable:
            raise UnsupportedOperationError(f"{self.name} cannot be deleted")
        entity = await self.get(session, entity_id)
        async with translate_db_errors(self.name):
            await session.delete(entity)
            await session.flush()
        return entity
