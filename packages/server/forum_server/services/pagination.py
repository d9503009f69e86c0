"""
Offset pagination over an already filtered and ordered SELECT.

``paginate`` runs two queries: the page window itself and a count over the
same statement with its ORDER BY removed. Callers own the ordering and must
make it stable (for example a timestamp followed by the primary key),
otherwise rows can repeat or vanish across pages.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from forum_server.core.errors import BadRequestError, translate_db_errors
from forum_shared.schemas.common import PageInfo

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total_count: int = 0
    page_index: int = 0
    page_size: int = 1

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            page_index=self.page_index,
            page_size=self.page_size,
        )

    def info(self) -> PageInfo:
        return PageInfo(
            page_index=self.page_index,
            page_size=self.page_size,
            total_count=self.total_count,
            page_count=self.page_count,
        )


def validate_page_request(page_index: int, page_size: int) -> None:
    if page_size < 1:
        raise BadRequestError("page_size must be at least 1")
    if page_index < 0:
        raise BadRequestError("page_index must not be negative")


async def paginate(
    session: AsyncSession,
    statement: Select,
    page_index: int,
    page_size: int,
) -> Page[Any]:
    """Fetch page ``page_index`` (0-based) of ``statement``.

    A statement selecting a single ORM entity yields entity instances; one
    selecting several entities (a join) yields row tuples.
    """
    validate_page_request(page_index, page_size)

    single_entity = len(statement.column_descriptions) == 1
    window = statement.offset(page_index * page_size).limit(page_size)
    count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())

    async with translate_db_errors("Page"):
        result = await session.execute(window)
        items = list(result.scalars().all()) if single_entity else [tuple(row) for row in result.all()]
        total_count = (await session.execute(count_stmt)).scalar_one()

    return Page(items=items, total_count=total_count, page_index=page_index, page_size=page_size)
