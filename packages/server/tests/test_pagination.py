"""
Tests for the pagination utility against a real (SQLite) store.

Tests cover:
- Window sizes and total counts
- Past-the-end pages
- Joined statements yielding tuples
- Rejection of invalid page requests
"""

from __future__ import annotations

import pytest
from sqlmodel import select

from forum_server.core.errors import BadRequestError
from forum_server.models.forum import Forum
from forum_server.models.thread import Thread
from forum_server.models.user import User
from forum_server.services.pagination import Page, paginate


@pytest.fixture
async def seven_forums(session):
    for n in range(7):
        session.add(Forum(title=f"forum-{n}", description=""))
    await session.flush()


def _forums_stmt():
    return select(Forum).order_by(Forum.title, Forum.id)


class TestPage:
    def test_page_count_rounds_up(self):
        assert Page(items=[], total_count=7, page_index=0, page_size=3).page_count == 3

    def test_page_count_exact(self):
        assert Page(items=[], total_count=6, page_index=0, page_size=3).page_count == 2

    def test_page_count_empty(self):
        assert Page(items=[], total_count=0, page_index=0, page_size=10).page_count == 0

    def test_map_keeps_counts(self):
        page = Page(items=[1, 2], total_count=5, page_index=1, page_size=2).map(str)
        assert page.items == ["1", "2"]
        assert (page.total_count, page.page_index, page.page_size) == (5, 1, 2)

    def test_info(self):
        info = Page(items=[], total_count=5, page_index=1, page_size=2).info()
        assert info.page_count == 3
        assert info.total_count == 5


class TestPaginate:
    async def test_pages_partition_the_result(self, session, seven_forums):
        seen = []
        for index in range(3):
            page = await paginate(session, _forums_stmt(), index, 3)
            assert len(page.items) <= 3
            assert page.total_count == 7
            assert page.page_count == 3
            seen.extend(f.title for f in page.items)
        assert seen == [f"forum-{n}" for n in range(7)]

    async def test_last_page_is_partial(self, session, seven_forums):
        page = await paginate(session, _forums_stmt(), 2, 3)
        assert [f.title for f in page.items] == ["forum-6"]

    async def test_past_the_end_is_empty_with_count(self, session, seven_forums):
        page = await paginate(session, _forums_stmt(), 5, 3)
        assert page.items == []
        assert page.total_count == 7

    async def test_filter_applies_to_count(self, session, seven_forums):
        stmt = select(Forum).where(Forum.title.in_(["forum-1", "forum-2"])).order_by(Forum.title)
        page = await paginate(session, stmt, 0, 10)
        assert page.total_count == 2
        assert len(page.items) == 2

    async def test_join_yields_tuples(self, session):
        user = User(user_name="poster", display_name="Poster", password_hash="x")
        forum = Forum(title="joined")
        session.add_all([user, forum])
        await session.flush()
        for n in range(4):
            session.add(Thread(forum_id=forum.id, author_id=user.id, title=f"t{n}"))
        await session.flush()

        stmt = (
            select(Thread, User)
            .join(User, User.id == Thread.author_id)
            .order_by(Thread.title, Thread.id)
        )
        page = await paginate(session, stmt, 1, 3)
        assert page.total_count == 4
        assert len(page.items) == 1
        thread, author = page.items[0]
        assert thread.title == "t3"
        assert author.user_name == "poster"

    @pytest.mark.parametrize("index,size", [(0, 0), (0, -1), (-1, 10)])
    async def test_invalid_request_rejected(self, session, index, size):
        with pytest.raises(BadRequestError):
            await paginate(session, _forums_stmt(), index, size)
