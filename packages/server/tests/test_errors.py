"""
Tests for the error taxonomy, store error translation and the generic repository.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import exc as sa_exc

from forum_server.core.errors import (
    ConstraintViolationError,
    ForumError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    UnsupportedOperationError,
    translate_db_errors,
)
from forum_server.models.article import Article
from forum_server.models.forum import Forum
from forum_server.services.chats import messages
from forum_server.services.forums import forums
from forum_server.services.repository import Repository


class TestTaxonomy:
    def test_error_body_shape(self):
        assert NotFoundError("Article not found").to_dict() == {
            "error": {"code": "NOT_FOUND", "message": "Article not found", "status": 404}
        }

    def test_internal_default_message(self):
        err = InternalError()
        assert err.status_code == 500
        assert err.message == "Query failed"


class TestTranslateDbErrors:
    @pytest.mark.parametrize("raised,expected", [
        (sa_exc.IntegrityError("stmt", {}, Exception("fk")), ConstraintViolationError),
        (sa_exc.NoResultFound(), NotFoundError),
        (sa_exc.TimeoutError(), ServiceUnavailableError),
        (sa_exc.OperationalError("stmt", {}, Exception("down")), InternalError),
    ])
    async def test_mapping(self, raised, expected):
        with pytest.raises(expected):
            async with translate_db_errors("Thing"):
                raise raised

    async def test_forum_errors_pass_through(self):
        with pytest.raises(NotFoundError):
            async with translate_db_errors("Thing"):
                raise NotFoundError()

    async def test_other_exceptions_untouched(self):
        with pytest.raises(ValueError):
            async with translate_db_errors("Thing"):
                raise ValueError("not a store error")


class TestRepository:
    async def test_create_get_find(self, session):
        repo = Repository(Forum)
        forum = await repo.create(session, Forum(title="t", description="d"))
        assert (await repo.get(session, forum.id)).title == "t"
        assert await repo.find(session, uuid.uuid4()) is None

    async def test_get_missing_raises_not_found(self, session):
        with pytest.raises(NotFoundError) as info:
            await Repository(Forum).get(session, uuid.uuid4())
        assert info.value.message == "Forum not found"

    async def test_update_ignores_id(self, session):
        repo = Repository(Forum)
        forum = await repo.create(session, Forum(title="t"))
        original_id = forum.id
        updated = await repo.update(session, forum.id, {"id": uuid.uuid4(), "description": "new"})
        assert updated.id == original_id
        assert updated.description == "new"

    async def test_disabled_operations_are_unsupported(self, session):
        with pytest.raises(UnsupportedOperationError):
            await forums.update(session, uuid.uuid4(), {"title": "x"})
        with pytest.raises(UnsupportedOperationError):
            await messages.delete(session, uuid.uuid4())

    async def test_dangling_owner_is_constraint_violation(self, session):
        article = Article(author_id=uuid.uuid4(), title="t", slug="t-1", body="b")
        with pytest.raises(ConstraintViolationError):
            await Repository(Article).create(session, article)
        await session.rollback()


class TestHttpMapping:
    async def test_malformed_body_is_400(self, client, alice):
        response = await client.post("/api/v1/article/", json={"title": 5}, headers=alice.headers)
        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "BAD_REQUEST"
        assert body["error"]["status"] == 400

    async def test_malformed_path_is_400(self, client):
        assert (await client.get("/api/v1/article/not-a-uuid")).status_code == 400

    async def test_every_error_is_a_forum_error(self):
        for cls in (NotFoundError, ConstraintViolationError, ServiceUnavailableError, InternalError):
            assert issubclass(cls, ForumError)
