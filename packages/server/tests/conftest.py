"""
Shared fixtures for API and service tests.

Every test gets its own SQLite file (through aiosqlite) with the schema built
from the models, and an httpx client bound to a fresh app.
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from forum_server.core.config import Settings
from forum_server.main import create_app
from forum_server.services import users as user_service
from forum_shared.schemas.common import Role
from forum_shared.schemas.users import NewUserRequest

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
PASSWORD = "hunter22"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'forum.db'}",
        secret_key=TEST_SECRET,
        log_format="text",
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    # ASGITransport does not run startup events; build the schema directly
    await application.state.db.create_all()
    yield application
    await application.state.db.dispose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session(app):
    async with app.state.db.session() as s:
        yield s


class Account:
    """A registered user plus the headers that authenticate as them."""

    def __init__(self, user: dict, token: str):
        self.user = user
        self.uuid = user["uuid"]
        self.token = token
        self.headers = {"Authorization": f"Bearer {token}"}


async def _login(client: AsyncClient, user_name: str) -> Account:
    response = await client.post(
        "/api/v1/auth/login", json={"user_name": user_name, "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return Account(body["user"], body["token"])


@pytest.fixture
def make_account(app, client):
    """Factory: register a user (through the API for plain users) and log in."""

    async def make(user_name: str, role: Role = Role.USER) -> Account:
        if role == Role.USER:
            response = await client.post(
                "/api/v1/user/",
                json={
                    "user_name": user_name,
                    "display_name": user_name.title(),
                    "plaintext_password": PASSWORD,
                },
            )
            assert response.status_code == 201, response.text
        else:
            # Elevated roles cannot be requested over the API
            async with app.state.db.session() as s:
                await user_service.create_user(
                    s,
                    NewUserRequest(
                        user_name=user_name,
                        display_name=user_name.title(),
                        plaintext_password=PASSWORD,
                    ),
                    role=role,
                )
        return await _login(client, user_name)

    return make


@pytest.fixture
async def alice(make_account) -> Account:
    return await make_account("alice")


@pytest.fixture
async def bob(make_account) -> Account:
    return await make_account("bob")


@pytest.fixture
async def admin(make_account) -> Account:
    return await make_account("root", Role.ADMIN)


@pytest.fixture
async def moderator(make_account) -> Account:
    return await make_account("mod", Role.MODERATOR)
