"""
Shared fixtures for client tests.

The server is replaced by an ``httpx.MockTransport`` whose handler each test
supplies, so components run through the real ``ApiClient`` and ``Runtime``.
"""

import uuid

import httpx
import pytest

from forum_client.api import ApiClient
from forum_client.config import ApiConfig
from forum_client.runtime import Runtime

BASE_URL = "http://forum.test"


@pytest.fixture
def user_payload():
    def _make(user_name: str = "alice", display_name: str | None = None, role: str = "user"):
        return {
            "uuid": str(uuid.uuid4()),
            "user_name": user_name,
            "display_name": display_name or user_name.title(),
            "role": role,
            "created_at": "2024-01-01T00:00:00Z",
        }
    return _make


@pytest.fixture
def error_payload():
    def _make(status: int, message: str, code: str = "error"):
        return {"error": {"code": code, "message": message, "status": status}}
    return _make


@pytest.fixture
async def make_client():
    clients = []

    async def _make(handler, token: str | None = None) -> ApiClient:
        client = ApiClient(ApiConfig(url=BASE_URL), transport=httpx.MockTransport(handler))
        await client.open()
        client.set_credential(token)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.close()


@pytest.fixture
def make_runtime(make_client):
    async def _make(component, handler, props=None, token: str | None = None) -> Runtime:
        client = await make_client(handler, token=token)
        runtime = Runtime(component, client, props)
        runtime.start()
        return runtime
    return _make
