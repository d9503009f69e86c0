"""
Request dispatcher: one ``ApiRequest`` factory per backend call the
components make, and an ``ApiClient`` that performs them with httpx.

``ApiClient.send`` never raises for HTTP or transport failures. It returns
an ``ApiResponse`` whose ``error`` carries the server's message for non-2xx
responses, ``"timeout"`` for timeouts and the exception text for other
transport errors. A success response whose body is not JSON is reported
as ``"Malformed response"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from forum_shared.identifiers import BucketUuid, PostUuid, UserUuid
from forum_shared.schemas.common import ErrorResponse

from .config import ApiConfig

log = structlog.get_logger()

API_PREFIX = "/api/v1"
TIMEOUT_MESSAGE = "timeout"
MALFORMED_BODY_MESSAGE = "Malformed response"


@dataclass(frozen=True)
class ApiRequest:
    method: str
    path: str
    json: Any = None
    authenticated: bool = False


@dataclass
class ApiResponse:
    status: Optional[int] = None
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Request factories
# ---------------------------------------------------------------------------

def login(user_name: str, password: str) -> ApiRequest:
    return ApiRequest("POST", "/auth/login", {"user_name": user_name, "password": password})


def create_account(user_name: str, display_name: str, password: str) -> ApiRequest:
    return ApiRequest(
        "POST",
        "/user/",
        {"user_name": user_name, "display_name": display_name, "plaintext_password": password},
    )


def get_published_articles(page_index: int, page_size: int) -> ApiRequest:
    return ApiRequest("GET", f"/article/articles/{page_index}/{page_size}")


def get_post(post_uuid: PostUuid) -> ApiRequest:
    return ApiRequest("GET", f"/post/{post_uuid}")


def get_users_in_bucket(bucket_uuid: BucketUuid) -> ApiRequest:
    return ApiRequest("GET", f"/bucket/{bucket_uuid}/users")


def get_is_bucket_owner(bucket_uuid: BucketUuid) -> ApiRequest:
    return ApiRequest("GET", f"/bucket/{bucket_uuid}/is_owner", authenticated=True)


def remove_user_from_bucket(bucket_uuid: BucketUuid, user_uuid: UserUuid) -> ApiRequest:
    return ApiRequest("DELETE", f"/bucket/{bucket_uuid}/user/{user_uuid}", authenticated=True)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate_json(response.content).error.message
    except ValidationError:
        return response.reason_phrase or f"HTTP {response.status_code}"


class ApiClient:
    """Performs ``ApiRequest`` values against the forum server."""

    def __init__(
        self,
        config: ApiConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config or ApiConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.token: Optional[str] = None

    async def open(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self._config.url + API_PREFIX,
            timeout=httpx.Timeout(self._config.request_timeout_seconds),
            verify=self._config.verify_tls,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ApiClient":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def set_credential(self, token: Optional[str]) -> None:
        self.token = token

    async def send(self, request: ApiRequest) -> ApiResponse:
        if self._client is None:
            await self.open()

        headers = {}
        if request.authenticated:
            if self.token is None:
                return ApiResponse(error="Not logged in")
            headers["Authorization"] = f"Bearer {self.token}"

        log.debug("api.request", method=request.method, path=request.path)
        try:
            response = await self._client.request(
                request.method, request.path, json=request.json, headers=headers
            )
        except httpx.TimeoutException:
            log.warning("api.timeout", method=request.method, path=request.path)
            return ApiResponse(error=TIMEOUT_MESSAGE)
        except httpx.HTTPError as exc:
            log.warning("api.transport_error", path=request.path, error=str(exc))
            return ApiResponse(error=str(exc))

        if not response.is_success:
            message = _error_message(response)
            log.info("api.error_response", path=request.path, status=response.status_code,
                     message=message)
            return ApiResponse(status=response.status_code, error=message)

        if not response.content:
            return ApiResponse(status=response.status_code)
        try:
            data = response.json()
        except ValueError:
            log.warning("api.malformed_body", path=request.path, status=response.status_code)
            return ApiResponse(status=response.status_code, error=MALFORMED_BODY_MESSAGE)
        return ApiResponse(status=response.status_code, data=data)
