"""HttpAuthBackend against httpx.MockTransport (no network calls)."""

import json

import httpx
import pytest

from storefront.schemas import LoginCredentials, RegisterData, ResetPasswordCredentials
from storefront.services.auth_client import HttpAuthBackend


def _backend(handler) -> HttpAuthBackend:
    return HttpAuthBackend("http://auth.test/api/v1/", transport=httpx.MockTransport(handler))


async def test_login_posts_credentials_and_returns_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"user": {"_id": "u1"}, "token": "t", "refreshToken": "r"})

    backend = _backend(handler)
    result = await backend.login(LoginCredentials(phone="+1", password="pw"))
    await backend.aclose()

    assert result.ok is True
    assert result.data["token"] == "t"
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/v1/user/login"
    assert json.loads(seen[0].content) == {"phone": "+1", "password": "pw"}


async def test_error_response_carries_server_message() -> None:
    backend = _backend(lambda request: httpx.Response(401, json={"message": "Invalid credentials"}))
    result = await backend.login(LoginCredentials(phone="+1", password="bad"))

    assert result.ok is False
    assert result.message == "Invalid credentials"
    assert result.unauthorized is True


async def test_non_json_error_has_no_message() -> None:
    backend = _backend(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))
    result = await backend.fetch_current_user("t")

    assert result.ok is False
    assert result.message is None
    assert result.status_code == 502


async def test_transport_error_becomes_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _backend(handler).request_verification_code("+1")
    assert result.ok is False
    assert result.status_code is None


async def test_fetch_current_user_sends_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"_id": "u1"})

    result = await _backend(handler).fetch_current_user("access-1")
    assert result.data == {"_id": "u1"}
    assert seen[0].url.path == "/api/v1/auth/me"
    assert seen[0].headers["Authorization"] == "Bearer access-1"


@pytest.mark.parametrize(
    ("call", "path", "body"),
    [
        (lambda b: b.refresh_access_token("r-1"), "/api/v1/user/refresh/r-1", None),
        (lambda b: b.request_verification_code("+1"), "/api/v1/user/forgotpassword", {"phone": "+1"}),
        (lambda b: b.verify_code("1234", "+1"), "/api/v1/user/verify-reset-code", {"resetToken": "1234", "phone": "+1"}),
        (
            lambda b: b.reset_password(ResetPasswordCredentials(password="n", reset_token="1234")),
            "/api/v1/user/reset-password",
            {"password": "n", "resetToken": "1234"},
        ),
        (
            lambda b: b.register(RegisterData(phone="+1", first_name="A", last_name="B", password="pw")),
            "/api/v1/user/register",
            {"phone": "+1", "firstName": "A", "lastName": "B", "password": "pw"},
        ),
    ],
)
async def test_endpoint_paths_and_bodies(call, path, body) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    result = await call(_backend(handler))
    assert result.ok is True
    assert seen[0].url.path == path
    if body is None:
        assert seen[0].content == b""
    else:
        assert json.loads(seen[0].content) == body


async def test_unencodable_bearer_token_is_a_failed_result() -> None:
    calls: list[httpx.Request] = []
    backend = _backend(lambda request: calls.append(request) or httpx.Response(200, json={}))
    result = await backend.fetch_current_user("tök")
    await backend.aclose()

    assert result.ok is False
    assert result.status_code is None
    assert calls == []
