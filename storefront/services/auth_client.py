"""Auth REST API client.

Endpoints (relative to Settings.auth_api_url):
- POST /user/login                -> {user, token, refreshToken}
- POST /user/register             -> {user?, token?, refreshToken?}
- GET  /auth/me                   -> user (Bearer access token)
- GET  /user/refresh/{refresh}    -> {accessToken}
- POST /user/forgotpassword       -> sends a verification code to {phone}
- POST /user/verify-reset-code    -> checks {resetToken}
- POST /user/reset-password       -> {password, resetToken}

Every call resolves to an AuthResult; transport errors and non-2xx responses
become failures carrying the server's `message` when it sent one. Nothing
here raises past the client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from storefront.schemas import LoginCredentials, RegisterData, ResetPasswordCredentials

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    data: dict[str, Any] = field(default_factory=dict)
    message: str | None = None
    status_code: int | None = None

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401


class AuthBackend(Protocol):
    async def login(self, credentials: LoginCredentials) -> AuthResult: ...

    async def register(self, data: RegisterData) -> AuthResult: ...

    async def fetch_current_user(self, access_token: str) -> AuthResult: ...

    async def refresh_access_token(self, refresh_token: str) -> AuthResult: ...

    async def request_verification_code(self, phone: str) -> AuthResult: ...

    async def verify_code(self, code: str, target: str | None = None) -> AuthResult: ...

    async def reset_password(self, credentials: ResetPasswordCredentials) -> AuthResult: ...

    async def aclose(self) -> None: ...


class HttpAuthBackend:
    """AuthBackend talking JSON over HTTP with httpx."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> AuthResult:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        try:
            resp = await self._client.request(method, path, json=json, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            logger.warning(f"Auth API {method} {path} failed: {e!r}")
            return AuthResult(ok=False, message=None)

        payload = _json_or_empty(resp)
        if resp.status_code >= 400:
            message = payload.get("message") if isinstance(payload.get("message"), str) else None
            logger.warning(f"Auth API {method} {path} -> {resp.status_code}: {message or resp.text[:200]}")
            return AuthResult(ok=False, data=payload, message=message, status_code=resp.status_code)
        return AuthResult(ok=True, data=payload, status_code=resp.status_code)

    async def login(self, credentials: LoginCredentials) -> AuthResult:
        return await self._request("POST", "/user/login", json=credentials.model_dump())

    async def register(self, data: RegisterData) -> AuthResult:
        return await self._request(
            "POST", "/user/register", json=data.model_dump(by_alias=True, exclude_none=True)
        )

    async def fetch_current_user(self, access_token: str) -> AuthResult:
        return await self._request("GET", "/auth/me", access_token=access_token)

    async def refresh_access_token(self, refresh_token: str) -> AuthResult:
        return await self._request("GET", f"/user/refresh/{refresh_token}")

    async def request_verification_code(self, phone: str) -> AuthResult:
        return await self._request("POST", "/user/forgotpassword", json={"phone": phone})

    async def verify_code(self, code: str, target: str | None = None) -> AuthResult:
        body: dict[str, Any] = {"resetToken": code}
        if target:
            body["phone"] = target
        return await self._request("POST", "/user/verify-reset-code", json=body)

    async def reset_password(self, credentials: ResetPasswordCredentials) -> AuthResult:
        return await self._request(
            "POST", "/user/reset-password", json=credentials.model_dump(by_alias=True)
        )


def _json_or_empty(resp: httpx.Response) -> dict[str, Any]:
    """Best-effort JSON object from a response; non-object bodies are wrapped."""
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError:
        return {}
    if isinstance(data, dict):
        return data
    return {"data": data}
