"""Test doubles and factories shared across the suite."""

import asyncio
from collections import defaultdict
from typing import Any

from storefront.schemas import Product
from storefront.services.auth_client import AuthResult
from storefront.stores.base import PersistenceError
from storefront.stores.memory import MemoryStorage


def make_product(product_id: str = "A", price: float = 10.0, title: str | None = None, **extra: Any) -> Product:
    return Product.model_validate({"_id": product_id, "title": title or f"Product {product_id}", "price": price, **extra})


class FlakyStorage(MemoryStorage):
    """MemoryStorage whose reads/writes can be switched to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_get = False
        self.fail_set = False

    async def get(self, key: str) -> str | None:
        if self.fail_get:
            raise PersistenceError("storage unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise PersistenceError("quota exceeded")
        await super().set(key, value)


class FakeAuthBackend:
    """AuthBackend returning queued AuthResults per method.

    Queued exceptions are raised instead of returned. Set `gate` to an
    asyncio.Event to hold every call until it is set.
    """

    def __init__(self) -> None:
        self.results: dict[str, list[AuthResult | Exception]] = defaultdict(list)
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    def queue(self, name: str, *results: AuthResult | Exception) -> None:
        self.results[name].extend(results)

    def called(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    async def _respond(self, name: str, *args: Any) -> AuthResult:
        self.calls.append((name, args))
        if self.gate is not None:
            await self.gate.wait()
        if self.results[name]:
            result = self.results[name].pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return AuthResult(ok=False, message=f"{name} not configured", status_code=500)

    async def login(self, credentials):
        return await self._respond("login", credentials)

    async def register(self, data):
        return await self._respond("register", data)

    async def fetch_current_user(self, access_token):
        return await self._respond("fetch_current_user", access_token)

    async def refresh_access_token(self, refresh_token):
        return await self._respond("refresh_access_token", refresh_token)

    async def request_verification_code(self, phone):
        return await self._respond("request_verification_code", phone)

    async def verify_code(self, code, target=None):
        return await self._respond("verify_code", code, target)

    async def reset_password(self, credentials):
        return await self._respond("reset_password", credentials)

    async def aclose(self) -> None:
        self.closed = True


USER_PAYLOAD = {
    "_id": "u1",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "phone": "+15550100",
    "password": "$2b$10$hash",
}


def login_ok(access: str = "access-1", refresh: str = "refresh-1") -> AuthResult:
    return AuthResult(
        ok=True,
        data={"user": dict(USER_PAYLOAD), "token": access, "refreshToken": refresh},
        status_code=200,
    )
