"""Tests for the HTTP surface over the stores."""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.main import app
from storefront.registry import close_stores, get_stores, init_stores
from storefront.services.auth_client import AuthResult
from storefront.settings import Settings
from storefront.stores.memory import MemoryStorage

from tests.factories import FakeAuthBackend, login_ok

PRODUCT = {"_id": "A", "title": "Sneakers", "price": 10, "colors": ["red"]}


@pytest.fixture
async def backend():
    """Fresh registry on in-memory storage with a scripted auth backend."""
    fake = FakeAuthBackend()
    await init_stores(Settings(storage_backend="memory"), storage=MemoryStorage(), auth_backend=fake)
    yield fake
    await close_stores()


@pytest.fixture
async def client(backend):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_cart_add_merges_and_derives_totals(client: AsyncClient):
    await client.post("/v1/cart/items", json={"product": PRODUCT, "quantity": 2, "color": "red"})
    response = await client.post("/v1/cart/items", json={"product": PRODUCT, "quantity": 3})
    assert response.status_code == 200
    data = response.json()

    assert data["count"] == 5
    assert data["total"] == 50
    assert len(data["items"]) == 1
    assert data["items"][0]["selectedColor"] == "red"
    assert data["items"][0]["product"]["_id"] == "A"


@pytest.mark.asyncio
async def test_cart_update_remove_clear(client: AsyncClient):
    await client.post("/v1/cart/items", json={"product": PRODUCT})
    await client.post("/v1/cart/items", json={"product": {**PRODUCT, "_id": "B", "price": 5}})

    data = (await client.patch("/v1/cart/items/B", json={"quantity": 4})).json()
    assert data["total"] == 30

    data = (await client.patch("/v1/cart/items/missing", json={"quantity": 9})).json()
    assert data["count"] == 5

    data = (await client.delete("/v1/cart/items/A")).json()
    assert [line["product"]["_id"] for line in data["items"]] == ["B"]

    data = (await client.delete("/v1/cart")).json()
    assert data == {"items": [], "total": 0, "count": 0, "isLoading": False}


@pytest.mark.asyncio
async def test_cart_mutations_persist_to_slot(client: AsyncClient):
    await client.post("/v1/cart/items", json={"product": PRODUCT, "quantity": 2})
    stores = get_stores()
    await stores.flush()
    assert '"quantity":2' in stores.storage.dump()["cart-storage"]


@pytest.mark.asyncio
async def test_wishlist_toggle_and_membership(client: AsyncClient):
    response = await client.post("/v1/wishlist/toggle", json=PRODUCT)
    assert response.json() == {"productId": "A", "inWishlist": True}

    assert (await client.get("/v1/wishlist/items/A")).json()["inWishlist"] is True
    await client.post("/v1/wishlist/items", json=PRODUCT)
    assert (await client.get("/v1/wishlist")).json()["count"] == 1

    response = await client.post("/v1/wishlist/toggle", json=PRODUCT)
    assert response.json()["inWishlist"] is False
    assert (await client.get("/v1/wishlist")).json() == {"items": [], "count": 0}


@pytest.mark.asyncio
async def test_notifications_are_drained(client: AsyncClient):
    await client.post("/v1/cart/items", json={"product": PRODUCT})
    await client.post("/v1/wishlist/toggle", json=PRODUCT)

    alerts = (await client.get("/v1/notifications")).json()
    assert [(a["severity"], a["message"]) for a in alerts] == [
        ("success", "Sneakers added to cart"),
        ("success", "Sneakers added to favorites"),
    ]
    assert (await client.get("/v1/notifications")).json() == []


@pytest.mark.asyncio
async def test_session_login_never_echoes_tokens(client: AsyncClient, backend: FakeAuthBackend):
    backend.queue("login", login_ok())
    response = await client.post("/v1/session/login", json={"phone": "+15550100", "password": "pw"})
    data = response.json()

    assert data["ok"] is True
    assert data["session"]["isAuthenticated"] is True
    assert data["session"]["user"]["firstName"] == "Ada"
    assert "tokens" not in data["session"]
    assert "access-1" not in response.text


@pytest.mark.asyncio
async def test_session_failed_login_reports_error(client: AsyncClient, backend: FakeAuthBackend):
    backend.queue("login", AuthResult(ok=False, message="Invalid credentials", status_code=401))
    response = await client.post("/v1/session/login", json={"phone": "+1", "password": "bad"})

    assert response.status_code == 200
    assert response.json()["ok"] is False
    assert response.json()["session"]["error"] == "Invalid credentials"

    cleared = (await client.post("/v1/session/clear-error")).json()
    assert cleared["error"] is None


@pytest.mark.asyncio
async def test_redirect_follows_onboarding_and_auth(client: AsyncClient, backend: FakeAuthBackend):
    assert (await client.get("/v1/session/redirect")).json() == {"route": "/onboarding"}

    await client.post("/v1/session/onboarding/complete")
    assert (await client.get("/v1/session/redirect")).json() == {"route": "/auth/login"}

    backend.queue("login", login_ok())
    await client.post("/v1/session/login", json={"phone": "+1", "password": "pw"})
    assert (await client.get("/v1/session/redirect")).json() == {"route": "/(tabs)"}

    data = (await client.post("/v1/session/logout")).json()
    assert data["session"]["firstVisit"] is False
    assert (await client.get("/v1/session/redirect")).json() == {"route": "/auth/login"}


@pytest.mark.asyncio
async def test_password_reset_endpoints(client: AsyncClient, backend: FakeAuthBackend):
    backend.queue("request_verification_code", AuthResult(ok=True, status_code=200))
    backend.queue("verify_code", AuthResult(ok=True, status_code=200))
    backend.queue("reset_password", AuthResult(ok=False, status_code=400))

    assert (await client.post("/v1/session/verification-code", json={"target": "+1"})).json()["ok"] is True
    assert (await client.post("/v1/session/verify-code", json={"target": "+1", "code": "1234"})).json()["ok"] is True
    data = (await client.post("/v1/session/reset-password", json={"password": "n", "resetToken": "1234"})).json()
    assert data["ok"] is False
    assert data["session"]["error"] == "Failed to reset password. Please try again."


@pytest.mark.asyncio
async def test_store_routes_answer_503_when_stores_are_down():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/v1/cart")
        health = await ac.get("/health")

    assert response.status_code == 503
    assert response.json()["detail"]["error"]["code"] == "STORES_UNAVAILABLE"
    assert health.status_code == 200
