"""Shared fixtures: in-memory storage, a scriptable auth backend, stores."""

import pytest

from storefront.services.notifications import NotificationFeed
from storefront.stores.cart import CartStore
from storefront.stores.session import SessionStore
from storefront.stores.wishlist import WishlistStore

from tests.factories import FakeAuthBackend, FlakyStorage


@pytest.fixture
def storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture
def feed() -> NotificationFeed:
    return NotificationFeed(maxlen=10)


@pytest.fixture
def auth_backend() -> FakeAuthBackend:
    return FakeAuthBackend()


@pytest.fixture
async def cart(storage: FlakyStorage, feed: NotificationFeed) -> CartStore:
    store = CartStore(storage, notifier=feed)
    await store.hydrate()
    return store


@pytest.fixture
async def wishlist(storage: FlakyStorage, feed: NotificationFeed) -> WishlistStore:
    store = WishlistStore(storage, notifier=feed)
    await store.hydrate()
    return store


@pytest.fixture
async def session(storage: FlakyStorage, auth_backend: FakeAuthBackend) -> SessionStore:
    store = SessionStore(storage, auth_backend)
    await store.hydrate()
    return store
