"""FastAPI dependencies resolving the process-wide stores.

Each dependency hydrates its store on first access. If the stores never
came up (startup failed), store routes answer 503 instead of a bare 500.
"""

from fastapi import HTTPException

from storefront.registry import StoreRegistry, get_stores
from storefront.services.notifications import NotificationFeed
from storefront.stores.cart import CartStore
from storefront.stores.session import SessionStore
from storefront.stores.wishlist import WishlistStore


def _registry() -> StoreRegistry:
    try:
        return get_stores()
    except RuntimeError as e:
        raise HTTPException(
            status_code=503,
            detail={
                "error": {
                    "code": "STORES_UNAVAILABLE",
                    "message": "Stores are not available",
                    "detail": None,
                }
            },
        ) from e


async def cart_store() -> CartStore:
    return await _registry().cart_store()


async def wishlist_store() -> WishlistStore:
    return await _registry().wishlist_store()


async def session_store() -> SessionStore:
    return await _registry().session_store()


def notification_feed() -> NotificationFeed:
    return _registry().notifications
