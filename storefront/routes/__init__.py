"""API routes."""

from fastapi import APIRouter

from storefront.routes import cart, notifications, session, wishlist

api_router = APIRouter()

# Store endpoints
api_router.include_router(cart.router, prefix="/v1/cart", tags=["cart"])
api_router.include_router(wishlist.router, prefix="/v1/wishlist", tags=["wishlist"])
api_router.include_router(session.router, prefix="/v1/session", tags=["session"])

# Alerts raised by cart/wishlist mutations
api_router.include_router(notifications.router, prefix="/v1/notifications", tags=["notifications"])
