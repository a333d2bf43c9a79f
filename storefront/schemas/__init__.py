"""Pydantic schemas for store snapshots and API request/response validation."""

from storefront.schemas.cart import (
    AddToCartRequest,
    CartLine,
    CartResponse,
    CartSnapshot,
    UpdateQuantityRequest,
)
from storefront.schemas.common import AlertOut, ErrorDetail, ErrorResponse
from storefront.schemas.product import Category, Product, ProductImage
from storefront.schemas.user import (
    ActionResponse,
    AuthTokens,
    LoginCredentials,
    RedirectDecision,
    RegisterData,
    ResetPasswordCredentials,
    SessionResponse,
    SessionSnapshot,
    User,
    VerificationCodeRequest,
    VerifyCodeRequest,
)
from storefront.schemas.wishlist import WishlistMembership, WishlistResponse, WishlistSnapshot

__all__ = [
    "ActionResponse",
    "AlertOut",
    "AddToCartRequest",
    "AuthTokens",
    "CartLine",
    "CartResponse",
    "CartSnapshot",
    "Category",
    "ErrorDetail",
    "ErrorResponse",
    "LoginCredentials",
    "Product",
    "ProductImage",
    "RedirectDecision",
    "RegisterData",
    "ResetPasswordCredentials",
    "SessionResponse",
    "SessionSnapshot",
    "UpdateQuantityRequest",
    "User",
    "VerificationCodeRequest",
    "VerifyCodeRequest",
    "WishlistMembership",
    "WishlistResponse",
    "WishlistSnapshot",
]
