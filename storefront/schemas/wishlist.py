"""Wishlist schemas."""

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product import Product


class WishlistSnapshot(BaseModel):
    """Persisted shape of the wishlist slot."""

    items: list[Product] = Field(default_factory=list)


class WishlistResponse(BaseModel):
    items: list[Product]
    count: int


class WishlistMembership(BaseModel):
    product_id: str = Field(alias="productId")
    in_wishlist: bool = Field(alias="inWishlist")

    model_config = ConfigDict(populate_by_name=True)
