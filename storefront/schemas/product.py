"""Product schemas.

Products come from the catalog API and are opaque to the stores: they are
copied in by value and never mutated. Only `id`, `title` and `price` carry
meaning for the state layer; the rest is presentation data kept verbatim.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """Product category."""

    id: str = Field(alias="_id")
    name: str
    slug: str = ""
    icon: str | None = None
    image: str | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ProductImage(BaseModel):
    name: str = ""
    url: str

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    """A catalog product as received from the product API."""

    id: str = Field(alias="_id")
    title: str
    price: float
    description: str = ""
    slug: str = ""
    category: Category | str | None = None
    quantity: int = 0
    images: list[ProductImage] = Field(default_factory=list)
    brand: str | None = None
    sold: int = 0
    is_published: bool = Field(alias="isPublished", default=True)
    published_at: datetime | None = Field(alias="publishedAt", default=None)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    ratings: list[dict[str, Any]] = Field(default_factory=list)
    is_new: bool | None = Field(alias="isNew", default=None)
    discount_percentage: float | None = Field(alias="discountPercentage", default=None)
    average_rating: float | None = Field(alias="averageRating", default=None)

    # Unknown presentation fields survive a persist/rehydrate round trip.
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")
