"""Cart schemas: line items, persisted snapshot and API payloads."""

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product import Product


class CartLine(BaseModel):
    """A cart entry binding a product to a quantity and optional variant selection.

    Quantity is unconstrained: zero or negative values are stored as given.
    """

    product: Product
    quantity: int
    selected_color: str | None = Field(alias="selectedColor", default=None)
    selected_size: str | None = Field(alias="selectedSize", default=None)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CartSnapshot(BaseModel):
    """Persisted shape of the cart slot."""

    items: list[CartLine] = Field(default_factory=list)


class AddToCartRequest(BaseModel):
    product: Product
    quantity: int = 1
    color: str | None = None
    size: str | None = None


class UpdateQuantityRequest(BaseModel):
    quantity: int


class CartResponse(BaseModel):
    """Cart view with derived values."""

    items: list[CartLine]
    total: float
    count: int
    is_loading: bool = Field(alias="isLoading", default=False)

    model_config = ConfigDict(populate_by_name=True)
