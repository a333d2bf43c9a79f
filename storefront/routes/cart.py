"""Cart endpoints.

GET    /v1/cart                     - lines + derived total/count
POST   /v1/cart/items               - add (merges into an existing line)
PATCH  /v1/cart/items/{productId}   - set quantity (no-op if absent)
DELETE /v1/cart/items/{productId}   - remove (no-op if absent)
DELETE /v1/cart                     - clear

Routers are thin: the store owns all cart semantics.
"""

from fastapi import APIRouter, Depends

from storefront.routes.deps import cart_store
from storefront.schemas import AddToCartRequest, CartResponse, UpdateQuantityRequest
from storefront.stores.cart import CartStore

router = APIRouter()


def _cart_response(store: CartStore) -> CartResponse:
    return CartResponse(
        items=list(store.items),
        total=store.get_cart_total(),
        count=store.get_cart_count(),
        is_loading=store.is_loading,
    )


@router.get("", response_model=CartResponse)
async def get_cart(store: CartStore = Depends(cart_store)) -> CartResponse:
    return _cart_response(store)


@router.post("/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, store: CartStore = Depends(cart_store)) -> CartResponse:
    store.add_to_cart(body.product, body.quantity, body.color, body.size)
    return _cart_response(store)


@router.patch("/items/{product_id}", response_model=CartResponse)
async def update_quantity(
    product_id: str,
    body: UpdateQuantityRequest,
    store: CartStore = Depends(cart_store),
) -> CartResponse:
    store.update_quantity(product_id, body.quantity)
    return _cart_response(store)


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, store: CartStore = Depends(cart_store)) -> CartResponse:
    store.remove_from_cart(product_id)
    return _cart_response(store)


@router.delete("", response_model=CartResponse)
async def clear_cart(store: CartStore = Depends(cart_store)) -> CartResponse:
    store.clear_cart()
    return _cart_response(store)
