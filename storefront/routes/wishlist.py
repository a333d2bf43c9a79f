"""Wishlist endpoints."""

from fastapi import APIRouter, Depends

from storefront.routes.deps import wishlist_store
from storefront.schemas import Product, WishlistMembership, WishlistResponse
from storefront.stores.wishlist import WishlistStore

router = APIRouter()


def _wishlist_response(store: WishlistStore) -> WishlistResponse:
    return WishlistResponse(items=list(store.items), count=store.count)


@router.get("", response_model=WishlistResponse)
async def get_wishlist(store: WishlistStore = Depends(wishlist_store)) -> WishlistResponse:
    return _wishlist_response(store)


@router.get("/items/{product_id}", response_model=WishlistMembership)
async def is_in_wishlist(product_id: str, store: WishlistStore = Depends(wishlist_store)) -> WishlistMembership:
    return WishlistMembership(product_id=product_id, in_wishlist=store.is_in_wishlist(product_id))


@router.post("/items", response_model=WishlistResponse)
async def add_to_wishlist(product: Product, store: WishlistStore = Depends(wishlist_store)) -> WishlistResponse:
    store.add_to_wishlist(product)
    return _wishlist_response(store)


@router.post("/toggle", response_model=WishlistMembership)
async def toggle_wishlist(product: Product, store: WishlistStore = Depends(wishlist_store)) -> WishlistMembership:
    in_wishlist = store.toggle_wishlist(product)
    return WishlistMembership(product_id=product.id, in_wishlist=in_wishlist)


@router.delete("/items/{product_id}", response_model=WishlistResponse)
async def remove_from_wishlist(product_id: str, store: WishlistStore = Depends(wishlist_store)) -> WishlistResponse:
    store.remove_from_wishlist(product_id)
    return _wishlist_response(store)


@router.delete("", response_model=WishlistResponse)
async def clear_wishlist(store: WishlistStore = Depends(wishlist_store)) -> WishlistResponse:
    store.clear_wishlist()
    return _wishlist_response(store)
