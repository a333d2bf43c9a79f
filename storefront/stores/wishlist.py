"""Wishlist store: an insertion-ordered product set, unique by id."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.schemas import Product, WishlistSnapshot
from storefront.services.notifications import Notifier, Severity
from storefront.stores.base import PersistedStore, PersistenceAdapter


@dataclass(frozen=True)
class WishlistState:
    items: tuple[Product, ...]

    @property
    def count(self) -> int:
        return len(self.items)

    def contains(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self.items)


class WishlistStore(PersistedStore[WishlistState, WishlistSnapshot]):
    """Deduplicated product set persisted to a single slot."""

    snapshot_model = WishlistSnapshot

    def __init__(
        self,
        storage: PersistenceAdapter,
        slot: str = "wishlist-storage",
        *,
        notifier: Notifier | None = None,
    ) -> None:
        super().__init__(storage, slot)
        self._items: list[Product] = []
        self._notifier = notifier

    @property
    def state(self) -> WishlistState:
        return WishlistState(items=tuple(self._items))

    @property
    def items(self) -> tuple[Product, ...]:
        return tuple(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self._items)

    def add_to_wishlist(self, product: Product) -> bool:
        """Append `product` unless an item with its id exists. Returns True if added."""
        self._ensure_hydrated()
        if self.is_in_wishlist(product.id):
            return False
        self._items.append(product)
        self._commit()
        return True

    def remove_from_wishlist(self, product_id: str) -> bool:
        self._ensure_hydrated()
        kept = [item for item in self._items if item.id != product_id]
        if len(kept) == len(self._items):
            return False
        self._items = kept
        self._commit()
        return True

    def toggle_wishlist(self, product: Product) -> bool:
        """Remove `product` if present, otherwise add it.

        Membership is read first and the add/remove applied after, as two
        steps; callers on different tasks toggling the same product may race.

        Returns:
            Membership after the toggle.
        """
        if self.is_in_wishlist(product.id):
            self.remove_from_wishlist(product.id)
            if self._notifier is not None:
                self._notifier.notify(Severity.INFO, f"{product.title} removed from favorites")
            return False
        self.add_to_wishlist(product)
        if self._notifier is not None:
            self._notifier.notify(Severity.SUCCESS, f"{product.title} added to favorites")
        return True

    def clear_wishlist(self) -> None:
        self._ensure_hydrated()
        self._items = []
        self._commit()

    def _to_snapshot(self) -> WishlistSnapshot:
        return WishlistSnapshot(items=list(self._items))

    def _apply_snapshot(self, snapshot: WishlistSnapshot) -> None:
        seen: set[str] = set()
        items: list[Product] = []
        for item in snapshot.items:
            if item.id in seen:
                continue
            seen.add(item.id)
            items.append(item)
        self._items = items
