"""Shopping cart store.

Lines are unique by product id and kept in insertion order. Adding a
product that is already in the cart merges into its line: the quantity
accumulates and a variant (color/size) is only overwritten when a new one
is supplied. Totals are derived from the lines on every call.

Quantities are not validated here; zero or negative values are stored as
given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.schemas import CartLine, CartSnapshot, Product
from storefront.services.notifications import Notifier, Severity
from storefront.stores.base import PersistedStore, PersistenceAdapter

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class CartState:
    """Immutable view of the cart handed to readers and subscribers."""

    lines: tuple[CartLine, ...]
    is_loading: bool = False

    @property
    def total(self) -> float:
        return cart_total(self.lines)

    @property
    def count(self) -> int:
        return cart_count(self.lines)


def cart_total(lines: tuple[CartLine, ...] | list[CartLine]) -> float:
    return sum((line.product.price * line.quantity for line in lines), 0.0)


def cart_count(lines: tuple[CartLine, ...] | list[CartLine]) -> int:
    return sum(line.quantity for line in lines)


class CartStore(PersistedStore[CartState, CartSnapshot]):
    """Cart line items persisted to a single slot."""

    snapshot_model = CartSnapshot

    def __init__(
        self,
        storage: PersistenceAdapter,
        slot: str = "cart-storage",
        *,
        notifier: Notifier | None = None,
    ) -> None:
        super().__init__(storage, slot)
        self._lines: list[CartLine] = []
        self._is_loading = False
        self._notifier = notifier

    @property
    def state(self) -> CartState:
        return CartState(lines=tuple(self._lines), is_loading=self._is_loading)

    @property
    def items(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def _find(self, product_id: str) -> int:
        for index, line in enumerate(self._lines):
            if line.product.id == product_id:
                return index
        return -1

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def add_to_cart(
        self,
        product: Product,
        quantity: int = 1,
        color: str | None = None,
        size: str | None = None,
    ) -> CartLine:
        """Add `quantity` of `product`, merging into an existing line.

        Returns:
            The resulting line for the product.
        """
        self._ensure_hydrated()
        index = self._find(product.id)
        if index != -1:
            existing = self._lines[index]
            update: dict[str, object] = {"quantity": existing.quantity + quantity}
            if color:
                update["selected_color"] = color
            if size:
                update["selected_size"] = size
            line = existing.model_copy(update=update)
            self._lines[index] = line
        else:
            line = CartLine(
                product=product,
                quantity=quantity,
                selected_color=color,
                selected_size=size,
            )
            self._lines.append(line)
        self._commit()
        if self._notifier is not None:
            self._notifier.notify(Severity.SUCCESS, f"{product.title} added to cart")
        return line

    def remove_from_cart(self, product_id: str) -> bool:
        """Remove the line for `product_id`. Returns False if there was none."""
        self._ensure_hydrated()
        index = self._find(product_id)
        if index == -1:
            return False
        removed = self._lines.pop(index)
        self._commit()
        if self._notifier is not None:
            self._notifier.notify(Severity.INFO, f"{removed.product.title} removed from cart")
        return True

    def update_quantity(self, product_id: str, quantity: int) -> bool:
        """Set the quantity of an existing line verbatim (no accumulation)."""
        self._ensure_hydrated()
        index = self._find(product_id)
        if index == -1:
            return False
        self._lines[index] = self._lines[index].model_copy(update={"quantity": quantity})
        self._commit()
        return True

    def clear_cart(self) -> None:
        self._ensure_hydrated()
        self._lines = []
        self._commit()

    # ------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------

    def get_cart_total(self) -> float:
        return cart_total(self._lines)

    def get_cart_count(self) -> int:
        return cart_count(self._lines)

    # ------------------------------------------------------------
    # Persistence hooks
    # ------------------------------------------------------------

    def _set_loading(self, loading: bool) -> None:
        self._is_loading = loading

    def _to_snapshot(self) -> CartSnapshot:
        return CartSnapshot(items=list(self._lines))

    def _apply_snapshot(self, snapshot: CartSnapshot) -> None:
        # Collapse duplicate ids a hand-edited snapshot may contain.
        lines: list[CartLine] = []
        positions: dict[str, int] = {}
        for line in snapshot.items:
            pid = line.product.id
            if pid in positions:
                prev = lines[positions[pid]]
                lines[positions[pid]] = prev.model_copy(update={"quantity": prev.quantity + line.quantity})
                continue
            positions[pid] = len(lines)
            lines.append(line)
        self._lines = lines
        logger.info(f"Cart restored with {len(lines)} lines")
