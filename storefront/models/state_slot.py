"""Persisted store slot.

One row per store (cart, wishlist, session) holding its latest serialized
snapshot. The value is opaque JSON text; there is no schema version.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.stores.postgres import Base


class StateSlot(Base):
    __tablename__ = "state_slots"

    # Slot name, e.g. "cart-storage"
    key: Mapped[str] = mapped_column(String(200), primary_key=True)

    value: Mapped[str] = mapped_column(Text)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<StateSlot {self.key}>"
