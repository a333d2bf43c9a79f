"""SQLAlchemy ORM models.

Models represent database tables:
- state_slots: serialized snapshot per store slot (postgres backend only)
"""

from storefront.models.state_slot import StateSlot

__all__ = ["StateSlot"]
