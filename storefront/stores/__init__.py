"""Client-state stores and their persistence adapters.

Stores handle:
- In-memory state for cart, wishlist and auth session
- Rehydration from / flushing to a PersistenceAdapter
- Subscriber notification after every mutation

Adapters (memory, file, redis, postgres) only move serialized snapshots;
no business logic lives in them.
"""
