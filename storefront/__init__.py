"""Storefront state service.

Persisted cart, wishlist and auth-session stores for the storefront client.
"""

__version__ = "0.1.0"
