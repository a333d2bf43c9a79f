"""Collaborators used by the stores and routes.

- auth_client: HTTP client for the auth REST API
- notifications: alert feed for cart/wishlist mutations
- navigation: redirect decision over the session state
"""
