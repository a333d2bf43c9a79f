"""Redirect decision for the app entry point.

The decision is a pure read of the session state; performing the transition
is the Navigator's job. The session store owns no navigation state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from storefront.stores.session import SessionState

logger = logging.getLogger("uvicorn.error")


class Route(str, Enum):
    ONBOARDING = "/onboarding"
    MAIN = "/(tabs)"
    LOGIN = "/auth/login"


class Navigator(Protocol):
    def replace(self, route: str) -> None: ...


def decide_redirect(state: SessionState) -> Route | None:
    """Pick the entry destination for the current session.

    Returns None while an auth action is in flight: the caller should wait
    for the next state rather than redirect on a half-settled session.
    """
    if state.is_loading:
        return None
    if state.first_visit:
        return Route.ONBOARDING
    if state.is_authenticated:
        return Route.MAIN
    return Route.LOGIN


def redirect(state: SessionState, navigator: Navigator) -> Route | None:
    """Apply decide_redirect() through `navigator`. No-op while undecided."""
    route = decide_redirect(state)
    if route is not None:
        logger.info(f"Redirecting to {route.value}")
        navigator.replace(route.value)
    return route


def require_auth(state: SessionState) -> bool:
    """Guard for authenticated screens; passes while the session is still loading."""
    return state.is_loading or state.is_authenticated
