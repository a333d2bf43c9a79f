"""Auth session store.

States:
- Anonymous: no tokens
- Authenticating: login/register/refresh in flight (is_loading)
- Authenticated: tokens + user present

`first_visit` is an orthogonal, persisted onboarding flag that only ever
goes from True to False.

Every async action takes a ticket when it starts. logout() and any later
action invalidate older tickets, so a response that resolves after being
superseded is dropped instead of resurrecting a session. Failures never
raise: they land in `error`, which is reset when the next action starts.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from storefront.schemas import (
    AuthTokens,
    LoginCredentials,
    RegisterData,
    ResetPasswordCredentials,
    SessionSnapshot,
    User,
)
from storefront.services.auth_client import AuthBackend, AuthResult
from storefront.stores.base import PersistedStore, PersistenceAdapter

logger = logging.getLogger("uvicorn.error")

LOGIN_FAILED = "Failed to login. Please try again."
REGISTER_FAILED = "Failed to register. Please try again."
REFRESH_FAILED = "Failed to refresh user data."
REQUEST_CODE_FAILED = "Failed to request verification code. Please try again."
VERIFY_CODE_FAILED = "Failed to verify code. Please try again."
RESET_PASSWORD_FAILED = "Failed to reset password. Please try again."


@dataclass(frozen=True)
class SessionState:
    user: User | None
    tokens: AuthTokens | None
    first_visit: bool
    is_loading: bool
    error: str | None

    @property
    def is_authenticated(self) -> bool:
        return self.tokens is not None and self.user is not None


def _parse_user(data: dict[str, Any]) -> User | None:
    raw = data.get("user", data)
    if not isinstance(raw, dict):
        return None
    try:
        return User.model_validate(raw)
    except ValidationError:
        return None


def _parse_session(data: dict[str, Any]) -> tuple[User, AuthTokens] | None:
    """Extract (user, tokens) from a login/register payload, if complete."""
    access = data.get("token") or data.get("accessToken")
    refresh = data.get("refreshToken")
    if not isinstance(access, str) or not isinstance(refresh, str) or "user" not in data:
        return None
    user = _parse_user(data)
    if user is None:
        return None
    return user, AuthTokens(access_token=access, refresh_token=refresh)


class SessionStore(PersistedStore[SessionState, SessionSnapshot]):
    """Current user, tokens, onboarding flag and last auth error."""

    snapshot_model = SessionSnapshot

    def __init__(self, storage: PersistenceAdapter, backend: AuthBackend, slot: str = "auth-storage") -> None:
        super().__init__(storage, slot)
        self._backend = backend
        self._user: User | None = None
        self._tokens: AuthTokens | None = None
        self._first_visit = True
        self._is_loading = False
        self._error: str | None = None
        self._ticket = 0

    @property
    def state(self) -> SessionState:
        return SessionState(
            user=self._user,
            tokens=self._tokens,
            first_visit=self._first_visit,
            is_loading=self._is_loading,
            error=self._error,
        )

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def tokens(self) -> AuthTokens | None:
        return self._tokens

    @property
    def first_visit(self) -> bool:
        return self._first_visit

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_authenticated(self) -> bool:
        return self._tokens is not None and self._user is not None

    # ------------------------------------------------------------
    # Action lifecycle
    # ------------------------------------------------------------

    def _begin(self) -> int:
        self._ensure_hydrated()
        self._ticket += 1
        self._is_loading = True
        self._error = None
        self._commit()
        return self._ticket

    def _is_current(self, ticket: int, action: str) -> bool:
        if ticket != self._ticket:
            logger.info(f"Discarding stale {action} response")
            return False
        return True

    def _succeed(self) -> bool:
        self._is_loading = False
        self._commit()
        return True

    def _fail(self, message: str) -> bool:
        self._is_loading = False
        self._error = message
        self._commit()
        return False

    async def _attempt(
        self,
        action: str,
        default_message: str,
        body: Callable[[int], Awaitable[bool]],
    ) -> bool:
        """Run an action under a fresh ticket.

        Unexpected backend errors become `default_message`. Loading is reset
        even when the action is cancelled, unless it was superseded.
        """
        ticket = self._begin()
        try:
            return await body(ticket)
        except Exception:
            logger.exception(f"Auth {action} failed unexpectedly")
            if not self._is_current(ticket, action):
                return False
            return self._fail(default_message)
        finally:
            if ticket == self._ticket and self._is_loading:
                self._is_loading = False
                self._commit()

    # ------------------------------------------------------------
    # Session transitions
    # ------------------------------------------------------------

    async def login(self, credentials: LoginCredentials) -> bool:
        async def body(ticket: int) -> bool:
            result = await self._backend.login(credentials)
            if not self._is_current(ticket, "login"):
                return False
            session = _parse_session(result.data) if result.ok else None
            if session is None:
                return self._fail(result.message or LOGIN_FAILED)
            self._user, self._tokens = session
            logger.info(f"User {self._user.id} logged in")
            return self._succeed()

        return await self._attempt("login", LOGIN_FAILED, body)

    async def register(self, details: RegisterData) -> bool:
        """Register an account; the session is only set if the API returns one."""

        async def body(ticket: int) -> bool:
            result = await self._backend.register(details)
            if not self._is_current(ticket, "register"):
                return False
            if not result.ok:
                return self._fail(result.message or REGISTER_FAILED)
            session = _parse_session(result.data)
            if session is not None:
                self._user, self._tokens = session
            return self._succeed()

        return await self._attempt("register", REGISTER_FAILED, body)

    def logout(self) -> None:
        """Clear user, tokens and error. Keeps first_visit; supersedes in-flight actions."""
        self._ensure_hydrated()
        self._ticket += 1
        self._user = None
        self._tokens = None
        self._is_loading = False
        self._error = None
        self._commit()
        logger.info("Session cleared")

    async def refresh_user(self) -> bool:
        """Reload the current user with the stored tokens.

        A 401 triggers one access-token refresh and a retry. On failure the
        tokens are left in place; logging out is the caller's decision.
        """

        async def body(ticket: int) -> bool:
            tokens = self._tokens
            if tokens is None:
                return self._succeed()

            result = await self._backend.fetch_current_user(tokens.access_token)
            if not self._is_current(ticket, "refresh_user"):
                return False

            if result.unauthorized:
                refreshed = await self._backend.refresh_access_token(tokens.refresh_token)
                if not self._is_current(ticket, "refresh_user"):
                    return False
                access = refreshed.data.get("accessToken") if refreshed.ok else None
                if isinstance(access, str) and access:
                    self._tokens = AuthTokens(access_token=access, refresh_token=tokens.refresh_token)
                    self._commit()
                    result = await self._backend.fetch_current_user(access)
                    if not self._is_current(ticket, "refresh_user"):
                        return False

            user = _parse_user(result.data) if result.ok else None
            if user is None:
                return self._fail(result.message or REFRESH_FAILED)
            self._user = user
            return self._succeed()

        return await self._attempt("refresh_user", REFRESH_FAILED, body)

    # ------------------------------------------------------------
    # Password reset flow (never touches user/tokens)
    # ------------------------------------------------------------

    async def _run_action(
        self,
        action: str,
        call: Callable[[], Awaitable[AuthResult]],
        default_message: str,
    ) -> bool:
        async def body(ticket: int) -> bool:
            result = await call()
            if not self._is_current(ticket, action):
                return False
            if not result.ok:
                return self._fail(result.message or default_message)
            return self._succeed()

        return await self._attempt(action, default_message, body)

    async def request_verification_code(self, target: str) -> bool:
        return await self._run_action(
            "request_verification_code",
            lambda: self._backend.request_verification_code(target),
            REQUEST_CODE_FAILED,
        )

    async def verify_code(self, target: str | None, code: str) -> bool:
        return await self._run_action(
            "verify_code",
            lambda: self._backend.verify_code(code, target),
            VERIFY_CODE_FAILED,
        )

    async def reset_password(self, credentials: ResetPasswordCredentials) -> bool:
        return await self._run_action(
            "reset_password",
            lambda: self._backend.reset_password(credentials),
            RESET_PASSWORD_FAILED,
        )

    # ------------------------------------------------------------
    # Direct setters
    # ------------------------------------------------------------

    def set_first_visit(self, first_visit: bool = False) -> None:
        """Mark onboarding as done. Only True -> False is supported."""
        if first_visit:
            raise ValueError("first_visit can only be cleared, not set back to True")
        self._ensure_hydrated()
        if not self._first_visit:
            return
        self._first_visit = False
        self._commit()

    def set_user(self, user: User) -> None:
        self._ensure_hydrated()
        self._user = user
        self._commit()

    def update_tokens(self, tokens: AuthTokens) -> None:
        self._ensure_hydrated()
        self._tokens = tokens
        self._commit()

    def clear_error(self) -> None:
        self._ensure_hydrated()
        self._error = None
        self._commit()

    # ------------------------------------------------------------
    # Persistence hooks
    # ------------------------------------------------------------

    def _to_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(user=self._user, tokens=self._tokens, first_visit=self._first_visit)

    def _apply_snapshot(self, snapshot: SessionSnapshot) -> None:
        self._user = snapshot.user
        self._tokens = snapshot.tokens
        self._first_visit = snapshot.first_visit
