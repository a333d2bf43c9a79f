"""Auth session endpoints.

Auth failures are not HTTP errors here: actions always answer 200 with
`ok` and the resulting session view, whose `error` carries the message.
Tokens stay inside the store and are never returned.
"""

from fastapi import APIRouter, Depends

from storefront.routes.deps import session_store
from storefront.schemas import (
    ActionResponse,
    LoginCredentials,
    RedirectDecision,
    RegisterData,
    ResetPasswordCredentials,
    SessionResponse,
    VerificationCodeRequest,
    VerifyCodeRequest,
)
from storefront.services.navigation import decide_redirect
from storefront.stores.session import SessionStore

router = APIRouter()


def _session_response(store: SessionStore) -> SessionResponse:
    state = store.state
    return SessionResponse(
        user=state.user,
        is_authenticated=state.is_authenticated,
        is_loading=state.is_loading,
        error=state.error,
        first_visit=state.first_visit,
    )


def _action_response(ok: bool, store: SessionStore) -> ActionResponse:
    return ActionResponse(ok=ok, session=_session_response(store))


@router.get("", response_model=SessionResponse)
async def get_session(store: SessionStore = Depends(session_store)) -> SessionResponse:
    return _session_response(store)


@router.get("/redirect", response_model=RedirectDecision)
async def get_redirect(store: SessionStore = Depends(session_store)) -> RedirectDecision:
    route = decide_redirect(store.state)
    return RedirectDecision(route=route.value if route else None)


@router.post("/login", response_model=ActionResponse)
async def login(body: LoginCredentials, store: SessionStore = Depends(session_store)) -> ActionResponse:
    ok = await store.login(body)
    return _action_response(ok, store)


@router.post("/register", response_model=ActionResponse)
async def register(body: RegisterData, store: SessionStore = Depends(session_store)) -> ActionResponse:
    ok = await store.register(body)
    return _action_response(ok, store)


@router.post("/logout", response_model=ActionResponse)
async def logout(store: SessionStore = Depends(session_store)) -> ActionResponse:
    store.logout()
    return _action_response(True, store)


@router.post("/refresh", response_model=ActionResponse)
async def refresh_user(store: SessionStore = Depends(session_store)) -> ActionResponse:
    ok = await store.refresh_user()
    return _action_response(ok, store)


@router.post("/verification-code", response_model=ActionResponse)
async def request_verification_code(
    body: VerificationCodeRequest,
    store: SessionStore = Depends(session_store),
) -> ActionResponse:
    ok = await store.request_verification_code(body.target)
    return _action_response(ok, store)


@router.post("/verify-code", response_model=ActionResponse)
async def verify_code(body: VerifyCodeRequest, store: SessionStore = Depends(session_store)) -> ActionResponse:
    ok = await store.verify_code(body.target, body.code)
    return _action_response(ok, store)


@router.post("/reset-password", response_model=ActionResponse)
async def reset_password(
    body: ResetPasswordCredentials,
    store: SessionStore = Depends(session_store),
) -> ActionResponse:
    ok = await store.reset_password(body)
    return _action_response(ok, store)


@router.post("/onboarding/complete", response_model=SessionResponse)
async def complete_onboarding(store: SessionStore = Depends(session_store)) -> SessionResponse:
    store.set_first_visit(False)
    return _session_response(store)


@router.post("/clear-error", response_model=SessionResponse)
async def clear_error(store: SessionStore = Depends(session_store)) -> SessionResponse:
    store.clear_error()
    return _session_response(store)
