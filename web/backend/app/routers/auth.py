"""Auth router -- sign-up, sign-in, sign-out and the current session.

Sign-up and sign-in are rate limited per client address.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from nwcommunity.auth.models import Member
from nwcommunity.auth.store import MemberStore
from nwcommunity.config import Settings
from web.backend.app.middleware.auth import (
    enforce_login_rate_limit,
    get_app_settings,
    get_member_store,
)
from web.backend.app.models.api import MemberResponse, SessionResponse, SignInRequest, SignUpRequest

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _member_response(m: Member) -> MemberResponse:
    return MemberResponse(
        id=m.id,
        email=m.email,
        display_name=m.display_name,
        created_at=m.created_at,
    )


def _start_session(
    response: Response, store: MemberStore, member: Member, settings: Settings
) -> SessionResponse:
    session = store.create_session(member.id)
    response.set_cookie(
        settings.session_cookie,
        session.token,
        httponly=True,
        samesite="lax",
    )
    return SessionResponse(
        token=session.token,
        member=_member_response(member),
        expires_at=session.expires_at,
    )


@router.post(
    "/signup",
    response_model=SessionResponse,
    dependencies=[Depends(enforce_login_rate_limit)],
)
async def signup(
    body: SignUpRequest,
    response: Response,
    store: MemberStore = Depends(get_member_store),
    settings: Settings = Depends(get_app_settings),
):
    """Register a member and start a session."""
    if store.get_member_by_email(body.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    member = store.create_member(body.email, display_name=body.display_name)
    return _start_session(response, store, member, settings)


@router.post(
    "/signin",
    response_model=SessionResponse,
    dependencies=[Depends(enforce_login_rate_limit)],
)
async def signin(
    body: SignInRequest,
    response: Response,
    store: MemberStore = Depends(get_member_store),
    settings: Settings = Depends(get_app_settings),
):
    """Start a session for an existing member."""
    member = store.get_member_by_email(body.email)
    if member is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return _start_session(response, store, member, settings)


@router.post("/signout")
async def signout(
    request: Request,
    response: Response,
    store: MemberStore = Depends(get_member_store),
    settings: Settings = Depends(get_app_settings),
):
    """End the current session, if any."""
    token = request.cookies.get(settings.session_cookie)
    if token:
        store.delete_session(token)
    response.delete_cookie(settings.session_cookie)
    return {"signed_out": True}


@router.get("/me", response_model=MemberResponse)
async def me(
    request: Request,
    store: MemberStore = Depends(get_member_store),
    settings: Settings = Depends(get_app_settings),
):
    """Return the member behind the session cookie."""
    member = store.validate_session(request.cookies.get(settings.session_cookie, ""))
    if member is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return _member_response(member)
