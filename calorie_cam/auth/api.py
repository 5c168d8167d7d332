# -*- coding: utf-8 -*-
"""Auth — API endpoints (anonymous sessions only)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from ..errors import StorageError
from ..services import Services, get_services
from .events import SIGNED_IN, SIGNED_OUT
from .models import AuthResponse, UserPublic
from .security import TOKEN_COOKIE_NAME, create_access_token, get_current_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_public(row: dict) -> UserPublic:
    return UserPublic(id=row["id"], anonymous=bool(row.get("anonymous", True)), created_at=row["created_at"])


def _set_auth_cookie(resp: Response, token: str, services: Services) -> None:
    max_age = int(services.settings.token_ttl_days) * 24 * 60 * 60
    resp.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(services.settings.cookie_secure),
        samesite="lax",
        max_age=max_age,
        path="/",
    )


@router.post("/anonymous", response_model=AuthResponse, summary="Start an anonymous session")
def sign_in_anonymously(response: Response, services: Services = Depends(get_services)):
    try:
        user = services.accounts.create_anonymous()
    except StorageError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc

    token = create_access_token(
        user_id=user["id"],
        secret=services.settings.jwt_secret,
        ttl_days=services.settings.token_ttl_days,
    )
    _set_auth_cookie(response, token, services)
    services.auth_events.emit(SIGNED_IN, user["id"])
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/logout", summary="Sign out")
def logout(response: Response, user: dict = Depends(get_current_user), services: Services = Depends(get_services)):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    services.auth_events.emit(SIGNED_OUT, user["id"])
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Get the current session's user")
def me(user: dict = Depends(get_current_user)):
    return _user_public(user)
