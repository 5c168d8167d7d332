# -*- coding: utf-8 -*-
"""Auth — JWT session tokens + FastAPI helpers."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request

from ..config import settings

TOKEN_COOKIE_NAME = "calcam_token"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(*, user_id: str, secret: str | None = None, ttl_days: int | None = None) -> str:
    now = _utc_now()
    exp = now + timedelta(days=int(ttl_days if ttl_days is not None else settings.token_ttl_days))
    payload = {
        "sub": user_id,
        "anonymous": True,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return _jwt_encode(payload, secret or settings.jwt_secret)


def decode_token(token: str, secret: str | None = None) -> Dict[str, Any]:
    try:
        payload = _jwt_decode(token, secret or settings.jwt_secret)
    except (ValueError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    exp = int(payload.get("exp") or 0)
    if exp and exp < int(_utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    return payload


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def _jwt_encode(payload: Dict[str, Any], secret: str) -> str:
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    sig = hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()
    return f"{header_b64}.{payload_b64}.{_b64url_encode(sig)}"


def _jwt_decode(token: str, secret: str) -> Dict[str, Any]:
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError("invalid token")
    header_b64, payload_b64, sig_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    expected_sig = hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()
    if not hmac.compare_digest(expected_sig, _b64url_decode(sig_b64)):
        raise ValueError("bad signature")
    payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("bad payload")
    return payload


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    cookie = request.cookies.get(TOKEN_COOKIE_NAME)
    return cookie or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    # If middleware already authenticated, reuse it.
    user = getattr(request.state, "user", None)
    if user:
        return user

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    services = request.app.state.services
    payload = decode_token(token, services.settings.jwt_secret)
    user_id = str(payload.get("sub") or "")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")

    account = services.accounts.get(user_id)
    if not account:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = account
    return account


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
