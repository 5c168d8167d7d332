# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel


class UserPublic(BaseModel):
    id: str
    anonymous: bool = True
    created_at: str


class AuthResponse(BaseModel):
    user: UserPublic
    token: str
