# -*- coding: utf-8 -*-
"""Capture — API endpoints."""

from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from ..services import Services, get_services
from .models import CaptureRequest, CaptureStateResponse
from .session import CaptureOutcome, CaptureSession, StillImageCamera

router = APIRouter(prefix="/api/capture", tags=["Capture"])


def _decode_image_or_400(image_base64: str, max_bytes: int) -> bytes:
    try:
        data = base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {exc}") from exc
    if len(data) > max_bytes:
        raise HTTPException(status_code=400, detail=f"Image too large: {len(data)} bytes > {max_bytes}")
    return data


def _state_response(session: CaptureSession) -> CaptureStateResponse:
    return CaptureStateResponse(state=session.state, torch=session.torch, facing=session.facing)


@router.post("", response_model=CaptureOutcome, summary="Capture a food photo and log the detected meal")
def capture(
    request: CaptureRequest,
    user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    image_bytes = _decode_image_or_400(request.image_base64, services.settings.max_image_bytes)
    session = services.captures.get(user["id"])
    outcome = session.trigger(StillImageCamera(image_bytes))
    if outcome is None:
        raise HTTPException(status_code=409, detail="A capture is already in progress")
    return outcome


@router.get("/state", response_model=CaptureStateResponse, summary="Current capture session state")
def capture_state(user: dict = Depends(get_current_user), services: Services = Depends(get_services)):
    return _state_response(services.captures.get(user["id"]))


@router.post("/torch", response_model=CaptureStateResponse, summary="Toggle the flash")
def toggle_torch(user: dict = Depends(get_current_user), services: Services = Depends(get_services)):
    session = services.captures.get(user["id"])
    if not session.toggle_torch():
        raise HTTPException(status_code=409, detail="Cannot change the flash while capturing")
    return _state_response(session)


@router.post("/facing", response_model=CaptureStateResponse, summary="Switch front/back camera")
def toggle_facing(user: dict = Depends(get_current_user), services: Services = Depends(get_services)):
    session = services.captures.get(user["id"])
    if not session.toggle_facing():
        raise HTTPException(status_code=409, detail="Cannot switch camera while capturing")
    return _state_response(session)
