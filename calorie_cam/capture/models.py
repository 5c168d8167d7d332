# -*- coding: utf-8 -*-
"""Capture — Pydantic request/response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .session import CameraFacing, CaptureState


class CaptureRequest(BaseModel):
    image_base64: str = Field(..., min_length=16, description="Raw base64 without data-url prefix; format is detected from the bytes")


class CaptureStateResponse(BaseModel):
    state: CaptureState
    torch: bool
    facing: CameraFacing
