# -*- coding: utf-8 -*-
"""Vision — Pydantic models for label-detection payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LabelAnnotation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    description: str = Field(..., min_length=1)
    score: Optional[float] = Field(None, ge=0, le=1)
    mid: Optional[str] = None
    topicality: Optional[float] = None
