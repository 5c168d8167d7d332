# -*- coding: utf-8 -*-
"""Vision — label detection via the images:annotate REST API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings, settings
from ..errors import NetworkError
from .models import LabelAnnotation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisionSettings:
    api_url: str
    api_key: Optional[str]
    timeout: float
    max_results: int


def resolve_vision_settings(cfg: Settings | None = None) -> VisionSettings:
    cfg = cfg or settings
    return VisionSettings(
        api_url=cfg.vision_api_url.rstrip("/"),
        api_key=(cfg.vision_api_key or "").strip() or None,
        timeout=float(cfg.vision_timeout),
        max_results=int(cfg.vision_max_results),
    )


def build_request_payload(content_b64: str, max_results: int = 5) -> Dict[str, Any]:
    return {
        "requests": [
            {
                "image": {"content": content_b64},
                "features": [{"type": "LABEL_DETECTION", "maxResults": max_results}],
            }
        ]
    }


def _pick_message(err: object) -> Optional[str]:
    if not isinstance(err, dict):
        return None
    msg = err.get("message")
    if isinstance(msg, str) and msg.strip():
        status = err.get("status") or err.get("code")
        return f"{status}: {msg.strip()}" if status else msg.strip()
    return None


def extract_error_from_response(data: object) -> Optional[str]:
    """Top-level ``error`` (request rejected) or per-image ``responses[0].error``."""
    if not isinstance(data, dict):
        return None
    msg = _pick_message(data.get("error"))
    if msg:
        return msg
    responses = data.get("responses")
    if isinstance(responses, list) and responses and isinstance(responses[0], dict):
        return _pick_message(responses[0].get("error"))
    return None


def parse_label_annotations(data: object) -> List[LabelAnnotation]:
    """Best-effort parse; malformed payloads yield an empty list."""
    if not isinstance(data, dict):
        return []
    responses = data.get("responses")
    if not isinstance(responses, list) or not responses or not isinstance(responses[0], dict):
        return []
    raw_labels = responses[0].get("labelAnnotations")
    if not isinstance(raw_labels, list):
        return []

    labels: List[LabelAnnotation] = []
    for raw in raw_labels:
        if not isinstance(raw, dict):
            continue
        try:
            labels.append(LabelAnnotation.model_validate(raw))
        except ValidationError as exc:
            logger.debug("skipping malformed label annotation %r: %s", raw, exc)
    return labels


class LabelDetectionClient:
    def __init__(self, vision: VisionSettings, transport: httpx.BaseTransport | None = None) -> None:
        self.vision = vision
        self.transport = transport

    def detect_labels(self, content_b64: str) -> List[LabelAnnotation]:
        if not self.vision.api_key:
            raise NetworkError("Label detection API key is not configured")

        payload = build_request_payload(content_b64, self.vision.max_results)
        try:
            with httpx.Client(timeout=self.vision.timeout, transport=self.transport) as client:
                resp = client.post(
                    self.vision.api_url,
                    params={"key": self.vision.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.HTTPError as exc:
            logger.warning("label detection request failed: %s", exc)
            raise NetworkError(f"Label detection API unreachable: {exc}") from exc

        data: object = None
        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None

        if resp.status_code >= 300:
            detail = extract_error_from_response(data) or resp.reason_phrase
            logger.warning("label detection returned %s: %s", resp.status_code, detail)
            raise NetworkError(f"Label detection failed ({resp.status_code}): {detail}")

        if data is None:
            snippet = (resp.text or "").replace("\n", " ").strip()[:200]
            logger.warning("label detection returned non-JSON body: %s", snippet)
            return []

        api_error = extract_error_from_response(data)
        if api_error:
            raise NetworkError(f"Label detection failed: {api_error}")

        labels = parse_label_annotations(data)
        if not labels:
            logger.info("label detection returned no labels")
        return labels
