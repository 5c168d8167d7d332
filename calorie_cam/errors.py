# -*- coding: utf-8 -*-
"""Error taxonomy shared by the capture, storage and aggregation layers."""

from __future__ import annotations

from typing import Any, Dict, Optional


class CalorieCamError(Exception):
    """Base class for domain errors.

    Attributes:
        message: human-readable message
        http_status: suggested HTTP status code for API handlers
    """

    http_status = 500

    def __init__(self, message: str = "Unexpected error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload: Dict[str, Any] = {"message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class CaptureError(CalorieCamError):
    """Camera unavailable, capture failed, or the still could not be decoded."""

    http_status = 400


class NetworkError(CalorieCamError):
    """Label-detection API unreachable, timed out, or answered non-2xx."""

    http_status = 502


class NoMatchError(CalorieCamError):
    """No food-indicative label, or the label is not in the catalog."""

    http_status = 404


class StorageError(CalorieCamError):
    """Read or write failure against the document store."""

    http_status = 503


class AggregationError(CalorieCamError):
    """Daily summary could not be computed because the underlying read failed."""

    http_status = 503
