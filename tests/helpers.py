# -*- coding: utf-8 -*-
"""Shared fixtures for the test modules (images, fake detectors, failing stores)."""

from __future__ import annotations

import base64
import io
import threading
from typing import Iterable, List

from PIL import Image

from calorie_cam.docstore import MemoryDocumentStore
from calorie_cam.errors import StorageError
from calorie_cam.vision.models import LabelAnnotation


def make_image_bytes(width: int = 1600, height: int = 1200, fmt: str = "JPEG", mode: str = "RGB") -> bytes:
    color = (200, 120, 40, 255) if mode == "RGBA" else (200, 120, 40)
    img = Image.new(mode, (width, height), color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def make_image_b64(width: int = 1600, height: int = 1200) -> str:
    return base64.b64encode(make_image_bytes(width, height)).decode("ascii")


def labels(*descriptions: str) -> List[LabelAnnotation]:
    return [LabelAnnotation(description=d, score=0.9) for d in descriptions]


class FakeDetector:
    def __init__(self, descriptions: Iterable[str] = (), error: Exception | None = None) -> None:
        self.descriptions = list(descriptions)
        self.error = error
        self.calls: List[str] = []

    def detect_labels(self, content_b64: str) -> List[LabelAnnotation]:
        self.calls.append(content_b64)
        if self.error is not None:
            raise self.error
        return labels(*self.descriptions)


class BlockingDetector(FakeDetector):
    """Parks inside detect_labels until ``release`` is set."""

    def __init__(self, descriptions: Iterable[str] = ()) -> None:
        super().__init__(descriptions)
        self.entered = threading.Event()
        self.release = threading.Event()

    def detect_labels(self, content_b64: str) -> List[LabelAnnotation]:
        self.entered.set()
        self.release.wait(timeout=5)
        return super().detect_labels(content_b64)


class FailingStore(MemoryDocumentStore):
    """Memory store whose reads and/or writes fail like an unreachable backend."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False) -> None:
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def query(self, collection, filters=(), order_by=None, limit=None):
        if self.fail_reads and collection.startswith("users/"):
            raise StorageError("backend unavailable")
        return super().query(collection, filters, order_by=order_by, limit=limit)

    def add(self, collection, data):
        if self.fail_writes and collection.startswith("users/"):
            raise StorageError("permission denied")
        return super().add(collection, data)
