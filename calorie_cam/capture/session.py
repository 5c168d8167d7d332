# -*- coding: utf-8 -*-
"""Capture — one-at-a-time capture session state machine.

IDLE -> CAPTURING -> ANALYZING -> {MATCHED, UNMATCHED, FAILED} -> IDLE

A trigger that arrives while a capture is in flight is ignored. Every error
raised inside a capture is converted into a single user-facing outcome here;
nothing propagates further and nothing is retried.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel

from ..errors import CaptureError, NetworkError, NoMatchError, StorageError
from ..meals.recording import MealRecorder
from ..vision.imaging import DEFAULT_MAX_WIDTH, downsample_image
from ..vision.labels import select_food_label
from ..vision.models import LabelAnnotation

logger = logging.getLogger(__name__)

NO_FOOD_MESSAGE = "No food detected in the image. Please try again."
CAMERA_FAILED_MESSAGE = "Error taking picture. Please try again."
SAVE_FAILED_MESSAGE = "Could not save your meal. Please try again."


class CaptureState(str, Enum):
    idle = "idle"
    capturing = "capturing"
    analyzing = "analyzing"
    matched = "matched"
    unmatched = "unmatched"
    failed = "failed"


class CameraFacing(str, Enum):
    back = "back"
    front = "front"


class Camera(Protocol):
    def take_picture(self, *, facing: CameraFacing, torch: bool) -> bytes: ...


class LabelDetector(Protocol):
    def detect_labels(self, content_b64: str) -> List[LabelAnnotation]: ...


class StillImageCamera:
    """A camera whose single still has already been taken (e.g. an uploaded photo)."""

    def __init__(self, image_bytes: bytes) -> None:
        self.image_bytes = image_bytes

    def take_picture(self, *, facing: CameraFacing, torch: bool) -> bytes:  # noqa: ARG002
        if not self.image_bytes:
            raise CaptureError("No image was captured")
        return self.image_bytes


class CaptureOutcome(BaseModel):
    status: CaptureState
    message: Optional[str] = None
    label: Optional[str] = None
    calories_added: Optional[float] = None
    error: Optional[str] = None


TransitionCallback = Callable[[CaptureState, CaptureState], None]


class CaptureSession:
    def __init__(
        self,
        user_id: str,
        detector: LabelDetector,
        recorder: MealRecorder,
        *,
        max_width: int = DEFAULT_MAX_WIDTH,
        on_transition: Optional[TransitionCallback] = None,
    ) -> None:
        self.user_id = user_id
        self.detector = detector
        self.recorder = recorder
        self.max_width = max_width
        self.on_transition = on_transition
        self.facing = CameraFacing.back
        self.torch = False
        self._state = CaptureState.idle
        self._lock = threading.Lock()

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is not CaptureState.idle

    def _transition(self, new_state: CaptureState) -> None:
        with self._lock:
            previous = self._state
            self._state = new_state
        logger.debug("capture %s: %s -> %s", self.user_id, previous.value, new_state.value)
        if self.on_transition:
            self.on_transition(previous, new_state)

    def toggle_torch(self) -> bool:
        with self._lock:
            if self._state is not CaptureState.idle:
                return False
            self.torch = not self.torch
            return True

    def toggle_facing(self) -> bool:
        with self._lock:
            if self._state is not CaptureState.idle:
                return False
            self.facing = CameraFacing.front if self.facing is CameraFacing.back else CameraFacing.back
            return True

    def trigger(self, camera: Camera) -> Optional[CaptureOutcome]:
        """Run one capture; returns None when another capture is already in flight."""
        with self._lock:
            if self._state is not CaptureState.idle:
                logger.info("capture %s ignored: session is %s", self.user_id, self._state.value)
                return None
            self._state = CaptureState.capturing
        if self.on_transition:
            self.on_transition(CaptureState.idle, CaptureState.capturing)

        try:
            outcome = self._run(camera)
            self._transition(outcome.status)
            return outcome
        finally:
            self._transition(CaptureState.idle)

    def _run(self, camera: Camera) -> CaptureOutcome:
        try:
            raw = camera.take_picture(facing=self.facing, torch=self.torch)
            encoded = downsample_image(raw, self.max_width)
        except CaptureError as exc:
            logger.warning("capture %s failed: %s", self.user_id, exc)
            return CaptureOutcome(status=CaptureState.failed, message=CAMERA_FAILED_MESSAGE, error=str(exc))

        self._transition(CaptureState.analyzing)
        label: Optional[str] = None
        try:
            label = select_food_label(self.detector.detect_labels(encoded.content))
            if label is None:
                raise NoMatchError("No food-indicative label in the image")
            calories = self.recorder.record_detected_food(self.user_id, label)
            if calories is None:
                raise NoMatchError(f"Label {label!r} is not in the food catalog")
        except NoMatchError as exc:
            logger.info("capture %s unmatched: %s", self.user_id, exc)
            return CaptureOutcome(status=CaptureState.unmatched, message=NO_FOOD_MESSAGE, label=label, error=str(exc))
        except NetworkError as exc:
            logger.warning("capture %s label detection failed: %s", self.user_id, exc)
            return CaptureOutcome(status=CaptureState.failed, message=NO_FOOD_MESSAGE, error=str(exc))
        except StorageError as exc:
            logger.error("capture %s could not save meal: %s", self.user_id, exc)
            return CaptureOutcome(status=CaptureState.failed, message=SAVE_FAILED_MESSAGE, label=label, error=str(exc))

        logger.info("capture %s matched %r (+%s kcal)", self.user_id, label, calories)
        return CaptureOutcome(status=CaptureState.matched, label=label, calories_added=calories)


class CaptureSessionRegistry:
    """One capture session per user."""

    def __init__(self, factory: Callable[[str], CaptureSession]) -> None:
        self.factory = factory
        self._sessions: Dict[str, CaptureSession] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> CaptureSession:
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = self.factory(user_id)
                self._sessions[user_id] = session
            return session

    def discard(self, user_id: str) -> bool:
        """Forget an idle session; a session mid-capture is kept until it finishes."""
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None or session.busy:
                return False
            del self._sessions[user_id]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
