# -*- coding: utf-8 -*-
"""Auth — session-change notifications."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)

SIGNED_IN = "signed_in"
SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class AuthEvent:
    kind: str
    user_id: str


Listener = Callable[[AuthEvent], None]


class AuthEvents:
    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: str, user_id: str) -> None:
        event = AuthEvent(kind=kind, user_id=user_id)
        with self._lock:
            listeners = list(self._listeners)
        logger.info("auth %s: %s", kind, user_id)
        for listener in listeners:
            listener(event)
