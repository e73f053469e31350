"""Identifier generation for catalog items, outfits and canvas instances."""

from __future__ import annotations

import threading
import time
from uuid import uuid4


class TimestampIdGenerator:
    """Millisecond timestamp ids, strictly increasing within one session."""

    def __init__(self, clock=None) -> None:
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock())
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


def new_instance_id(item_id: str) -> str:
    """Placement id for one drop of a catalog item onto the canvas."""

    return f"{item_id}-{uuid4().hex[:12]}"


__all__ = ["TimestampIdGenerator", "new_instance_id"]
