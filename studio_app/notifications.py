"""User-facing toast notifications."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import asdict, dataclass
from typing import Deque, Dict, List

DEFAULT = "default"
DESTRUCTIVE = "destructive"
MAX_NOTIFICATIONS = 50


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = DEFAULT

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class NotificationCenter:
    """Bounded queue of notifications; the oldest are dropped first."""

    def __init__(self, limit: int = MAX_NOTIFICATIONS) -> None:
        self._items: Deque[Notification] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def notify(self, title: str, description: str, variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        with self._lock:
            self._items.append(notification)
        return notification

    def error(self, title: str, description: str) -> Notification:
        return self.notify(title, description, DESTRUCTIVE)

    def pending(self) -> List[Notification]:
        with self._lock:
            return list(self._items)

    def drain(self) -> List[Notification]:
        with self._lock:
            items = list(self._items)
            self._items.clear()
        return items


__all__ = ["DEFAULT", "DESTRUCTIVE", "MAX_NOTIFICATIONS", "Notification", "NotificationCenter"]
