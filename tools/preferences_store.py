"""User interface preferences persisted next to the wardrobe."""
from __future__ import annotations

import logging

from memory.local_storage import LocalStorage, write_json

LOGGER = logging.getLogger(__name__)

THEME_SLIDER_KEY = "theme_slider"


def clamp_percentage(value: int) -> int:
    return max(0, min(100, int(value)))


class PreferencesStore:
    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage

    def theme_slider(self) -> int:
        raw = self.storage.get_item(THEME_SLIDER_KEY)
        if raw is None:
            return 0
        try:
            return clamp_percentage(int(str(raw).strip()))
        except ValueError:
            LOGGER.warning("Discarding corrupt theme slider value")
            return 0

    def set_theme_slider(self, value: int) -> int:
        percentage = clamp_percentage(value)
        write_json(self.storage, THEME_SLIDER_KEY, percentage)
        return percentage


__all__ = ["PreferencesStore", "THEME_SLIDER_KEY", "clamp_percentage"]
