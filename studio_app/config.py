"""Configuration for the Wardrobe Studio app."""

from dataclasses import dataclass, fields
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_IMAGE_MODEL = "gemini-2.0-flash-preview-image-generation"
DEFAULT_TEXT_MODEL = "gemini-2.0-flash"
STORAGE_BACKENDS = ("memory", "json", "sqlite")

# Setting names that differ from the field they fill.
_SETTING_NAMES = {"api_key": "google_api_key"}


@dataclass
class StudioConfig:
    """Configuration values for the studio.

    Canvas geometry is expressed in unscaled canvas pixels. The same numbers are
    used by the rasterizer so exported images line up 1:1 with item positions.
    """

    api_key: Optional[str] = None
    image_model: str = DEFAULT_IMAGE_MODEL
    text_model: str = DEFAULT_TEXT_MODEL
    storage_backend: str = "json"
    storage_path: Optional[str] = None
    canvas_width: int = 1200
    canvas_height: int = 1200
    default_item_size: int = 200
    min_item_size: int = 50
    ai_max_workers: int = 4
    fetch_timeout_seconds: float = 10.0
    environment: str | None = None

    def __post_init__(self) -> None:
        self.storage_backend = self.storage_backend.lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage backend '{self.storage_backend}'. Allowed: {list(STORAGE_BACKENDS)}"
            )
        if self.min_item_size <= 0 or self.default_item_size < self.min_item_size:
            raise ValueError("default_item_size must be at least min_item_size and both positive")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("Canvas dimensions must be positive")

    @classmethod
    def from_env(cls) -> "StudioConfig":
        """Read settings from the environment over an optional settings file.

        The file is ``APP_CONFIG_PATH`` when set, otherwise
        ``$STUDIO_CONFIG_DIR/<APP_ENV>.yaml`` (``config/environments`` by
        default). Environment variables are the upper-cased setting names, e.g.
        ``GOOGLE_API_KEY`` or ``CANVAS_WIDTH``, and win over the file.
        """

        env_name = os.getenv("APP_ENV")
        file_values = _read_settings_file(_settings_path(env_name))

        values: Dict[str, object] = {}
        for entry in fields(cls):
            if entry.name == "environment":
                continue
            setting = _SETTING_NAMES.get(entry.name, entry.name)
            raw = os.getenv(setting.upper(), file_values.get(setting))
            if raw is None or raw == "":
                continue
            if isinstance(entry.default, int):
                values[entry.name] = int(raw)
            elif isinstance(entry.default, float):
                values[entry.name] = float(raw)
            else:
                values[entry.name] = raw
        return cls(environment=env_name, **values)


def _settings_path(env_name: Optional[str]) -> Optional[Path]:
    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("STUDIO_CONFIG_DIR", "config/environments")) / f"{env_name}.yaml"
    return None


def _read_settings_file(path: Optional[Path]) -> Dict[str, str]:
    """Flat ``key: value`` pairs; nested YAML is not supported."""

    if path is None or not path.exists():
        return {}
    settings: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        content = line.split(" #", 1)[0].strip()
        if not content or content.startswith("#") or ":" not in content:
            continue
        key, value = content.split(":", 1)
        settings[key.strip()] = value.strip().strip("\"'")
    return settings


__all__ = ["DEFAULT_IMAGE_MODEL", "DEFAULT_TEXT_MODEL", "STORAGE_BACKENDS", "StudioConfig"]
