"""Shared fixtures for the Wardrobe Studio tests."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable, Iterator, Tuple

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.image_provider import MockImageProvider
from memory.local_storage import InMemoryLocalStorage
from studio_app.app import WardrobeStudioApp
from studio_app.config import StudioConfig
from tools.data_uri import encode_data_uri

PhotoFactory = Callable[..., str]


def _photo(color: Tuple[int, int, int] = (255, 0, 0), size: Tuple[int, int] = (20, 20), fmt: str = "PNG") -> str:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    mime_type = "image/jpeg" if fmt == "JPEG" else f"image/{fmt.lower()}"
    return encode_data_uri(buffer.getvalue(), mime_type)


@pytest.fixture()
def make_photo() -> PhotoFactory:
    """Factory for solid-colour image data URIs."""

    return _photo


@pytest.fixture()
def red_photo() -> str:
    return _photo((255, 0, 0))


@pytest.fixture()
def storage() -> InMemoryLocalStorage:
    return InMemoryLocalStorage()


class FailingStorage(InMemoryLocalStorage):
    """Storage whose writes can be switched to fail like a full disk."""

    def __init__(self) -> None:
        super().__init__()
        self.failing = False

    def set_item(self, key: str, value: str) -> None:
        if self.failing:
            raise OSError("disk full")
        super().set_item(key, value)


@pytest.fixture()
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture()
def provider() -> MockImageProvider:
    return MockImageProvider()


@pytest.fixture()
def studio(storage: InMemoryLocalStorage, provider: MockImageProvider) -> Iterator[WardrobeStudioApp]:
    app = WardrobeStudioApp(
        config=StudioConfig(storage_backend="memory"),
        storage=storage,
        provider=provider,
    )
    yield app
    app.shutdown()
