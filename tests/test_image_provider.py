"""Image provider contract tests with mock and fake Gemini clients."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from agents.image_provider import GeminiImageProvider, MockImageProvider
from agents.prompts import REMOVE_BACKGROUND_PROMPT
from logic.export import solid_image_data_uri
from studio_app.config import DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL
from studio_app.errors import AiServiceError, InputValidationError

MASK = solid_image_data_uri(255)


class _FakeModels:
    def __init__(self, response: Any) -> None:
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        return self.response


def _image_response(data: bytes = b"\x89PNG-mask", mime_type: str = "image/png") -> SimpleNamespace:
    parts = [
        SimpleNamespace(inline_data=None, text="Here is your mask"),
        SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))], text=None)


def test_mock_records_calls_and_returns_a_mask(red_photo: str) -> None:
    provider = MockImageProvider()

    assert provider.remove_background(red_photo) == MASK
    assert provider.calls[0]["operation"] == "remove_background"
    assert provider.calls[0]["images"] == [red_photo]
    assert provider.calls[0]["prompt"] == REMOVE_BACKGROUND_PROMPT


def test_inputs_must_be_image_data_uris() -> None:
    provider = MockImageProvider()

    with pytest.raises(InputValidationError):
        provider.create_cutout("https://example.com/shirt.png")
    with pytest.raises(InputValidationError):
        provider.refine_mask("")
    assert provider.calls == []


def test_non_image_outputs_are_service_errors(red_photo: str) -> None:
    provider = MockImageProvider({"remove_background": "data:text/plain;base64,aGk="})

    with pytest.raises(AiServiceError) as excinfo:
        provider.remove_background(red_photo)
    assert excinfo.value.operation == "remove_background"


def test_empty_outputs_are_none(red_photo: str) -> None:
    provider = MockImageProvider({"create_cutout": None, "refine_mask": None})

    assert provider.create_cutout(red_photo) is None
    assert provider.refine_mask(MASK) is None


def test_composite_validates_aspect_ratio_and_items(red_photo: str) -> None:
    provider = MockImageProvider()
    items = [{"photoDataUri": red_photo, "category": "Tops"}, {"photoDataUri": red_photo, "category": "Shoes"}]

    assert provider.generate_outfit_composite(items, "4:5") == MASK
    assert "aspect ratio of 4:5" in provider.calls[-1]["prompt"]
    assert "(Tops, Shoes)" in provider.calls[-1]["prompt"]

    with pytest.raises(InputValidationError):
        provider.generate_outfit_composite(items, "16:9")
    with pytest.raises(InputValidationError):
        provider.generate_outfit_composite([], "1:1")


def test_suggestions_are_parsed(red_photo: str) -> None:
    answer = {
        "outfitSuggestions": [
            {"description": "Winter walk", "items": [{"name": "Red Scarf", "category": "Accessories"}]}
        ]
    }
    provider = MockImageProvider({"suggest_outfits": json.dumps(answer)})
    wardrobe = [{"name": "Red Scarf", "category": "Accessories", "photoDataUri": red_photo, "tags": ["winter"]}]

    suggestions = provider.suggest_outfits(wardrobe)

    assert suggestions.outfit_suggestions[0].description == "Winter walk"
    assert suggestions.outfit_suggestions[0].items[0].name == "Red Scarf"
    assert "Tags: winter" in provider.calls[0]["prompt"]


def test_malformed_suggestions_are_service_errors(red_photo: str) -> None:
    provider = MockImageProvider({"suggest_outfits": "not json"})
    wardrobe = [{"name": "Red Scarf", "category": "Accessories", "photoDataUri": red_photo}]

    with pytest.raises(AiServiceError):
        provider.suggest_outfits(wardrobe)


def test_mock_raises_configured_exceptions(red_photo: str) -> None:
    provider = MockImageProvider({"remove_background": RuntimeError("boom")})
    with pytest.raises(RuntimeError):
        provider.remove_background(red_photo)


def test_gemini_provider_reads_inline_image_parts(red_photo: str) -> None:
    models = _FakeModels(_image_response())
    provider = GeminiImageProvider(client=SimpleNamespace(models=models))

    mask = provider.remove_background(red_photo)

    assert mask == "data:image/png;base64,iVBORy1tYXNr"
    call = models.calls[0]
    assert call["model"] == DEFAULT_IMAGE_MODEL
    assert call["contents"][-1] == REMOVE_BACKGROUND_PROMPT
    assert call["contents"][0].inline_data.mime_type == "image/png"
    assert call["config"].response_modalities == ["TEXT", "IMAGE"]


def test_gemini_provider_without_image_returns_none(red_photo: str) -> None:
    empty = SimpleNamespace(candidates=[], text=None)
    provider = GeminiImageProvider(client=SimpleNamespace(models=_FakeModels(empty)))

    assert provider.create_cutout(red_photo) is None


def test_gemini_provider_requests_json_for_suggestions(red_photo: str) -> None:
    response = SimpleNamespace(candidates=[], text='{"outfitSuggestions": []}')
    models = _FakeModels(response)
    provider = GeminiImageProvider(client=SimpleNamespace(models=models))

    result = provider.suggest_outfits([{"name": "Shirt", "category": "Tops", "photoDataUri": red_photo}])

    assert result.outfit_suggestions == []
    assert models.calls[0]["model"] == DEFAULT_TEXT_MODEL
    assert models.calls[0]["config"].response_mime_type == "application/json"
