"""Generative image service contract and implementations.

The service does all of the heavy lifting (segmentation, image synthesis).
This module only owns the request/response contract: inputs and outputs are
validated data URIs, an empty model response is reported as ``None`` and a
transport failure propagates to the caller.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from google import genai
from google.genai import types
from pydantic import ValidationError

from agents.prompts import (
    CREATE_CUTOUT_PROMPT,
    REFINE_MASK_PROMPT,
    REMOVE_BACKGROUND_PROMPT,
    outfit_composite_prompt,
    suggest_outfits_prompt,
)
from logic.export import solid_image_data_uri
from logic.validation import (
    CreateCutoutInput,
    GenerateOutfitImageInput,
    GenerateOutfitImageOutput,
    MaskOutput,
    OutfitSuggestions,
    RefineMaskInput,
    RefineMaskOutput,
    RemoveBackgroundInput,
    SuggestionWardrobeItem,
    validate_model,
)
from studio_app.config import DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL
from studio_app.errors import AiServiceError
from tools.data_uri import encode_data_uri, parse_data_uri
from tools.observability import instrument_operation

LOGGER = logging.getLogger(__name__)


class ImageGenerationProvider(ABC):
    """Abstract generative image provider."""

    @abstractmethod
    def generate_image(self, operation: str, images: Sequence[str], prompt: str) -> Optional[str]:
        """Return a generated image as a data URI, or ``None`` if the model produced none."""

    @abstractmethod
    def generate_json(self, operation: str, images: Sequence[str], prompt: str) -> Optional[str]:
        """Return the model's JSON text answer, or ``None`` if it produced none."""

    def _checked_output(self, operation: str, model, payload: Dict[str, Any]):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise AiServiceError(
                operation, f"The AI service returned an unusable result for {operation}."
            ) from exc

    @instrument_operation("ai_remove_background")
    def remove_background(self, photo_data_uri: str) -> Optional[str]:
        request = validate_model(RemoveBackgroundInput, {"photoDataUri": photo_data_uri}, "Invalid photo")
        result = self.generate_image("remove_background", [request.photo_data_uri], REMOVE_BACKGROUND_PROMPT)
        if not result:
            return None
        return self._checked_output("remove_background", MaskOutput, {"maskDataUri": result}).mask_data_uri

    @instrument_operation("ai_create_cutout")
    def create_cutout(self, photo_data_uri: str) -> Optional[str]:
        request = validate_model(CreateCutoutInput, {"photoDataUri": photo_data_uri}, "Invalid photo")
        result = self.generate_image("create_cutout", [request.photo_data_uri], CREATE_CUTOUT_PROMPT)
        if not result:
            return None
        return self._checked_output("create_cutout", MaskOutput, {"maskDataUri": result}).mask_data_uri

    @instrument_operation("ai_refine_mask")
    def refine_mask(self, mask_data_uri: str) -> Optional[str]:
        request = validate_model(RefineMaskInput, {"maskDataUri": mask_data_uri}, "Invalid mask")
        result = self.generate_image("refine_mask", [request.mask_data_uri], REFINE_MASK_PROMPT)
        if not result:
            return None
        output = self._checked_output("refine_mask", RefineMaskOutput, {"refinedMaskDataUri": result})
        return output.refined_mask_data_uri

    @instrument_operation("ai_generate_outfit_composite")
    def generate_outfit_composite(self, items: Sequence[Dict[str, str]], aspect_ratio: str) -> Optional[str]:
        """``items`` are ``{"photoDataUri", "category"}`` pairs."""

        request = validate_model(
            GenerateOutfitImageInput,
            {"items": list(items), "aspectRatio": aspect_ratio},
            "Invalid outfit image request",
        )
        prompt = outfit_composite_prompt(request.aspect_ratio, [item.category for item in request.items])
        result = self.generate_image(
            "generate_outfit_composite", [item.photo_data_uri for item in request.items], prompt
        )
        if not result:
            return None
        output = self._checked_output(
            "generate_outfit_composite", GenerateOutfitImageOutput, {"photoDataUri": result}
        )
        return output.photo_data_uri

    @instrument_operation("ai_suggest_outfits")
    def suggest_outfits(self, wardrobe: Sequence[Dict[str, Any]]) -> Optional[OutfitSuggestions]:
        """``wardrobe`` entries carry ``name``, ``category``, ``photoDataUri`` and ``tags``."""

        entries = [
            validate_model(SuggestionWardrobeItem, dict(entry), "Invalid wardrobe item") for entry in wardrobe
        ]
        prompt = suggest_outfits_prompt([entry.model_dump() for entry in entries])
        result = self.generate_json("suggest_outfits", [entry.photo_data_uri for entry in entries], prompt)
        if not result:
            return None
        try:
            return OutfitSuggestions.model_validate_json(result)
        except ValidationError as exc:
            raise AiServiceError(
                "suggest_outfits", "The AI service returned suggestions in an unexpected format."
            ) from exc


def _image_part(data_uri: str) -> types.Part:
    mime_type, payload = parse_data_uri(data_uri)
    return types.Part.from_bytes(data=payload, mime_type=mime_type)


class GeminiImageProvider(ImageGenerationProvider):
    """Gemini image generation through the ``google-genai`` SDK."""

    def __init__(
        self,
        api_key: str | None = None,
        image_model: str = DEFAULT_IMAGE_MODEL,
        text_model: str = DEFAULT_TEXT_MODEL,
        client: genai.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.image_model = image_model
        self.text_model = text_model
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> genai.Client:
        with self._client_lock:
            if self._client is None:
                self._client = genai.Client(api_key=self.api_key)
            return self._client

    def _contents(self, images: Sequence[str], prompt: str) -> List[Any]:
        return [*(_image_part(image) for image in images), prompt]

    def generate_image(self, operation: str, images: Sequence[str], prompt: str) -> Optional[str]:
        response = self.client.models.generate_content(
            model=self.image_model,
            contents=self._contents(images, prompt),
            config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
        )
        for candidate in response.candidates or []:
            if candidate.content is None:
                continue
            for part in candidate.content.parts or []:
                if part.inline_data is not None and part.inline_data.data:
                    return encode_data_uri(part.inline_data.data, part.inline_data.mime_type or "image/png")
        LOGGER.warning("No image found in Gemini response", extra={"operation": operation})
        return None

    def generate_json(self, operation: str, images: Sequence[str], prompt: str) -> Optional[str]:
        response = self.client.models.generate_content(
            model=self.text_model,
            contents=self._contents(images, prompt),
            config=types.GenerateContentConfig(response_mime_type="application/json"),
        )
        text = response.text
        if not text:
            LOGGER.warning("Empty JSON response from Gemini", extra={"operation": operation})
            return None
        return text


class MockImageProvider(ImageGenerationProvider):
    """Deterministic provider for tests and offline runs.

    ``responses`` maps operation names to a canned data URI / JSON string, to
    ``None`` (the model returned nothing) or to an exception instance to raise.
    Operations without an entry return a small solid white PNG, or an empty
    suggestion list for ``suggest_outfits``. When ``gate`` is given every call
    blocks until it is set.
    """

    def __init__(
        self,
        responses: Dict[str, Any] | None = None,
        gate: threading.Event | None = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.gate = gate
        self.calls: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def _respond(self, operation: str, images: Sequence[str], prompt: str, default: Optional[str]) -> Optional[str]:
        with self._lock:
            self.calls.append({"operation": operation, "images": list(images), "prompt": prompt})
        if self.gate is not None:
            self.gate.wait()
        response = self.responses.get(operation, default)
        if isinstance(response, BaseException):
            raise response
        return response

    def generate_image(self, operation: str, images: Sequence[str], prompt: str) -> Optional[str]:
        return self._respond(operation, images, prompt, solid_image_data_uri(255))

    def generate_json(self, operation: str, images: Sequence[str], prompt: str) -> Optional[str]:
        return self._respond(operation, images, prompt, '{"outfitSuggestions": []}')


__all__ = ["GeminiImageProvider", "ImageGenerationProvider", "MockImageProvider"]
