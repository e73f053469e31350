"""Pydantic schemas for the image service contracts and user form payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from studio_app.errors import InputValidationError
from tools.data_uri import is_image_data_uri

ASPECT_RATIOS = ("1:1", "4:5", "9:16")
AspectRatio = Literal["1:1", "4:5", "9:16"]


def _require_image_uri(value: str) -> str:
    if not is_image_data_uri(value):
        raise ValueError("must be an image data URI of the form 'data:<mimetype>;base64,<data>'")
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RemoveBackgroundInput(_CamelModel):
    photo_data_uri: str = Field(alias="photoDataUri")

    validate_photo = field_validator("photo_data_uri")(_require_image_uri)


class MaskOutput(_CamelModel):
    """Shared output of background removal and cutout generation."""

    mask_data_uri: str = Field(alias="maskDataUri")

    validate_mask = field_validator("mask_data_uri")(_require_image_uri)


class CreateCutoutInput(RemoveBackgroundInput):
    pass


class RefineMaskInput(_CamelModel):
    mask_data_uri: str = Field(alias="maskDataUri")

    validate_mask = field_validator("mask_data_uri")(_require_image_uri)


class RefineMaskOutput(_CamelModel):
    refined_mask_data_uri: str = Field(alias="refinedMaskDataUri")

    validate_mask = field_validator("refined_mask_data_uri")(_require_image_uri)


class CompositeItem(_CamelModel):
    photo_data_uri: str = Field(alias="photoDataUri")
    category: str = Field(min_length=1)

    validate_photo = field_validator("photo_data_uri")(_require_image_uri)


class GenerateOutfitImageInput(_CamelModel):
    items: List[CompositeItem] = Field(min_length=1)
    aspect_ratio: AspectRatio = Field(alias="aspectRatio")


class GenerateOutfitImageOutput(_CamelModel):
    photo_data_uri: str = Field(alias="photoDataUri")

    validate_photo = field_validator("photo_data_uri")(_require_image_uri)


class SuggestionWardrobeItem(_CamelModel):
    name: str
    category: str
    photo_data_uri: str = Field(alias="photoDataUri")
    tags: List[str] = []
    description: Optional[str] = None


class SuggestedItem(BaseModel):
    name: str
    category: str


class OutfitSuggestion(BaseModel):
    description: str
    items: List[SuggestedItem] = []


class OutfitSuggestions(_CamelModel):
    outfit_suggestions: List[OutfitSuggestion] = Field(default_factory=list, alias="outfitSuggestions")


def validate_model(model: type[BaseModel], payload: Dict[str, Any], message: str) -> BaseModel:
    """Validate ``payload`` and surface failures as :class:`InputValidationError`."""

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors(include_url=False)[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InputValidationError(f"{message}: {location} {first.get('msg')}".strip()) from exc


__all__ = [
    "ASPECT_RATIOS",
    "AspectRatio",
    "CompositeItem",
    "CreateCutoutInput",
    "GenerateOutfitImageInput",
    "GenerateOutfitImageOutput",
    "MaskOutput",
    "OutfitSuggestion",
    "OutfitSuggestions",
    "RefineMaskInput",
    "RefineMaskOutput",
    "RemoveBackgroundInput",
    "SuggestedItem",
    "SuggestionWardrobeItem",
    "validate_model",
]
