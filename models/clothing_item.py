"""Clothing item data model and AI processing state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union


class AiAction(str, Enum):
    """AI edits that leave a mask on an item."""

    CUTOUT = "cutout"
    REMOVE = "remove"


@dataclass(frozen=True)
class Unmodified:
    """The displayed photo is the ground truth."""


@dataclass(frozen=True)
class Masked:
    """An AI action derived a luminance mask from ``original_photo_data_uri``.

    White areas of the mask keep pixels, black areas become transparent. The
    mask is composited at render time and never baked into the photo.
    """

    original_photo_data_uri: str
    mask_data_uri: str
    last_action: AiAction


ProcessingState = Union[Unmodified, Masked]


def normalise_tags(values: Iterable[str] | None) -> List[str]:
    """Strip, drop blanks and de-duplicate tags while keeping their order."""

    tags: List[str] = []
    seen = set()
    for value in values or []:
        tag = str(value).strip()
        if tag and tag not in seen:
            tags.append(tag)
            seen.add(tag)
    return tags


def parse_tags(raw: str | None) -> List[str]:
    """Split the comma separated tag field of the item forms."""

    return normalise_tags((raw or "").split(","))


@dataclass(frozen=True)
class ClothingItem:
    """A photographed garment in the user's catalog."""

    id: str
    name: str
    category: str
    photo_data_uri: str
    tags: List[str] = field(default_factory=list)
    processing: ProcessingState = field(default_factory=Unmodified)

    def __post_init__(self) -> None:
        if not str(self.id).strip():
            raise ValueError("ClothingItem requires an id")
        if not str(self.photo_data_uri).strip():
            raise ValueError("ClothingItem requires a photo")
        object.__setattr__(self, "tags", normalise_tags(self.tags))

    @property
    def is_modified(self) -> bool:
        return isinstance(self.processing, Masked)

    @property
    def original_photo_data_uri(self) -> Optional[str]:
        return self.processing.original_photo_data_uri if isinstance(self.processing, Masked) else None

    @property
    def mask_data_uri(self) -> Optional[str]:
        return self.processing.mask_data_uri if isinstance(self.processing, Masked) else None

    @property
    def last_ai_action(self) -> Optional[AiAction]:
        return self.processing.last_action if isinstance(self.processing, Masked) else None

    @property
    def source_photo_data_uri(self) -> str:
        """Unedited photo that every mask must be derived from."""

        return self.original_photo_data_uri or self.photo_data_uri

    def with_mask(self, mask_data_uri: str, action: AiAction) -> "ClothingItem":
        return replace(
            self,
            processing=Masked(
                original_photo_data_uri=self.source_photo_data_uri,
                mask_data_uri=mask_data_uri,
                last_action=AiAction(action),
            ),
        )

    def with_refined_mask(self, mask_data_uri: str) -> "ClothingItem":
        if not isinstance(self.processing, Masked):
            raise ValueError("Only masked items can have their mask refined")
        return replace(self, processing=replace(self.processing, mask_data_uri=mask_data_uri))

    def revert(self) -> "ClothingItem":
        if not isinstance(self.processing, Masked):
            return self
        return replace(
            self,
            photo_data_uri=self.processing.original_photo_data_uri,
            processing=Unmodified(),
        )

    def with_photo(self, photo_data_uri: str) -> "ClothingItem":
        """A newly uploaded photo becomes the new ground truth."""

        return replace(self, photo_data_uri=photo_data_uri, processing=Unmodified())

    def edited(
        self,
        *,
        name: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> "ClothingItem":
        changes: Dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if category is not None:
            changes["category"] = category
        if tags is not None:
            changes["tags"] = list(tags)
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "photoDataUri": self.photo_data_uri,
            "tags": list(self.tags),
        }
        if isinstance(self.processing, Masked):
            payload["originalPhotoDataUri"] = self.processing.original_photo_data_uri
            payload["maskDataUri"] = self.processing.mask_data_uri
            payload["lastAiAction"] = self.processing.last_action.value
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ClothingItem":
        """Build an item from its stored shape, rejecting inconsistent records."""

        if not isinstance(payload, dict):
            raise ValueError("ClothingItem payload must be an object")
        missing = [key for key in ("id", "name", "category", "photoDataUri") if not payload.get(key)]
        if missing:
            raise ValueError(f"Missing required fields for ClothingItem: {missing}")

        original = payload.get("originalPhotoDataUri")
        mask = payload.get("maskDataUri")
        processing: ProcessingState = Unmodified()
        if mask:
            if not original:
                raise ValueError("A masked item must keep its original photo")
            processing = Masked(
                original_photo_data_uri=str(original),
                mask_data_uri=str(mask),
                last_action=AiAction(payload.get("lastAiAction") or AiAction.REMOVE.value),
            )

        tags = payload.get("tags") or []
        if isinstance(tags, str):
            tags = parse_tags(tags)
        if not isinstance(tags, (list, tuple, set)):
            raise ValueError("tags must be a list of strings")

        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            category=str(payload["category"]),
            photo_data_uri=str(payload["photoDataUri"]),
            tags=list(tags),
            processing=processing,
        )


__all__ = [
    "AiAction",
    "ClothingItem",
    "Masked",
    "ProcessingState",
    "Unmodified",
    "normalise_tags",
    "parse_tags",
]
