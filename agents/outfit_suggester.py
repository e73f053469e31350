"""Stylist suggestions built from the user's wardrobe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from logic.validation import OutfitSuggestions
from models.clothing_item import ClothingItem

MAX_SUGGESTIONS = 3

# Fractions of the canvas (x, y, width, height) used when a suggestion is
# placed on the canvas.
CATEGORY_SLOTS: Dict[str, Tuple[float, float, float, float]] = {
    "tops": (0.0, 0.0, 1.0, 0.6),
    "bottoms": (0.0, 0.5, 1.0, 0.5),
    "shoes": (0.55, 0.75, 0.45, 0.25),
    "accessories": (0.65, 0.05, 0.3, 0.3),
}


@dataclass
class ResolvedSuggestion:
    description: str
    items: List[ClothingItem] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
            "unresolved": list(self.unresolved),
        }


def wardrobe_request(items: Sequence[ClothingItem]) -> List[Dict[str, object]]:
    """Payload describing each wardrobe item to the stylist model."""

    return [
        {
            "name": item.name,
            "category": item.category,
            "photoDataUri": item.photo_data_uri,
            "tags": list(item.tags),
        }
        for item in items
    ]


def _match(name: str, category: str, catalog: Sequence[ClothingItem]) -> Optional[ClothingItem]:
    key = name.strip().lower()
    candidates = [item for item in catalog if item.name.strip().lower() == key]
    if not candidates:
        return None
    same_category = [item for item in candidates if item.category.lower() == category.strip().lower()]
    return (same_category or candidates)[0]


def resolve_suggestions(
    suggestions: OutfitSuggestions, catalog: Sequence[ClothingItem]
) -> List[ResolvedSuggestion]:
    """Map suggested item names back onto catalog items."""

    resolved: List[ResolvedSuggestion] = []
    for suggestion in suggestions.outfit_suggestions[:MAX_SUGGESTIONS]:
        entry = ResolvedSuggestion(description=suggestion.description)
        seen = set()
        for suggested in suggestion.items:
            match = _match(suggested.name, suggested.category, catalog)
            if match is None:
                entry.unresolved.append(suggested.name)
            elif match.id not in seen:
                entry.items.append(match)
                seen.add(match.id)
        resolved.append(entry)
    return resolved


def slot_for(category: str, canvas_size: Tuple[int, int]) -> Optional[Tuple[float, float, float, float]]:
    """Canvas rectangle ``(x, y, width, height)`` for a category, if it has a slot."""

    fractions = CATEGORY_SLOTS.get(category.strip().lower())
    if fractions is None:
        return None
    width, height = canvas_size
    fx, fy, fw, fh = fractions
    return fx * width, fy * height, fw * width, fh * height


__all__ = [
    "CATEGORY_SLOTS",
    "MAX_SUGGESTIONS",
    "ResolvedSuggestion",
    "resolve_suggestions",
    "slot_for",
    "wardrobe_request",
]
