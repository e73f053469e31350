"""Model package exports."""

from models.canvas_item import CanvasItem, Rect
from models.categories import DEFAULT_CATEGORIES, CategoryRegistry
from models.clothing_item import AiAction, ClothingItem, Masked, Unmodified, parse_tags
from models.outfit import Outfit

__all__ = [
    "AiAction",
    "CanvasItem",
    "CategoryRegistry",
    "ClothingItem",
    "DEFAULT_CATEGORIES",
    "Masked",
    "Outfit",
    "Rect",
    "Unmodified",
    "parse_tags",
]
