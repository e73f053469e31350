"""Clothing catalog persistence: wardrobe items and the category registry."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from memory.local_storage import LocalStorage, read_json, write_json
from models.categories import DEFAULT_CATEGORIES, CategoryRegistry
from models.clothing_item import ClothingItem, normalise_tags
from models.identifiers import TimestampIdGenerator
from studio_app.errors import InputValidationError, NotFoundError
from tools.data_uri import is_image_data_uri
from tools.observability import instrument_operation

LOGGER = logging.getLogger(__name__)

WARDROBE_KEY = "wardrobe"
CATEGORIES_KEY = "categories"


def _require_photo(photo_data_uri: Optional[str]) -> str:
    if not photo_data_uri:
        raise InputValidationError("Please upload a photo or provide an image URL.")
    if not is_image_data_uri(photo_data_uri):
        raise InputValidationError(
            "The photo must be an image data URI.", title="Image Error"
        )
    return photo_data_uri


def _require_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InputValidationError("Please fill out name and category.")
    return cleaned


class CatalogStore:
    """The user's clothing items and categories, written through on every change."""

    def __init__(self, storage: LocalStorage, id_generator: TimestampIdGenerator | None = None) -> None:
        self.storage = storage
        self.id_generator = id_generator or TimestampIdGenerator()
        self._items: List[ClothingItem] = self._load_items()
        self.registry = CategoryRegistry(self._load_categories())

    # Loading -----------------------------------------------------------

    def _load_items(self) -> List[ClothingItem]:
        raw = read_json(self.storage, WARDROBE_KEY, [])
        if not isinstance(raw, list):
            LOGGER.warning("Stored wardrobe is not a list; starting empty")
            return []
        items: List[ClothingItem] = []
        for index, entry in enumerate(raw):
            try:
                items.append(ClothingItem.from_dict(entry))
            except (TypeError, ValueError) as exc:
                LOGGER.warning(
                    "Dropping malformed wardrobe entry",
                    extra={"index": index, "error": str(exc)},
                )
        return items

    def _load_categories(self) -> List[str]:
        raw = read_json(self.storage, CATEGORIES_KEY, None)
        if not isinstance(raw, list):
            return list(DEFAULT_CATEGORIES)
        names = [str(name) for name in raw if isinstance(name, str) and name.strip()]
        return names or list(DEFAULT_CATEGORIES)

    def _commit_items(self, items: List[ClothingItem]) -> None:
        """Write ``items`` and only then make them the in-memory catalog."""

        write_json(self.storage, WARDROBE_KEY, [item.to_dict() for item in items])
        self._items = items

    def _commit_categories(self, registry: CategoryRegistry) -> None:
        write_json(self.storage, CATEGORIES_KEY, registry.names())
        self.registry = registry

    # Queries -----------------------------------------------------------

    def list_items(self) -> List[ClothingItem]:
        return list(self._items)

    def find_item(self, item_id: str) -> Optional[ClothingItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def get_item(self, item_id: str) -> ClothingItem:
        item = self.find_item(item_id)
        if item is None:
            raise NotFoundError(f"No wardrobe item with id {item_id}")
        return item

    def items_by_category(self) -> Dict[str, List[ClothingItem]]:
        """Group items under every registered category, as the sidebar lists them."""

        grouped: Dict[str, List[ClothingItem]] = {name: [] for name in self.registry.names()}
        for item in self._items:
            grouped.setdefault(item.category, []).append(item)
        return grouped

    def categories(self) -> List[str]:
        return self.registry.names()

    # Mutations ---------------------------------------------------------

    @instrument_operation("add_wardrobe_item")
    def add_item(
        self,
        name: str,
        category: str,
        photo_data_uri: str,
        tags: Iterable[str] | None = None,
    ) -> ClothingItem:
        cleaned_name = _require_name(name)
        if not (category or "").strip():
            raise InputValidationError("Please fill out name and category.")
        photo = _require_photo(photo_data_uri)

        registry = CategoryRegistry(self.registry.names())
        item = ClothingItem(
            id=self.id_generator.next_id(),
            name=cleaned_name,
            category=registry.ensure(category),
            photo_data_uri=photo,
            tags=normalise_tags(tags),
        )
        if len(registry) != len(self.registry):
            self._commit_categories(registry)
        self._commit_items([*self._items, item])
        return item

    @instrument_operation("update_wardrobe_item")
    def update_item(
        self,
        item_id: str,
        *,
        name: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        photo_data_uri: Optional[str] = None,
    ) -> ClothingItem:
        current = self.get_item(item_id)
        updated = current.edited(
            name=_require_name(name) if name is not None else None,
            category=self.registry.validate(category) if category is not None else None,
            tags=normalise_tags(tags) if tags is not None else None,
        )
        if photo_data_uri is not None:
            updated = updated.with_photo(_require_photo(photo_data_uri))
        return self.set_item(updated)

    def set_item(self, item: ClothingItem) -> ClothingItem:
        """Store an already-built item, e.g. one carrying a new AI mask."""

        if self.find_item(item.id) is None:
            raise NotFoundError(f"No wardrobe item with id {item.id}")
        self._commit_items([item if existing.id == item.id else existing for existing in self._items])
        return item

    @instrument_operation("revert_wardrobe_item")
    def revert_item(self, item_id: str) -> ClothingItem:
        return self.set_item(self.get_item(item_id).revert())

    @instrument_operation("delete_wardrobe_item")
    def delete_item(self, item_id: str) -> ClothingItem:
        item = self.get_item(item_id)
        self._commit_items([existing for existing in self._items if existing.id != item_id])
        return item

    def add_category(self, name: str) -> str:
        registry = CategoryRegistry(self.registry.names())
        added = registry.add(name)
        self._commit_categories(registry)
        return added


__all__ = ["CATEGORIES_KEY", "CatalogStore", "WARDROBE_KEY"]
