"""Saved outfit snapshots."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.canvas_item import CanvasItem

UNTITLED_OUTFIT = "Untitled Outfit"


@dataclass
class Outfit:
    id: str
    name: str
    items: List[CanvasItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Outfit":
        if not isinstance(payload, dict):
            raise ValueError("Outfit payload must be an object")
        if not payload.get("id"):
            raise ValueError("Outfit requires an id")
        items = payload.get("items")
        if not isinstance(items, list):
            raise ValueError("Outfit items must be a list")
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name") or UNTITLED_OUTFIT),
            items=[CanvasItem.from_dict(item) for item in items],
        )
