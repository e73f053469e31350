"""Placed clothing instances and canvas geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from models.clothing_item import ClothingItem

Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas pixels."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_points(cls, anchor: Point, current: Point) -> "Rect":
        """Rectangle spanned by two corners dragged in any direction."""

        return cls(
            left=min(anchor[0], current[0]),
            top=min(anchor[1], current[1]),
            right=max(anchor[0], current[0]),
            bottom=max(anchor[1], current[1]),
        )

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls.from_points((x, y), (x + width, y + height))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def normalized(self) -> "Rect":
        return Rect.from_points((self.left, self.top), (self.right, self.bottom))

    def intersects(self, other: "Rect") -> bool:
        """True when the overlap has positive area.

        Rectangles that merely share an edge do not intersect.
        """

        return not (
            self.right <= other.left
            or self.left >= other.right
            or self.bottom <= other.top
            or self.top >= other.bottom
        )

    def clamp_to(self, width: float, height: float) -> "Rect":
        return Rect(
            left=min(max(self.left, 0), width),
            top=min(max(self.top, 0), height),
            right=min(max(self.right, 0), width),
            bottom=min(max(self.bottom, 0), height),
        )


@dataclass
class CanvasItem:
    """One placement of a catalog item on the canvas."""

    instance_id: str
    item: ClothingItem
    x: float
    y: float
    width: float
    height: float
    z_index: int = 0

    @property
    def bounds(self) -> Rect:
        return Rect.from_xywh(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instanceId": self.instance_id,
            "item": self.item.to_dict(),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "zIndex": self.z_index,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CanvasItem":
        if not isinstance(payload, dict):
            raise ValueError("CanvasItem payload must be an object")
        if not payload.get("instanceId"):
            raise ValueError("CanvasItem requires an instanceId")
        try:
            geometry = {key: float(payload[key]) for key in ("x", "y", "width", "height")}
        except (KeyError, TypeError) as exc:
            raise ValueError(f"CanvasItem geometry is incomplete: {exc}") from exc
        return cls(
            instance_id=str(payload["instanceId"]),
            item=ClothingItem.from_dict(payload.get("item")),
            z_index=int(payload.get("zIndex") or 0),
            **geometry,
        )


__all__ = ["CanvasItem", "Point", "Rect"]
