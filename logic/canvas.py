"""Canvas item model: placement, geometry and stacking order of instances."""

from __future__ import annotations

import copy
from typing import Callable, Iterable, List, Optional

from models.canvas_item import CanvasItem, Point
from models.clothing_item import ClothingItem
from models.identifiers import new_instance_id
from studio_app.errors import InputValidationError, NotFoundError

DEFAULT_ITEM_SIZE = 200
MIN_ITEM_SIZE = 50


class CanvasModel:
    """The set of clothing instances currently placed on the outfit canvas.

    ``z_index`` values are not kept contiguous; only their relative order is
    meaningful. Every mutating call applies in full or not at all.
    """

    def __init__(
        self,
        default_size: int = DEFAULT_ITEM_SIZE,
        min_size: int = MIN_ITEM_SIZE,
        id_factory: Callable[[str], str] = new_instance_id,
    ) -> None:
        self.default_size = default_size
        self.min_size = min_size
        self._id_factory = id_factory
        self._items: List[CanvasItem] = []

    # Queries -----------------------------------------------------------

    @property
    def items(self) -> List[CanvasItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, instance_id: object) -> bool:
        return any(item.instance_id == instance_id for item in self._items)

    def get(self, instance_id: str) -> CanvasItem:
        for item in self._items:
            if item.instance_id == instance_id:
                return item
        raise NotFoundError(f"No canvas item with id {instance_id}")

    def find(self, instance_id: str) -> Optional[CanvasItem]:
        return next((item for item in self._items if item.instance_id == instance_id), None)

    def layers(self) -> List[CanvasItem]:
        """Items front-most first, as listed in the layers panel."""

        return sorted(self._items, key=lambda item: item.z_index, reverse=True)

    def max_z(self) -> int:
        return max((item.z_index for item in self._items), default=0)

    def snapshot(self) -> List[CanvasItem]:
        return copy.deepcopy(self._items)

    # Placement ---------------------------------------------------------

    def place(self, item: ClothingItem, position: Point) -> CanvasItem:
        """Drop ``item`` so the pointer ends up at the centre of the new instance."""

        size = self.default_size
        placed = CanvasItem(
            instance_id=self._id_factory(item.id),
            item=copy.deepcopy(item),
            x=position[0] - size / 2,
            y=position[1] - size / 2,
            width=size,
            height=size,
            z_index=max(self.max_z(), 0) + 1,
        )
        self._items.append(placed)
        return placed

    def load(self, items: Iterable[CanvasItem]) -> None:
        """Replace the whole canvas with copies of ``items``."""

        self._items = copy.deepcopy(list(items))

    # Geometry ----------------------------------------------------------

    def move(self, instance_ids: Iterable[str], delta: Point) -> List[CanvasItem]:
        targets = set(instance_ids)
        dx, dy = delta
        moved = []
        for item in self._items:
            if item.instance_id in targets:
                item.x += dx
                item.y += dy
                moved.append(item)
        return moved

    def resize(self, instance_id: str, width: float, height: float, x: float, y: float) -> CanvasItem:
        item = self.get(instance_id)
        item.width = max(float(width), self.min_size)
        item.height = max(float(height), self.min_size)
        item.x = float(x)
        item.y = float(y)
        return item

    # Stacking ----------------------------------------------------------

    def bring_to_front(self, instance_id: str) -> CanvasItem:
        item = self.get(instance_id)
        item.z_index = self.max_z() + 1
        return item

    def send_to_back(self, instance_id: str) -> CanvasItem:
        item = self.get(instance_id)
        others = [other.z_index for other in self._items if other.instance_id != instance_id]
        if others:
            item.z_index = min(others) - 1
        return item

    def reorder(self, front_to_back: List[str]) -> List[CanvasItem]:
        """Apply a layers-panel ordering, front-most first."""

        current = {item.instance_id: item for item in self._items}
        if len(front_to_back) != len(current) or set(front_to_back) != set(current):
            raise InputValidationError(
                "Layer order must list every canvas item exactly once.", title="Invalid Layer Order"
            )
        total = len(front_to_back)
        for position, instance_id in enumerate(front_to_back):
            current[instance_id].z_index = total - position
        return self.layers()

    def move_layer(self, dragged_id: str, target_id: str) -> List[CanvasItem]:
        """Drop ``dragged_id`` onto ``target_id``'s slot in the layers list."""

        order = [item.instance_id for item in self.layers()]
        if dragged_id not in order:
            raise NotFoundError(f"No canvas item with id {dragged_id}")
        if target_id not in order:
            raise NotFoundError(f"No canvas item with id {target_id}")
        if dragged_id == target_id:
            return self.layers()
        target_index = order.index(target_id)
        order.remove(dragged_id)
        order.insert(target_index, dragged_id)
        return self.reorder(order)

    # Removal and propagation -----------------------------------------

    def remove(self, instance_id: str) -> CanvasItem:
        item = self.get(instance_id)
        self._items = [other for other in self._items if other.instance_id != instance_id]
        return item

    def remove_all(self) -> None:
        self._items = []

    def remove_by_item_id(self, item_id: str) -> List[str]:
        """Drop every placement of a catalog item; returns the removed instance ids."""

        removed = [item.instance_id for item in self._items if item.item.id == item_id]
        self._items = [item for item in self._items if item.item.id != item_id]
        return removed

    def replace_item(self, item: ClothingItem) -> int:
        """Propagate a catalog edit to every placement of that item."""

        count = 0
        for placed in self._items:
            if placed.item.id == item.id:
                placed.item = copy.deepcopy(item)
                count += 1
        return count


__all__ = ["CanvasModel", "DEFAULT_ITEM_SIZE", "MIN_ITEM_SIZE"]
