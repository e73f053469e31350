"""Selection engine: click, shift-click, marquee selection and group drag."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from logic.canvas import CanvasModel
from models.canvas_item import CanvasItem, Point, Rect


class SelectionEngine:
    """Tracks which canvas instances are selected and applies group gestures."""

    def __init__(self, canvas: CanvasModel, keep_layers_order: bool = False) -> None:
        self.canvas = canvas
        self.keep_layers_order = keep_layers_order
        self._selected: Set[str] = set()
        self._marquee_anchor: Optional[Point] = None
        self._marquee_current: Optional[Point] = None

    @property
    def selected_ids(self) -> Set[str]:
        # Drop ids whose instance has since left the canvas.
        self._selected = {instance_id for instance_id in self._selected if instance_id in self.canvas}
        return set(self._selected)

    def selected_items(self) -> List[CanvasItem]:
        selected = self.selected_ids
        return [item for item in self.canvas.items if item.instance_id in selected]

    def clear(self) -> None:
        self._selected = set()

    def discard(self, instance_id: str) -> None:
        self._selected.discard(instance_id)

    def select_only(self, instance_ids: Iterable[str]) -> Set[str]:
        self._selected = {instance_id for instance_id in instance_ids if instance_id in self.canvas}
        return set(self._selected)

    def pointer_down_on_item(self, instance_id: str, shift: bool = False) -> Set[str]:
        """Handle a press on an instance.

        Shift toggles the instance in or out of the selection. A plain press on
        an unselected instance replaces the selection; on an instance that is
        already selected the selection is kept so the whole group can be dragged.
        """

        self.canvas.get(instance_id)
        if shift:
            if instance_id in self._selected:
                self._selected.discard(instance_id)
            else:
                self._selected.add(instance_id)
        elif instance_id not in self._selected:
            self._selected = {instance_id}

        if not self.keep_layers_order:
            self.canvas.bring_to_front(instance_id)
        return self.selected_ids

    def drag_selection(self, delta: Point) -> List[CanvasItem]:
        """Move every selected instance by the same delta."""

        return self.canvas.move(self.selected_ids, delta)

    # Marquee ----------------------------------------------------------

    @property
    def marquee_rect(self) -> Optional[Rect]:
        if self._marquee_anchor is None or self._marquee_current is None:
            return None
        return Rect.from_points(self._marquee_anchor, self._marquee_current)

    def begin_marquee(self, point: Point) -> None:
        self._marquee_anchor = point
        self._marquee_current = point

    def update_marquee(self, point: Point) -> Optional[Rect]:
        if self._marquee_anchor is None:
            return None
        self._marquee_current = point
        return self.marquee_rect

    def end_marquee(self) -> Set[str]:
        """Select exactly the instances overlapping the marquee and reset it."""

        rect = self.marquee_rect
        self._marquee_anchor = None
        self._marquee_current = None
        if rect is None:
            return self.selected_ids
        return self.select_only(items_in_rect(self.canvas.items, rect))

    def select_in_rect(self, anchor: Point, current: Point) -> Set[str]:
        """Run a whole marquee gesture in one call."""

        self.begin_marquee(anchor)
        self.update_marquee(current)
        return self.end_marquee()


def items_in_rect(items: Iterable[CanvasItem], rect: Rect) -> List[str]:
    return [item.instance_id for item in items if item.bounds.intersects(rect)]


__all__ = ["SelectionEngine", "items_in_rect"]
