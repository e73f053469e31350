"""Wardrobe Studio app bootstrap and user-action controller."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Iterable, List, Optional

from agents.ai_jobs import APPLIED, DISCARDED, AiJobOutcome, AiJobTracker
from agents.image_provider import GeminiImageProvider, ImageGenerationProvider
from agents.outfit_suggester import ResolvedSuggestion, resolve_suggestions, slot_for, wardrobe_request
from logic import export
from logic.canvas import CanvasModel
from logic.selection import SelectionEngine
from logic.theme import blend_theme
from logic.validation import ASPECT_RATIOS, OutfitSuggestions
from memory.local_storage import LocalStorage, build_local_storage
from models.canvas_item import Rect
from models.clothing_item import AiAction, ClothingItem, parse_tags
from models.identifiers import TimestampIdGenerator
from studio_app.config import StudioConfig
from studio_app.errors import InputValidationError, NotFoundError, StudioError
from studio_app.logging_config import configure_logging, get_logger, log_event, operation_context
from studio_app.notifications import NotificationCenter
from tools.data_uri import file_to_data_uri
from tools.image_fetcher import fetch_image_as_data_uri
from tools.outfit_store import OutfitStore
from tools.preferences_store import PreferencesStore
from tools.wardrobe_store import CatalogStore

LOGGER = get_logger(__name__)

COMPOSITE_KEY = "__composite__"
SUGGESTIONS_KEY = "__suggestions__"
STACK_OFFSET = 20

AI_OPERATIONS = {
    "remove": "remove_background",
    "cutout": "create_cutout",
    "refine": "refine_mask",
}

AI_SUCCESS_MESSAGES = {
    "remove_background": "Background removed.",
    "create_cutout": "Cutout created.",
    "refine_mask": "Mask refined.",
    "generate_outfit_composite": "Your AI outfit image is ready to download.",
    "suggest_outfits": "Your stylist has some ideas.",
}


def _tags(value: Iterable[str] | str | None) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return parse_tags(value)
    return list(value)


class WardrobeStudioApp:
    """Wires storage, stores, canvas, selection and the AI collaborator.

    Every public action returns a status dict. Failures surface as
    ``{"status": "error", ...}`` and a destructive notification; the state is
    left untouched.
    """

    def __init__(
        self,
        config: StudioConfig | None = None,
        storage: LocalStorage | None = None,
        provider: ImageGenerationProvider | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.config = config or StudioConfig.from_env()
        configure_logging()

        self._lock = threading.RLock()
        self.storage = storage or build_local_storage(self.config.storage_backend, self.config.storage_path)
        self.provider = provider or GeminiImageProvider(
            api_key=self.config.api_key,
            image_model=self.config.image_model,
            text_model=self.config.text_model,
        )

        ids = TimestampIdGenerator()
        self.catalog = CatalogStore(self.storage, ids)
        self.outfits = OutfitStore(self.storage, ids)
        self.preferences = PreferencesStore(self.storage)

        self.canvas = CanvasModel(
            default_size=self.config.default_item_size, min_size=self.config.min_item_size
        )
        self.selection = SelectionEngine(self.canvas)
        self.ai_jobs = AiJobTracker(
            executor=executor, max_workers=self.config.ai_max_workers, state_lock=self._lock
        )
        self.notifications = NotificationCenter()

        self.crop_rect: Optional[Rect] = None
        self.last_composite: Optional[str] = None
        self.suggestions: List[ResolvedSuggestion] = []

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.config.canvas_width, self.config.canvas_height

    # Action plumbing ---------------------------------------------------

    def _run_action(
        self, name: str, action: Callable[[], Dict[str, Any]], *, locked: bool = True
    ) -> Dict[str, Any]:
        with operation_context(f"app:{name}") as correlation_id:
            try:
                if locked:
                    with self._lock:
                        payload = action()
                else:
                    payload = action()
            except StudioError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "app_action_failed",
                    method=name,
                    error_kind=exc.kind,
                    details=exc.message,
                    correlation_id=correlation_id,
                )
                self.notifications.error(exc.title, exc.message)
                return {"status": "error", "error": exc.kind, "title": exc.title, "message": exc.message}

            log_event(LOGGER, logging.INFO, "app_action_completed", method=name, correlation_id=correlation_id)
            return {"status": "ok", **payload}

    def _canvas_payload(self) -> Dict[str, Any]:
        return {
            "items": [placed.to_dict() for placed in self.canvas.items],
            "layers": [placed.instance_id for placed in self.canvas.layers()],
            "selected": sorted(self.selection.selected_ids),
            "keep_layers_order": self.selection.keep_layers_order,
        }

    # Catalog -------------------------------------------------------------

    def wardrobe(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            grouped = self.catalog.items_by_category()
            return {
                "items": [item.to_dict() for item in self.catalog.list_items()],
                "categories": self.catalog.categories(),
                "by_category": {name: [item.id for item in items] for name, items in grouped.items()},
            }

        return self._run_action("wardrobe", action)

    def _item_added(self, item: ClothingItem) -> Dict[str, Any]:
        self.notifications.notify("Item Added", f"{item.name} has been added to your wardrobe.")
        return {"item": item.to_dict(), "categories": self.catalog.categories()}

    def add_item(
        self,
        name: str,
        category: str,
        photo_data_uri: Optional[str],
        tags: Iterable[str] | str | None = None,
    ) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            item = self.catalog.add_item(name, category, photo_data_uri, _tags(tags))
            return self._item_added(item)

        return self._run_action("add_item", action)

    def _check_item_fields(self, name: str, category: str) -> None:
        if not (name or "").strip() or not (category or "").strip():
            raise InputValidationError("Please fill out name and category.")

    def add_item_from_url(
        self, name: str, category: str, url: str, tags: Iterable[str] | str | None = None
    ) -> Dict[str, Any]:
        """Download the photo first; the state lock is only held for the catalog write."""

        def action() -> Dict[str, Any]:
            self._check_item_fields(name, category)
            photo = fetch_image_as_data_uri(url, timeout=self.config.fetch_timeout_seconds)
            with self._lock:
                item = self.catalog.add_item(name, category, photo, _tags(tags))
                return self._item_added(item)

        return self._run_action("add_item_from_url", action, locked=False)

    def add_item_from_file(
        self, name: str, category: str, path: str, tags: Iterable[str] | str | None = None
    ) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self._check_item_fields(name, category)
            photo = file_to_data_uri(path)
            with self._lock:
                item = self.catalog.add_item(name, category, photo, _tags(tags))
                return self._item_added(item)

        return self._run_action("add_item_from_file", action, locked=False)

    def update_item(
        self,
        item_id: str,
        *,
        name: Optional[str] = None,
        category: Optional[str] = None,
        tags: Iterable[str] | str | None = None,
        photo_data_uri: Optional[str] = None,
    ) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            updated = self.catalog.update_item(
                item_id, name=name, category=category, tags=_tags(tags), photo_data_uri=photo_data_uri
            )
            instances = self.canvas.replace_item(updated)
            self.notifications.notify("Item Updated", f"{updated.name} has been updated successfully.")
            return {"item": updated.to_dict(), "instances_updated": instances}

        return self._run_action("update_item", action)

    def delete_item(self, item_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.catalog.delete_item(item_id)
            removed = self.canvas.remove_by_item_id(item_id)
            self.notifications.notify(
                "Item Deleted", "The item has been removed from your wardrobe and canvas."
            )
            return {"item_id": item_id, "removed_instances": removed}

        return self._run_action("delete_item", action)

    def revert_item(self, item_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            reverted = self.catalog.revert_item(item_id)
            instances = self.canvas.replace_item(reverted)
            self.notifications.notify("Image Reverted", "The original image has been restored.")
            return {"item": reverted.to_dict(), "instances_updated": instances}

        return self._run_action("revert_item", action)

    def add_category(self, name: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            added = self.catalog.add_category(name)
            return {"category": added, "categories": self.catalog.categories()}

        return self._run_action("add_category", action)

    # Canvas --------------------------------------------------------------

    def canvas_state(self) -> Dict[str, Any]:
        return self._run_action("canvas_state", self._canvas_payload)

    def drop_item(self, item_id: str, x: float, y: float) -> Dict[str, Any]:
        """Place a catalog item so that it is centred on the drop point."""

        def action() -> Dict[str, Any]:
            placed = self.canvas.place(self.catalog.get_item(item_id), (x, y))
            return {"item": placed.to_dict()}

        return self._run_action("drop_item", action)

    def pointer_down(self, instance_id: str, shift: bool = False) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.selection.pointer_down_on_item(instance_id, shift=shift)
            return self._canvas_payload()

        return self._run_action("pointer_down", action)

    def clear_selection(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.selection.clear()
            return self._canvas_payload()

        return self._run_action("clear_selection", action)

    def drag_selection(self, dx: float, dy: float) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            moved = self.selection.drag_selection((dx, dy))
            return {"moved": [placed.to_dict() for placed in moved]}

        return self._run_action("drag_selection", action)

    def resize_item(
        self,
        instance_id: str,
        width: float,
        height: float,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            current = self.canvas.get(instance_id)
            resized = self.canvas.resize(
                instance_id,
                width,
                height,
                current.x if x is None else x,
                current.y if y is None else y,
            )
            return {"item": resized.to_dict()}

        return self._run_action("resize_item", action)

    def begin_marquee(self, x: float, y: float) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.selection.begin_marquee((x, y))
            return {}

        return self._run_action("begin_marquee", action)

    def update_marquee(self, x: float, y: float) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            rect = self.selection.update_marquee((x, y))
            return {"marquee": _rect_dict(rect)}

        return self._run_action("update_marquee", action)

    def end_marquee(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.selection.end_marquee()
            return self._canvas_payload()

        return self._run_action("end_marquee", action)

    def select_in_rect(self, x1: float, y1: float, x2: float, y2: float) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.selection.select_in_rect((x1, y1), (x2, y2))
            return self._canvas_payload()

        return self._run_action("select_in_rect", action)

    def bring_to_front(self, instance_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return {"item": self.canvas.bring_to_front(instance_id).to_dict()}

        return self._run_action("bring_to_front", action)

    def send_to_back(self, instance_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return {"item": self.canvas.send_to_back(instance_id).to_dict()}

        return self._run_action("send_to_back", action)

    def reorder_layers(self, front_to_back: List[str]) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.canvas.reorder(list(front_to_back))
            return self._canvas_payload()

        return self._run_action("reorder_layers", action)

    def move_layer(self, dragged_id: str, target_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.canvas.move_layer(dragged_id, target_id)
            return self._canvas_payload()

        return self._run_action("move_layer", action)

    def remove_from_canvas(self, instance_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            removed = self.canvas.remove(instance_id)
            self.selection.discard(instance_id)
            return {"removed": removed.instance_id}

        return self._run_action("remove_from_canvas", action)

    def clear_canvas(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.canvas.remove_all()
            self.selection.clear()
            self.crop_rect = None
            return self._canvas_payload()

        return self._run_action("clear_canvas", action)

    def set_keep_layers_order(self, enabled: bool) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.selection.keep_layers_order = bool(enabled)
            return {"keep_layers_order": self.selection.keep_layers_order}

        return self._run_action("set_keep_layers_order", action)

    def set_crop_rect(self, x1: float, y1: float, x2: float, y2: float) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.crop_rect = Rect.from_points((x1, y1), (x2, y2))
            return {"crop": _rect_dict(self.crop_rect)}

        return self._run_action("set_crop_rect", action)

    def clear_crop_rect(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            self.crop_rect = None
            return {"crop": None}

        return self._run_action("clear_crop_rect", action)

    # Outfits -------------------------------------------------------------

    def list_outfits(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return {"outfits": [outfit.to_dict() for outfit in self.outfits.list()]}

        return self._run_action("list_outfits", action)

    def save_outfit(self, name: str, overwrite_id: Optional[str] = None) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            outfit = self.outfits.save(name, self.canvas.items, overwrite_id=overwrite_id)
            self.notifications.notify("Outfit Saved!", "Your new outfit has been saved to your gallery.")
            return {"outfit": outfit.to_dict()}

        return self._run_action("save_outfit", action)

    def load_outfit(self, outfit_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            outfit = self.outfits.get(outfit_id)
            self.canvas.load(self.outfits.load(outfit_id))
            self.selection.clear()
            self.crop_rect = None
            return {"outfit_id": outfit.id, "name": outfit.name, **self._canvas_payload()}

        return self._run_action("load_outfit", action)

    def rename_outfit(self, outfit_id: str, name: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return {"outfit": self.outfits.rename(outfit_id, name).to_dict()}

        return self._run_action("rename_outfit", action)

    def delete_outfit(self, outfit_id: str) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            deleted = self.outfits.delete(outfit_id)
            if deleted:
                self.notifications.notify("Outfit Deleted", "The outfit has been removed from your gallery.")
            return {"deleted": deleted}

        return self._run_action("delete_outfit", action)

    # AI ------------------------------------------------------------------

    def remove_background(self, instance_id: str) -> Dict[str, Any]:
        return self.run_ai_action(instance_id, "remove")

    def create_cutout(self, instance_id: str) -> Dict[str, Any]:
        return self.run_ai_action(instance_id, "cutout")

    def refine_mask(self, instance_id: str) -> Dict[str, Any]:
        return self.run_ai_action(instance_id, "refine")

    def run_ai_action(self, instance_id: str, action_name: str) -> Dict[str, Any]:
        """Start a mask request for one canvas instance.

        The returned payload carries a ``future`` resolving to an
        :class:`AiJobOutcome`; the result is merged before it resolves.
        """

        def action() -> Dict[str, Any]:
            operation = AI_OPERATIONS.get(action_name)
            if operation is None:
                raise InputValidationError(
                    f"Unknown AI action '{action_name}'. Use one of {', '.join(AI_OPERATIONS)}.",
                    title="Unknown Action",
                )
            item = self.canvas.get(instance_id).item
            mask = item.mask_data_uri
            if action_name == "refine":
                if not mask:
                    raise InputValidationError(
                        "Remove the background or create a cutout before refining the mask.",
                        title="Nothing to Refine",
                    )
                call = lambda: self.provider.refine_mask(mask)  # noqa: E731
            elif action_name == "cutout":
                source = item.source_photo_data_uri
                call = lambda: self.provider.create_cutout(source)  # noqa: E731
            else:
                source = item.source_photo_data_uri
                call = lambda: self.provider.remove_background(source)  # noqa: E731

            future = self.ai_jobs.submit(
                instance_id,
                operation,
                call=call,
                apply=lambda mask_uri: self._apply_mask(item.id, action_name, mask_uri, refined_from=mask),
                still_valid=lambda: instance_id in self.canvas,
                on_done=self._announce_outcome,
            )
            return {"instance_id": instance_id, "operation": operation, "future": future}

        return self._run_action(f"ai_{action_name}", action)

    def _apply_mask(
        self, item_id: str, action_name: str, mask_uri: str, refined_from: Optional[str] = None
    ) -> None:
        current = self.catalog.find_item(item_id)
        in_catalog = current is not None
        if current is None:
            current = next(placed.item for placed in self.canvas.items if placed.item.id == item_id)

        if action_name == "refine":
            if not current.is_modified or current.mask_data_uri != refined_from:
                raise InputValidationError(
                    "The mask changed while it was being refined. Please try again.", title="Mask Changed"
                )
            updated = current.with_refined_mask(mask_uri)
        else:
            updated = current.with_mask(mask_uri, AiAction(action_name))

        if in_catalog:
            self.catalog.set_item(updated)
        self.canvas.replace_item(updated)

    def _announce_outcome(self, outcome: AiJobOutcome) -> None:
        if outcome.status == APPLIED:
            self.notifications.notify("Success!", AI_SUCCESS_MESSAGES.get(outcome.operation, "Done."))
        elif outcome.status == DISCARDED:
            log_event(LOGGER, logging.INFO, "ai_result_dropped", key=outcome.key, operation=outcome.operation)
        elif outcome.error is not None:
            self.notifications.error(outcome.error.title, outcome.error.message)

    def generate_ai_composite(self, aspect_ratio: str = "1:1") -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            if aspect_ratio not in ASPECT_RATIOS:
                raise InputValidationError(
                    f"Aspect ratio must be one of {', '.join(ASPECT_RATIOS)}.", title="Invalid Aspect Ratio"
                )
            payload: List[Dict[str, str]] = []
            seen = set()
            for placed in self.canvas.layers():
                if placed.item.id in seen:
                    continue
                seen.add(placed.item.id)
                payload.append(
                    {
                        "photoDataUri": export.visible_photo_data_uri(placed.item),
                        "category": placed.item.category,
                    }
                )
            if not payload:
                raise InputValidationError(
                    "Add some items to the canvas before generating an image.", title="Empty Canvas"
                )

            future = self.ai_jobs.submit(
                COMPOSITE_KEY,
                "generate_outfit_composite",
                call=lambda: self.provider.generate_outfit_composite(payload, aspect_ratio),
                apply=self._store_composite,
                on_done=self._announce_outcome,
            )
            return {"operation": "generate_outfit_composite", "future": future}

        return self._run_action("generate_ai_composite", action)

    def _store_composite(self, photo_data_uri: str) -> None:
        self.last_composite = photo_data_uri

    def download_ai_composite(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            if not self.last_composite:
                raise NotFoundError("Generate an AI outfit image before downloading it.")
            return _export_payload(export.data_uri_download(self.last_composite, "outfit-ai"))

        return self._run_action("download_ai_composite", action)

    def request_suggestions(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            items = self.catalog.list_items()
            if not items:
                raise InputValidationError(
                    "Add some items to your wardrobe before asking for suggestions.", title="Empty Wardrobe"
                )
            request = wardrobe_request(items)
            future = self.ai_jobs.submit(
                SUGGESTIONS_KEY,
                "suggest_outfits",
                call=lambda: self.provider.suggest_outfits(request),
                apply=self._store_suggestions,
                on_done=self._announce_outcome,
            )
            return {"operation": "suggest_outfits", "future": future}

        return self._run_action("request_suggestions", action)

    def _store_suggestions(self, suggestions: OutfitSuggestions) -> None:
        self.suggestions = resolve_suggestions(suggestions, self.catalog.list_items())

    def list_suggestions(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return {"suggestions": [suggestion.to_dict() for suggestion in self.suggestions]}

        return self._run_action("list_suggestions", action)

    def use_suggestion(self, index: int) -> Dict[str, Any]:
        """Replace the canvas with a suggestion laid out in category slots."""

        def action() -> Dict[str, Any]:
            if not 0 <= index < len(self.suggestions):
                raise NotFoundError(f"No suggestion at position {index}")
            suggestion = self.suggestions[index]
            self.canvas.remove_all()
            self.selection.clear()
            self.crop_rect = None

            width, height = self.canvas_size
            stacked = 0
            for suggested in suggestion.items:
                item = self.catalog.find_item(suggested.id)
                if item is None:
                    continue
                slot = slot_for(item.category, self.canvas_size)
                if slot is None:
                    offset = stacked * STACK_OFFSET
                    stacked += 1
                    self.canvas.place(item, (width / 2 + offset, height / 2 + offset))
                    continue
                x, y, slot_width, slot_height = slot
                placed = self.canvas.place(item, (x + slot_width / 2, y + slot_height / 2))
                self.canvas.resize(placed.instance_id, slot_width, slot_height, x, y)
            return self._canvas_payload()

        return self._run_action("use_suggestion", action)

    # Export --------------------------------------------------------------

    def _overlays(self) -> List[export.CanvasOverlay]:
        overlays = [export.CanvasOverlay(rect=placed.bounds) for placed in self.selection.selected_items()]
        if self.selection.marquee_rect is not None:
            overlays.append(export.CanvasOverlay(rect=self.selection.marquee_rect, width=1))
        if self.crop_rect is not None:
            overlays.append(export.CanvasOverlay(rect=self.crop_rect, outline=(59, 130, 246, 255)))
        return overlays

    def export_canvas(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return _export_payload(export.export_canvas(self.canvas.items, self.canvas_size, self._overlays()))

        return self._run_action("export_canvas", action)

    def export_selection(self, rect: Optional[Rect] = None) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            region = rect or self.crop_rect
            if region is None:
                raise InputValidationError(
                    "Draw a selection that covers part of the canvas before exporting.", title="Empty Selection"
                )
            result = export.export_selection(self.canvas.items, self.canvas_size, region, self._overlays())
            return _export_payload(result)

        return self._run_action("export_selection", action)

    def preview(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            return _export_payload(export.render_preview(self.canvas.items, self.canvas_size, self._overlays()))

        return self._run_action("preview", action)

    # Theme ---------------------------------------------------------------

    def theme(self) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            percentage = self.preferences.theme_slider()
            return {"percentage": percentage, "variables": blend_theme(percentage)}

        return self._run_action("theme", action)

    def set_theme(self, percentage: int) -> Dict[str, Any]:
        def action() -> Dict[str, Any]:
            stored = self.preferences.set_theme_slider(percentage)
            return {"percentage": stored, "variables": blend_theme(stored)}

        return self._run_action("set_theme", action)

    # Lifecycle -----------------------------------------------------------

    def drain_notifications(self) -> List[Dict[str, str]]:
        return [notification.to_dict() for notification in self.notifications.drain()]

    def shutdown(self) -> None:
        self.ai_jobs.shutdown()


def _rect_dict(rect: Optional[Rect]) -> Optional[Dict[str, float]]:
    if rect is None:
        return None
    return {"left": rect.left, "top": rect.top, "right": rect.right, "bottom": rect.bottom}


def _export_payload(result: export.ExportResult) -> Dict[str, Any]:
    return {"filename": result.filename, "mime_type": result.mime_type, "data_uri": result.as_data_uri()}


__all__ = ["AI_OPERATIONS", "COMPOSITE_KEY", "SUGGESTIONS_KEY", "WardrobeStudioApp"]
