"""Outfit gallery persistence."""
from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional

from memory.local_storage import LocalStorage, read_json, write_json
from models.canvas_item import CanvasItem
from models.identifiers import TimestampIdGenerator
from models.outfit import Outfit
from studio_app.errors import InputValidationError, NotFoundError
from tools.observability import instrument_operation

LOGGER = logging.getLogger(__name__)

OUTFITS_KEY = "outfits"


def _require_outfit_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InputValidationError(
            "Please enter a name for your outfit before saving.", title="Outfit name is required"
        )
    return cleaned


class OutfitStore:
    """Named canvas snapshots, most recent first.

    Outfits embed full copies of their canvas items, so they stay valid after
    the source catalog item is deleted or edited.
    """

    def __init__(self, storage: LocalStorage, id_generator: TimestampIdGenerator | None = None) -> None:
        self.storage = storage
        self.id_generator = id_generator or TimestampIdGenerator()

    def list(self) -> List[Outfit]:
        """Read the gallery, skipping entries that no longer parse."""

        raw = read_json(self.storage, OUTFITS_KEY, [])
        if not isinstance(raw, list):
            LOGGER.warning("Stored outfits are not a list; ignoring them")
            return []
        outfits: List[Outfit] = []
        for index, entry in enumerate(raw):
            try:
                outfits.append(Outfit.from_dict(entry))
            except (TypeError, ValueError) as exc:
                LOGGER.warning(
                    "Dropping malformed outfit entry",
                    extra={"index": index, "error": str(exc)},
                )
        return outfits

    def _write(self, outfits: List[Outfit]) -> None:
        write_json(self.storage, OUTFITS_KEY, [outfit.to_dict() for outfit in outfits])

    def get(self, outfit_id: str) -> Outfit:
        for outfit in self.list():
            if outfit.id == outfit_id:
                return outfit
        raise NotFoundError(f"No outfit with id {outfit_id}")

    @instrument_operation("save_outfit")
    def save(
        self,
        name: str,
        items: Iterable[CanvasItem],
        overwrite_id: Optional[str] = None,
    ) -> Outfit:
        """Create a new outfit or overwrite ``overwrite_id`` in place."""

        cleaned_name = _require_outfit_name(name)
        snapshot = copy.deepcopy(list(items))
        if not snapshot:
            raise InputValidationError(
                "Add some items to the canvas before saving.", title="Empty Outfit"
            )

        outfits = self.list()
        if overwrite_id:
            for index, existing in enumerate(outfits):
                if existing.id == overwrite_id:
                    outfits[index] = Outfit(id=existing.id, name=cleaned_name, items=snapshot)
                    self._write(outfits)
                    return outfits[index]

        outfit = Outfit(id=self.id_generator.next_id(), name=cleaned_name, items=snapshot)
        self._write([outfit, *outfits])
        return outfit

    def load(self, outfit_id: str) -> List[CanvasItem]:
        """Copies of the stored items, safe to edit on the live canvas."""

        return copy.deepcopy(self.get(outfit_id).items)

    @instrument_operation("rename_outfit")
    def rename(self, outfit_id: str, name: str) -> Outfit:
        cleaned_name = _require_outfit_name(name)
        outfits = self.list()
        for outfit in outfits:
            if outfit.id == outfit_id:
                outfit.name = cleaned_name
                self._write(outfits)
                return outfit
        raise NotFoundError(f"No outfit with id {outfit_id}")

    @instrument_operation("delete_outfit")
    def delete(self, outfit_id: str) -> bool:
        outfits = self.list()
        remaining = [outfit for outfit in outfits if outfit.id != outfit_id]
        if len(remaining) == len(outfits):
            return False
        self._write(remaining)
        return True


__all__ = ["OUTFITS_KEY", "OutfitStore"]
