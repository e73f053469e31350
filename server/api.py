"""FastAPI server exposing the Wardrobe Studio controller."""

from __future__ import annotations

import os
import threading
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response
from pydantic import BaseModel, Field

from agents.ai_jobs import APPLIED, FAILED
from studio_app.app import WardrobeStudioApp
from studio_app.logging_config import configure_logging
from tools.data_uri import parse_data_uri

configure_logging()

STATUS_CODES = {
    "validation": 400,
    "io": 400,
    "not_found": 404,
    "in_flight": 409,
    "external": 502,
}

router = APIRouter()
_STUDIO_LOCK = threading.Lock()


class NewItemRequest(BaseModel):
    """Payload for adding a photographed item to the wardrobe."""

    name: str
    category: str
    photo_data_uri: str | None = None
    tags: List[str] | str | None = None


class ImportUrlRequest(BaseModel):
    name: str
    category: str
    url: str
    tags: List[str] | str | None = None


class UpdateItemRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    tags: List[str] | str | None = None
    photo_data_uri: str | None = None


class CategoryRequest(BaseModel):
    name: str


class DropRequest(BaseModel):
    item_id: str
    x: float
    y: float


class PointerDownRequest(BaseModel):
    shift: bool = False


class DragRequest(BaseModel):
    dx: float
    dy: float


class ResizeRequest(BaseModel):
    width: float
    height: float
    x: float | None = None
    y: float | None = None


class LayersRequest(BaseModel):
    """Either a full front-to-back order or a single dragged/target pair."""

    order: List[str] | None = None
    dragged_id: str | None = None
    target_id: str | None = None


class RectRequest(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class KeepLayersOrderRequest(BaseModel):
    enabled: bool


class SaveOutfitRequest(BaseModel):
    name: str
    overwrite_id: str | None = None


class RenameOutfitRequest(BaseModel):
    name: str


class CompositeRequest(BaseModel):
    aspect_ratio: str = "1:1"


class ThemeRequest(BaseModel):
    percentage: int = Field(..., ge=0, le=100, description="Theme slider position, 0 light to 100 dark")


def get_studio(request: Request) -> WardrobeStudioApp:
    """Controller bound to the FastAPI app, created on first use."""

    studio = getattr(request.app.state, "studio", None)
    if studio is None:
        with _STUDIO_LOCK:
            studio = getattr(request.app.state, "studio", None)
            if studio is None:
                studio = WardrobeStudioApp()
                request.app.state.studio = studio
    return studio


def _checked(response: Dict[str, Any]) -> Dict[str, Any]:
    if response.get("status") != "ok":
        raise HTTPException(
            status_code=STATUS_CODES.get(response.get("error"), 400),
            detail={key: response.get(key) for key in ("error", "title", "message")},
        )
    return response


def _await_outcome(response: Dict[str, Any]) -> Dict[str, Any]:
    """Block until an AI job settles and translate its outcome."""

    outcome = _checked(response).pop("future").result()
    if outcome.status == FAILED:
        raise HTTPException(
            status_code=502,
            detail={"error": "external", "title": outcome.error.title, "message": outcome.error.message},
        )
    return {**response, "outcome": outcome.status, "applied": outcome.status == APPLIED}


def _download(response: Dict[str, Any]) -> Response:
    payload = _checked(response)
    mime_type, data = parse_data_uri(payload["data_uri"])
    return Response(
        content=data,
        media_type=mime_type,
        headers={"Content-Disposition": f'attachment; filename="{payload["filename"]}"'},
    )


@router.get("/healthz")
async def healthcheck(request: Request) -> dict:
    """Lightweight readiness check."""

    studio = get_studio(request)
    return {
        "status": "ok",
        "service": "wardrobe-studio",
        "environment": studio.config.environment or "local",
        "model": studio.config.image_model,
    }


# Wardrobe ----------------------------------------------------------------


@router.get("/wardrobe")
def list_wardrobe(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.wardrobe())


@router.post("/wardrobe")
def add_item(payload: NewItemRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.add_item(payload.name, payload.category, payload.photo_data_uri, payload.tags))


@router.post("/wardrobe/import-url")
def import_item_from_url(payload: ImportUrlRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    """Fetch an image URL server side and add it as a new item."""

    return _checked(studio.add_item_from_url(payload.name, payload.category, payload.url, payload.tags))


@router.patch("/wardrobe/{item_id}")
def update_item(
    item_id: str, payload: UpdateItemRequest, studio: WardrobeStudioApp = Depends(get_studio)
) -> dict:
    return _checked(
        studio.update_item(
            item_id,
            name=payload.name,
            category=payload.category,
            tags=payload.tags,
            photo_data_uri=payload.photo_data_uri,
        )
    )


@router.delete("/wardrobe/{item_id}")
def delete_item(item_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.delete_item(item_id))


@router.post("/wardrobe/{item_id}/revert")
def revert_item(item_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.revert_item(item_id))


@router.get("/categories")
def list_categories(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return {"status": "ok", "categories": _checked(studio.wardrobe())["categories"]}


@router.post("/categories")
def add_category(payload: CategoryRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.add_category(payload.name))


# Canvas ------------------------------------------------------------------


@router.get("/canvas")
def canvas_state(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.canvas_state())


@router.delete("/canvas")
def clear_canvas(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.clear_canvas())


@router.post("/canvas/drop")
def drop_item(payload: DropRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.drop_item(payload.item_id, payload.x, payload.y))


@router.post("/canvas/drag")
def drag_selection(payload: DragRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.drag_selection(payload.dx, payload.dy))


@router.post("/canvas/layers")
def reorder_layers(payload: LayersRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    if payload.order is not None:
        return _checked(studio.reorder_layers(payload.order))
    if payload.dragged_id and payload.target_id:
        return _checked(studio.move_layer(payload.dragged_id, payload.target_id))
    raise HTTPException(
        status_code=400,
        detail={
            "error": "validation",
            "title": "Invalid Layer Order",
            "message": "Send either 'order' or both 'dragged_id' and 'target_id'.",
        },
    )


@router.post("/canvas/marquee")
def marquee_select(payload: RectRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.select_in_rect(payload.x1, payload.y1, payload.x2, payload.y2))


@router.put("/canvas/keep-layers-order")
def keep_layers_order(
    payload: KeepLayersOrderRequest, studio: WardrobeStudioApp = Depends(get_studio)
) -> dict:
    return _checked(studio.set_keep_layers_order(payload.enabled))


@router.delete("/canvas/{instance_id}")
def remove_from_canvas(instance_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.remove_from_canvas(instance_id))


@router.post("/canvas/{instance_id}/pointer-down")
def pointer_down(
    instance_id: str, payload: PointerDownRequest, studio: WardrobeStudioApp = Depends(get_studio)
) -> dict:
    return _checked(studio.pointer_down(instance_id, shift=payload.shift))


@router.post("/canvas/{instance_id}/resize")
def resize_item(
    instance_id: str, payload: ResizeRequest, studio: WardrobeStudioApp = Depends(get_studio)
) -> dict:
    return _checked(studio.resize_item(instance_id, payload.width, payload.height, payload.x, payload.y))


@router.post("/canvas/{instance_id}/front")
def bring_to_front(instance_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.bring_to_front(instance_id))


@router.post("/canvas/{instance_id}/back")
def send_to_back(instance_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.send_to_back(instance_id))


@router.post("/canvas/{instance_id}/ai/{action}")
def run_ai_action(instance_id: str, action: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    """Run remove / cutout / refine for one instance and wait for the merge."""

    result = _await_outcome(studio.run_ai_action(instance_id, action))
    state = _checked(studio.canvas_state())
    result["item"] = next((item for item in state["items"] if item["instanceId"] == instance_id), None)
    return result


# Outfits -----------------------------------------------------------------


@router.get("/outfits")
def list_outfits(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.list_outfits())


@router.post("/outfits")
def save_outfit(payload: SaveOutfitRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.save_outfit(payload.name, overwrite_id=payload.overwrite_id))


@router.patch("/outfits/{outfit_id}")
def rename_outfit(
    outfit_id: str, payload: RenameOutfitRequest, studio: WardrobeStudioApp = Depends(get_studio)
) -> dict:
    return _checked(studio.rename_outfit(outfit_id, payload.name))


@router.delete("/outfits/{outfit_id}")
def delete_outfit(outfit_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    response = _checked(studio.delete_outfit(outfit_id))
    if not response["deleted"]:
        raise HTTPException(
            status_code=404,
            detail={"error": "not_found", "title": "Not Found", "message": f"No outfit with id {outfit_id}"},
        )
    return response


@router.post("/outfits/{outfit_id}/load")
def load_outfit(outfit_id: str, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.load_outfit(outfit_id))


# Export ------------------------------------------------------------------


@router.get("/export/canvas")
def export_canvas(studio: WardrobeStudioApp = Depends(get_studio)) -> Response:
    return _download(studio.export_canvas())


@router.post("/export/selection")
def export_selection(payload: RectRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> Response:
    _checked(studio.set_crop_rect(payload.x1, payload.y1, payload.x2, payload.y2))
    return _download(studio.export_selection())


@router.post("/export/ai-composite")
def export_ai_composite(payload: CompositeRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> Response:
    """Generate the flat-lay composite and return it as a download."""

    _await_outcome(studio.generate_ai_composite(payload.aspect_ratio))
    return _download(studio.download_ai_composite())


# Suggestions and theme -------------------------------------------------


@router.get("/suggestions")
def list_suggestions(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.list_suggestions())


@router.post("/suggestions")
def request_suggestions(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    _await_outcome(studio.request_suggestions())
    return _checked(studio.list_suggestions())


@router.post("/suggestions/{index}/use")
def use_suggestion(index: int, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.use_suggestion(index))


@router.get("/theme")
def get_theme(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.theme())


@router.put("/theme")
def set_theme(payload: ThemeRequest, studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return _checked(studio.set_theme(payload.percentage))


@router.get("/notifications")
def drain_notifications(studio: WardrobeStudioApp = Depends(get_studio)) -> dict:
    return {"status": "ok", "notifications": studio.drain_notifications()}


def create_app(studio: WardrobeStudioApp | None = None) -> FastAPI:
    """Build the ASGI app, optionally around an existing controller."""

    api = FastAPI(title="Wardrobe Studio", version="0.1.0")
    api.state.studio = studio
    api.include_router(router)
    return api


app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int(os.getenv("PORT", "8080")), reload=False)
