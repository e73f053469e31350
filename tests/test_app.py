"""End-to-end controller tests with in-memory storage and a mock image model."""

from __future__ import annotations

import json
import threading

from agents.image_provider import MockImageProvider
from logic.export import solid_image_data_uri
from memory.local_storage import InMemoryLocalStorage
from studio_app.app import WardrobeStudioApp
from studio_app.config import StudioConfig

TIMEOUT = 5
MASK = solid_image_data_uri(255)


def _studio(provider: MockImageProvider) -> WardrobeStudioApp:
    return WardrobeStudioApp(
        config=StudioConfig(storage_backend="memory"), storage=InMemoryLocalStorage(), provider=provider
    )


def _add(studio: WardrobeStudioApp, photo: str, name: str = "Red Scarf", category: str = "Accessories") -> str:
    result = studio.add_item(name, category, photo)
    assert result["status"] == "ok", result
    return result["item"]["id"]


def test_drop_save_and_gallery(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)

    dropped = studio.drop_item(item_id, 50, 50)["item"]
    assert (dropped["x"], dropped["y"]) == (-50, -50)
    assert (dropped["width"], dropped["height"]) == (200, 200)
    assert dropped["zIndex"] == 1

    saved = studio.save_outfit("Test Look")
    assert saved["status"] == "ok"

    gallery = studio.list_outfits()["outfits"]
    assert len(gallery) == 1
    assert gallery[0]["name"] == "Test Look"
    assert len(gallery[0]["items"]) == 1
    assert gallery[0]["items"][0]["item"]["name"] == "Red Scarf"


def test_errors_come_back_as_status_dicts(studio: WardrobeStudioApp, red_photo: str) -> None:
    missing = studio.add_item("", "Tops", red_photo)
    assert missing == {
        "status": "error",
        "error": "validation",
        "title": "Missing Information",
        "message": "Please fill out name and category.",
    }

    empty = studio.save_outfit("Nothing here")
    assert empty["title"] == "Empty Outfit"
    assert studio.drop_item("ghost", 0, 0)["error"] == "not_found"

    notifications = studio.drain_notifications()
    assert [note["variant"] for note in notifications] == ["destructive"] * 3
    assert studio.drain_notifications() == []


def test_delete_cascades_to_canvas_but_not_gallery(studio: WardrobeStudioApp, red_photo: str, make_photo) -> None:
    scarf = _add(studio, red_photo)
    shirt = _add(studio, make_photo((0, 0, 255)), name="Blue Shirt", category="Tops")
    studio.drop_item(scarf, 100, 100)
    studio.drop_item(scarf, 300, 300)
    studio.drop_item(shirt, 200, 200)
    studio.save_outfit("Before")

    result = studio.delete_item(scarf)

    assert len(result["removed_instances"]) == 2
    canvas = studio.canvas_state()
    assert [placed["item"]["id"] for placed in canvas["items"]] == [shirt]
    outfit = studio.list_outfits()["outfits"][0]
    assert len(outfit["items"]) == 3


def test_edits_propagate_to_canvas_instances(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    studio.drop_item(item_id, 100, 100)
    studio.drop_item(item_id, 200, 200)

    result = studio.update_item(item_id, name="Crimson Scarf", tags="winter, cozy")

    assert result["instances_updated"] == 2
    names = {placed["item"]["name"] for placed in studio.canvas_state()["items"]}
    assert names == {"Crimson Scarf"}
    assert studio.wardrobe()["items"][0]["tags"] == ["winter", "cozy"]


def test_remove_background_merges_into_catalog_and_instances(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    first = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
    studio.drop_item(item_id, 400, 400)

    started = studio.remove_background(first)
    outcome = started["future"].result(TIMEOUT)

    assert outcome.status == "applied"
    catalog_item = studio.wardrobe()["items"][0]
    assert catalog_item["maskDataUri"] == MASK
    assert catalog_item["originalPhotoDataUri"] == red_photo
    assert catalog_item["lastAiAction"] == "remove"
    assert all(placed["item"]["maskDataUri"] == MASK for placed in studio.canvas_state()["items"])
    assert any(note["title"] == "Success!" for note in studio.drain_notifications())


def test_cutout_uses_the_original_photo(provider: MockImageProvider, studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
    studio.remove_background(instance)["future"].result(TIMEOUT)

    studio.create_cutout(instance)["future"].result(TIMEOUT)

    assert provider.calls[-1]["operation"] == "create_cutout"
    assert provider.calls[-1]["images"] == [red_photo]
    assert studio.wardrobe()["items"][0]["lastAiAction"] == "cutout"


def test_refine_requires_a_mask_and_sends_it(provider: MockImageProvider, studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]

    refused = studio.refine_mask(instance)
    assert refused["status"] == "error"
    assert refused["title"] == "Nothing to Refine"

    studio.create_cutout(instance)["future"].result(TIMEOUT)
    provider.responses["refine_mask"] = solid_image_data_uri(200)
    studio.refine_mask(instance)["future"].result(TIMEOUT)

    assert provider.calls[-1]["images"] == [MASK]
    item = studio.wardrobe()["items"][0]
    assert item["maskDataUri"] == solid_image_data_uri(200)
    assert item["lastAiAction"] == "cutout"


def test_revert_after_ai_edit(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
    studio.remove_background(instance)["future"].result(TIMEOUT)

    reverted = studio.revert_item(item_id)["item"]

    assert reverted["photoDataUri"] == red_photo
    assert "maskDataUri" not in reverted
    assert "maskDataUri" not in studio.canvas_state()["items"][0]["item"]


def test_second_request_for_same_instance_is_rejected(red_photo: str) -> None:
    gate = threading.Event()
    studio = _studio(MockImageProvider(gate=gate))
    try:
        item_id = _add(studio, red_photo)
        instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
        other = studio.drop_item(item_id, 300, 300)["item"]["instanceId"]

        first = studio.remove_background(instance)
        busy = studio.create_cutout(instance)
        parallel = studio.create_cutout(other)

        assert busy["error"] == "in_flight"
        assert parallel["status"] == "ok"
        gate.set()
        assert first["future"].result(TIMEOUT).status == "applied"
        assert parallel["future"].result(TIMEOUT).status == "applied"
    finally:
        gate.set()
        studio.shutdown()


def test_results_for_removed_instances_are_discarded(red_photo: str) -> None:
    gate = threading.Event()
    studio = _studio(MockImageProvider(gate=gate))
    try:
        item_id = _add(studio, red_photo)
        instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]

        started = studio.remove_background(instance)
        studio.remove_from_canvas(instance)
        gate.set()

        assert started["future"].result(TIMEOUT).status == "discarded"
        assert "maskDataUri" not in studio.wardrobe()["items"][0]
    finally:
        gate.set()
        studio.shutdown()


def test_failed_ai_calls_leave_state_untouched(red_photo: str) -> None:
    studio = _studio(MockImageProvider({"remove_background": None}))
    try:
        item_id = _add(studio, red_photo)
        instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]

        outcome = studio.remove_background(instance)["future"].result(TIMEOUT)

        assert outcome.status == "failed"
        assert "maskDataUri" not in studio.wardrobe()["items"][0]
        assert studio.drain_notifications()[-1]["variant"] == "destructive"
    finally:
        studio.shutdown()


def test_unknown_ai_action_is_rejected(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
    assert studio.run_ai_action(instance, "sharpen")["title"] == "Unknown Action"


def test_ai_composite_download(provider: MockImageProvider, studio: WardrobeStudioApp, red_photo: str) -> None:
    assert studio.generate_ai_composite("1:1")["title"] == "Empty Canvas"

    item_id = _add(studio, red_photo)
    studio.drop_item(item_id, 100, 100)
    studio.drop_item(item_id, 300, 300)

    assert studio.generate_ai_composite("3:2")["title"] == "Invalid Aspect Ratio"
    assert studio.download_ai_composite()["error"] == "not_found"

    started = studio.generate_ai_composite("9:16")
    assert started["future"].result(TIMEOUT).status == "applied"
    assert len(provider.calls[-1]["images"]) == 1

    download = studio.download_ai_composite()
    assert download["filename"] == "outfit-ai.png"
    assert download["data_uri"] == MASK


def test_layers_selection_and_drag(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    a = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
    b = studio.drop_item(item_id, 400, 100)["item"]["instanceId"]

    studio.pointer_down(a)
    studio.pointer_down(b, shift=True)
    moved = studio.drag_selection(10, 20)["moved"]
    assert sorted((item["x"], item["y"]) for item in moved) == [(10, 20), (310, 20)]

    assert studio.select_in_rect(0, 0, 150, 150)["selected"] == [a]

    state = studio.reorder_layers([a, b])
    assert state["layers"] == [a, b]
    assert studio.reorder_layers([a])["title"] == "Invalid Layer Order"

    studio.set_keep_layers_order(True)
    studio.pointer_down(b)
    assert studio.canvas_state()["layers"] == [a, b]

    resized = studio.resize_item(a, 20, 300)["item"]
    assert (resized["width"], resized["height"]) == (50, 300)


def test_load_outfit_replaces_canvas_without_aliasing(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    instance = studio.drop_item(item_id, 50, 50)["item"]["instanceId"]
    outfit_id = studio.save_outfit("Test Look")["outfit"]["id"]

    studio.clear_canvas()
    loaded = studio.load_outfit(outfit_id)
    assert loaded["name"] == "Test Look"
    assert [item["instanceId"] for item in loaded["items"]] == [instance]

    studio.select_in_rect(-100, -100, 200, 200)
    studio.drag_selection(500, 500)
    assert studio.list_outfits()["outfits"][0]["items"][0]["x"] == -50

    overwritten = studio.save_outfit("Test Look v2", overwrite_id=outfit_id)["outfit"]
    assert overwritten["id"] == outfit_id
    assert len(studio.list_outfits()["outfits"]) == 1


def test_suggestions_are_resolved_and_laid_out(red_photo: str, make_photo) -> None:
    answer = {
        "outfitSuggestions": [
            {
                "description": "Casual Friday",
                "items": [
                    {"name": "blue shirt", "category": "Tops"},
                    {"name": "Wool Hat", "category": "Hats"},
                    {"name": "Gold Watch", "category": "Accessories"},
                ],
            }
        ]
    }
    studio = _studio(MockImageProvider({"suggest_outfits": json.dumps(answer)}))
    try:
        assert studio.request_suggestions()["title"] == "Empty Wardrobe"

        shirt = _add(studio, make_photo((0, 0, 255)), name="Blue Shirt", category="Tops")
        hat = _add(studio, red_photo, name="Wool Hat", category="Hats")

        started = studio.request_suggestions()
        assert started["future"].result(TIMEOUT).status == "applied"

        suggestion = studio.list_suggestions()["suggestions"][0]
        assert suggestion["description"] == "Casual Friday"
        assert [item["id"] for item in suggestion["items"]] == [shirt, hat]
        assert suggestion["unresolved"] == ["Gold Watch"]

        placed = {item["item"]["id"]: item for item in studio.use_suggestion(0)["items"]}
        assert (placed[shirt]["x"], placed[shirt]["y"]) == (0, 0)
        assert (placed[shirt]["width"], placed[shirt]["height"]) == (1200, 720)
        assert (placed[hat]["x"], placed[hat]["y"]) == (500, 500)

        assert studio.use_suggestion(5)["error"] == "not_found"
    finally:
        studio.shutdown()


def test_exports_ignore_selection_chrome(studio: WardrobeStudioApp, red_photo: str) -> None:
    item_id = _add(studio, red_photo)
    instance = studio.drop_item(item_id, 600, 600)["item"]["instanceId"]
    studio.pointer_down(instance)

    exported = studio.export_canvas()
    assert exported["filename"] == "outfit.png"
    assert exported["data_uri"].startswith("data:image/png;base64,")

    assert studio.export_selection()["title"] == "Empty Selection"
    studio.set_crop_rect(500, 500, 700, 700)
    assert studio.export_selection()["filename"] == "outfit-selection.png"
    assert studio.preview()["filename"] == "outfit-preview.png"


def test_theme_round_trip(studio: WardrobeStudioApp) -> None:
    assert studio.theme()["percentage"] == 0
    updated = studio.set_theme(75)
    assert updated["percentage"] == 75
    assert updated["variables"]["--foreground"] == "0 0% 98%"
    assert studio.theme()["percentage"] == 75


def test_categories_and_file_import(studio: WardrobeStudioApp, tmp_path, red_photo: str) -> None:
    added = studio.add_category("Outerwear")
    assert added["categories"][-1] == "Outerwear"
    assert studio.add_category("  ")["title"] == "Missing Category Name"

    photo = tmp_path / "coat.png"
    photo.write_bytes(b"\x89PNG-coat")
    result = studio.add_item_from_file("Raincoat", "Outerwear", str(photo), tags=["rain"])
    assert result["item"]["photoDataUri"].startswith("data:image/png;base64,")

    assert studio.add_item_from_file("", "Outerwear", str(photo))["message"] == "Please fill out name and category."
    assert studio.add_item_from_url("Coat", "Outerwear", "not-a-url")["title"] == "Invalid URL"


def test_storage_failures_keep_memory_and_disk_in_step(failing_storage, red_photo: str) -> None:
    studio = WardrobeStudioApp(
        config=StudioConfig(storage_backend="memory"), storage=failing_storage, provider=MockImageProvider()
    )
    try:
        item_id = _add(studio, red_photo)
        instance = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
        failing_storage.failing = True

        refused = studio.add_item("Sun Hat", "Hats", red_photo)
        assert (refused["error"], refused["title"]) == ("io", "Save Failed")
        assert len(studio.wardrobe()["items"]) == 1
        assert len(json.loads(failing_storage.get_item("wardrobe"))) == 1

        outcome = studio.remove_background(instance)["future"].result(TIMEOUT)
        assert outcome.status == "failed"
        assert outcome.error.title == "Save Failed"
        assert "maskDataUri" not in studio.wardrobe()["items"][0]
        assert all("maskDataUri" not in placed["item"] for placed in studio.canvas_state()["items"])
        assert studio.drain_notifications()[-1]["variant"] == "destructive"

        assert studio.save_outfit("Look")["error"] == "io"
        assert studio.list_outfits()["outfits"] == []
    finally:
        studio.shutdown()


class RefineGatedProvider(MockImageProvider):
    """Mock provider whose mask refinements wait for ``refine_gate``."""

    def __init__(self, responses=None) -> None:
        super().__init__(responses)
        self.refine_gate = threading.Event()

    def generate_image(self, operation, images, prompt):
        if operation == "refine_mask":
            self.refine_gate.wait(TIMEOUT)
        return super().generate_image(operation, images, prompt)


def test_late_refine_does_not_replace_a_newer_mask(red_photo: str) -> None:
    newer_mask = solid_image_data_uri(100)
    provider = RefineGatedProvider({"create_cutout": newer_mask})
    studio = _studio(provider)
    try:
        item_id = _add(studio, red_photo)
        first = studio.drop_item(item_id, 100, 100)["item"]["instanceId"]
        second = studio.drop_item(item_id, 400, 400)["item"]["instanceId"]
        studio.remove_background(first)["future"].result(TIMEOUT)

        refining = studio.refine_mask(first)["future"]
        studio.revert_item(item_id)
        assert studio.create_cutout(second)["future"].result(TIMEOUT).status == "applied"
        provider.refine_gate.set()

        assert refining.result(TIMEOUT).status == "failed"
        item = studio.wardrobe()["items"][0]
        assert item["maskDataUri"] == newer_mask
        assert item["lastAiAction"] == "cutout"
        assert all(placed["item"]["maskDataUri"] == newer_mask for placed in studio.canvas_state()["items"])
    finally:
        provider.refine_gate.set()
        studio.shutdown()
