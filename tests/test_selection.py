"""Click, shift-click, marquee and group-drag selection tests."""

from __future__ import annotations

import pytest

from logic.canvas import CanvasModel
from logic.selection import SelectionEngine
from models.canvas_item import CanvasItem
from models.clothing_item import ClothingItem


@pytest.fixture()
def canvas(red_photo: str) -> CanvasModel:
    """Three 100x100 instances laid out on a row, 50px apart."""

    model = CanvasModel()
    item = ClothingItem(id="1", name="Red Scarf", category="Accessories", photo_data_uri=red_photo)
    model.load(
        [
            CanvasItem("a", item, x=0, y=0, width=100, height=100, z_index=1),
            CanvasItem("b", item, x=150, y=0, width=100, height=100, z_index=2),
            CanvasItem("c", item, x=300, y=0, width=100, height=100, z_index=3),
        ]
    )
    return model


@pytest.fixture()
def engine(canvas: CanvasModel) -> SelectionEngine:
    return SelectionEngine(canvas)


def test_plain_press_replaces_the_selection(engine: SelectionEngine) -> None:
    engine.pointer_down_on_item("a")
    assert engine.pointer_down_on_item("b") == {"b"}


def test_shift_press_toggles_membership(engine: SelectionEngine) -> None:
    engine.pointer_down_on_item("a")
    assert engine.pointer_down_on_item("b", shift=True) == {"a", "b"}
    assert engine.pointer_down_on_item("a", shift=True) == {"b"}


def test_press_on_selected_item_keeps_the_group(engine: SelectionEngine) -> None:
    engine.select_only(["a", "b"])
    assert engine.pointer_down_on_item("b") == {"a", "b"}


def test_press_brings_item_to_front_unless_layers_are_locked(engine: SelectionEngine, canvas: CanvasModel) -> None:
    engine.pointer_down_on_item("a")
    assert canvas.layers()[0].instance_id == "a"

    engine.keep_layers_order = True
    engine.pointer_down_on_item("b")
    assert canvas.layers()[0].instance_id == "a"


def test_marquee_selects_exactly_the_overlapping_items(engine: SelectionEngine) -> None:
    engine.pointer_down_on_item("c")

    selected = engine.select_in_rect((50, 50), (200, 60))

    assert selected == {"a", "b"}


def test_marquee_works_when_dragged_up_and_left(engine: SelectionEngine) -> None:
    assert engine.select_in_rect((350, 90), (260, 10)) == {"c"}


def test_marquee_touching_only_an_edge_selects_nothing(engine: SelectionEngine) -> None:
    assert engine.select_in_rect((100, 0), (150, 100)) == set()


def test_empty_marquee_clears_the_selection(engine: SelectionEngine) -> None:
    engine.select_only(["a"])
    assert engine.select_in_rect((120, 200), (130, 300)) == set()


def test_marquee_rect_tracks_the_gesture(engine: SelectionEngine) -> None:
    assert engine.update_marquee((5, 5)) is None

    engine.begin_marquee((10, 10))
    rect = engine.update_marquee((0, 40))
    assert (rect.left, rect.top, rect.right, rect.bottom) == (0, 10, 10, 40)

    engine.end_marquee()
    assert engine.marquee_rect is None


def test_group_drag_moves_every_selected_item_equally(engine: SelectionEngine, canvas: CanvasModel) -> None:
    engine.select_only(["a", "c"])
    before = {item.instance_id: (item.x, item.y) for item in canvas.items}

    engine.drag_selection((15, -5))

    after = {item.instance_id: (item.x, item.y) for item in canvas.items}
    assert after["a"] == (before["a"][0] + 15, before["a"][1] - 5)
    assert after["c"] == (before["c"][0] + 15, before["c"][1] - 5)
    assert after["b"] == before["b"]


def test_removed_items_leave_the_selection(engine: SelectionEngine, canvas: CanvasModel) -> None:
    engine.select_only(["a", "b"])
    canvas.remove("a")
    assert engine.selected_ids == {"b"}
    assert [item.instance_id for item in engine.selected_items()] == ["b"]
