"""Theme slider persistence and palette blending tests."""

from __future__ import annotations

from logic.theme import DARK_THEME, LIGHT_THEME, blend_theme
from memory.local_storage import InMemoryLocalStorage
from tools.preferences_store import THEME_SLIDER_KEY, PreferencesStore


def test_slider_ends_match_the_palettes() -> None:
    light = blend_theme(0)
    dark = blend_theme(100)

    assert set(light) == {f"--{key}" for key in LIGHT_THEME}
    assert light["--background"] == "0 0% 98%"
    assert light["--foreground"] == "240 10% 3.9%"
    assert dark["--background"] == "0 0% 9%"
    assert dark["--foreground"] == "0 0% 98%"
    assert len(DARK_THEME) == len(LIGHT_THEME)


def test_foreground_switches_at_twenty_percent() -> None:
    assert blend_theme(19)["--foreground"] == "240 10% 3.9%"
    assert blend_theme(20)["--foreground"] == "0 0% 98%"


def test_surfaces_blend_linearly() -> None:
    assert blend_theme(50)["--background"] == "0 0% 53.5%"
    assert blend_theme(50)["--primary"] == "330 60% 55%"


def test_out_of_range_positions_are_clamped() -> None:
    assert blend_theme(-5) == blend_theme(0)
    assert blend_theme(250) == blend_theme(100)


def test_theme_slider_persists_and_clamps() -> None:
    storage = InMemoryLocalStorage()
    preferences = PreferencesStore(storage)

    assert preferences.theme_slider() == 0
    assert preferences.set_theme_slider(140) == 100
    assert storage.get_item(THEME_SLIDER_KEY) == "100"
    assert PreferencesStore(storage).theme_slider() == 100


def test_corrupt_theme_slider_reads_as_light() -> None:
    storage = InMemoryLocalStorage({THEME_SLIDER_KEY: "dark please"})
    assert PreferencesStore(storage).theme_slider() == 0
