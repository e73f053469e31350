"""Light/dark theme blending driven by the theme slider.

Each token is an HSL triple. Surface tokens are interpolated linearly between
the light and dark palettes; foreground tokens flip to the dark palette once the
slider passes 20% so text keeps its contrast.
"""

from typing import Dict, Tuple

HSL = Tuple[float, float, float]

FOREGROUND_SWITCH = 0.2

LIGHT_THEME: Dict[str, HSL] = {
    "background": (0, 0, 98),
    "foreground": (240, 10, 3.9),
    "card": (0, 0, 100),
    "cardForeground": (240, 10, 3.9),
    "popover": (0, 0, 100),
    "popoverForeground": (240, 10, 3.9),
    "primary": (330, 60, 55),
    "primaryForeground": (0, 0, 98),
    "secondary": (240, 4.8, 95.9),
    "secondaryForeground": (240, 5.9, 10),
    "muted": (240, 4.8, 95.9),
    "mutedForeground": (240, 3.8, 46.1),
    "accent": (240, 4.8, 95.9),
    "accentForeground": (240, 5.9, 10),
    "destructive": (0, 84.2, 60.2),
    "destructiveForeground": (0, 0, 98),
    "border": (240, 5.9, 90),
    "input": (240, 5.9, 90),
    "ring": (330, 60, 55),
}

DARK_THEME: Dict[str, HSL] = {
    "background": (0, 0, 9),
    "foreground": (0, 0, 98),
    "card": (0, 0, 12),
    "cardForeground": (0, 0, 98),
    "popover": (0, 0, 12),
    "popoverForeground": (0, 0, 98),
    "primary": (330, 60, 55),
    "primaryForeground": (0, 0, 98),
    "secondary": (0, 0, 15),
    "secondaryForeground": (0, 0, 98),
    "muted": (0, 0, 15),
    "mutedForeground": (0, 0, 65),
    "accent": (0, 0, 20),
    "accentForeground": (0, 0, 98),
    "destructive": (0, 72, 51),
    "destructiveForeground": (0, 0, 98),
    "border": (0, 0, 20),
    "input": (0, 0, 20),
    "ring": (330, 60, 55),
}


def _lerp(start: float, end: float, t: float) -> float:
    return start * (1 - t) + end * t


def _format(value: float) -> str:
    rounded = round(value, 2)
    return str(int(rounded)) if rounded == int(rounded) else str(rounded)


def _css(h: float, s: float, l: float) -> str:  # noqa: E741
    return f"{_format(h)} {_format(s)}% {_format(l)}%"


def blend_theme(percentage: int) -> Dict[str, str]:
    """Return ``--token`` CSS custom properties for a slider position 0-100."""

    t = max(0, min(100, percentage)) / 100
    variables: Dict[str, str] = {}
    for key, light in LIGHT_THEME.items():
        dark = DARK_THEME[key]
        if "foreground" in key.lower():
            chosen = dark if t >= FOREGROUND_SWITCH else light
            variables[f"--{key}"] = _css(*chosen)
        else:
            variables[f"--{key}"] = _css(*(_lerp(a, b, t) for a, b in zip(light, dark)))
    return variables


__all__ = ["DARK_THEME", "LIGHT_THEME", "blend_theme"]
