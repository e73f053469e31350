"""Rasterize the outfit canvas to downloadable images.

Items are painted in ascending ``z_index`` on an opaque background. Photos are
fitted like CSS ``object-fit: cover`` and masks like ``mask-size: cover`` with
a centred position, so exported pixels match what the editor shows.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from PIL import Image, ImageChops, ImageDraw, ImageOps, UnidentifiedImageError

from models.canvas_item import CanvasItem, Rect
from models.clothing_item import ClothingItem
from studio_app.errors import InputValidationError
from tools.data_uri import encode_data_uri, extension_for, parse_data_uri

Color = Tuple[int, int, int, int]
WHITE: Color = (255, 255, 255, 255)


@dataclass(frozen=True)
class CanvasOverlay:
    """Editor chrome drawn over the artwork (selection boxes, marquee, crop box).

    Overlays marked ``exclude_from_export`` are only drawn in previews.
    """

    rect: Rect
    outline: Color = (236, 72, 153, 255)
    width: int = 2
    exclude_from_export: bool = True


@dataclass(frozen=True)
class ExportResult:
    filename: str
    mime_type: str
    data: bytes

    def as_data_uri(self) -> str:
        return encode_data_uri(self.data, self.mime_type)


def decode_image(data_uri: str) -> Image.Image:
    _, payload = parse_data_uri(data_uri)
    try:
        image = Image.open(io.BytesIO(payload))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise InputValidationError("The image data could not be decoded.", title="Image Error") from exc
    return image


def solid_image_data_uri(value: int = 255, size: Tuple[int, int] = (8, 8)) -> str:
    """A small grayscale PNG, white by default (a keep-everything mask)."""

    buffer = io.BytesIO()
    Image.new("L", size, value).save(buffer, format="PNG")
    return encode_data_uri(buffer.getvalue(), "image/png")


def apply_luminance_mask(photo: Image.Image, mask: Image.Image) -> Image.Image:
    """Multiply the mask's luminance into the photo's alpha channel."""

    rgba = photo.convert("RGBA")
    luminance = ImageOps.fit(mask.convert("L"), rgba.size, method=Image.Resampling.LANCZOS)
    alpha = ImageChops.multiply(rgba.getchannel("A"), luminance)
    rgba.putalpha(alpha)
    return rgba


def render_item(item: CanvasItem) -> Optional[Image.Image]:
    """The instance's pixels at its canvas size, or ``None`` when degenerate."""

    size = (int(round(item.width)), int(round(item.height)))
    if size[0] <= 0 or size[1] <= 0:
        return None
    photo = ImageOps.fit(
        decode_image(item.item.photo_data_uri).convert("RGBA"), size, method=Image.Resampling.LANCZOS
    )
    if item.item.mask_data_uri:
        photo = apply_luminance_mask(photo, decode_image(item.item.mask_data_uri))
    return photo


def visible_photo_data_uri(item: ClothingItem) -> str:
    """The item as the canvas shows it, with any mask applied as transparency."""

    if not item.mask_data_uri:
        return item.photo_data_uri
    photo = apply_luminance_mask(decode_image(item.photo_data_uri), decode_image(item.mask_data_uri))
    buffer = io.BytesIO()
    photo.save(buffer, format="PNG")
    return encode_data_uri(buffer.getvalue(), "image/png")


def _composite_clipped(canvas: Image.Image, tile: Image.Image, x: int, y: int) -> None:
    left, top = max(x, 0), max(y, 0)
    right = min(x + tile.width, canvas.width)
    bottom = min(y + tile.height, canvas.height)
    if right <= left or bottom <= top:
        return
    source = (left - x, top - y, right - x, bottom - y)
    canvas.alpha_composite(tile, dest=(left, top), source=source)


def rasterize(
    items: Iterable[CanvasItem],
    size: Tuple[int, int],
    overlays: Sequence[CanvasOverlay] = (),
    *,
    for_export: bool = True,
    background: Color = WHITE,
) -> Image.Image:
    """Paint ``items`` bottom-up; overlays excluded from export are skipped when exporting."""

    canvas = Image.new("RGBA", size, background)
    for item in sorted(items, key=lambda placed: placed.z_index):
        tile = render_item(item)
        if tile is not None:
            _composite_clipped(canvas, tile, int(round(item.x)), int(round(item.y)))

    draw = ImageDraw.Draw(canvas)
    for overlay in overlays:
        if for_export and overlay.exclude_from_export:
            continue
        rect = overlay.rect.normalized()
        draw.rectangle(
            (rect.left, rect.top, rect.right, rect.bottom), outline=overlay.outline, width=overlay.width
        )
    return canvas


def crop_region(image: Image.Image, rect: Rect) -> Image.Image:
    """Crop in image space; canvas and image share one unscaled coordinate system."""

    bounded = rect.normalized().clamp_to(image.width, image.height)
    box = tuple(int(round(value)) for value in (bounded.left, bounded.top, bounded.right, bounded.bottom))
    if box[2] <= box[0] or box[3] <= box[1]:
        raise InputValidationError(
            "Draw a selection that covers part of the canvas before exporting.", title="Empty Selection"
        )
    return image.crop(box)


def to_png(image: Image.Image, filename: str) -> ExportResult:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return ExportResult(filename=filename, mime_type="image/png", data=buffer.getvalue())


def export_canvas(
    items: Iterable[CanvasItem], size: Tuple[int, int], overlays: Sequence[CanvasOverlay] = ()
) -> ExportResult:
    return to_png(rasterize(items, size, overlays), "outfit.png")


def export_selection(
    items: Iterable[CanvasItem],
    size: Tuple[int, int],
    rect: Rect,
    overlays: Sequence[CanvasOverlay] = (),
) -> ExportResult:
    full = rasterize(items, size, overlays)
    return to_png(crop_region(full, rect), "outfit-selection.png")


def render_preview(
    items: Iterable[CanvasItem], size: Tuple[int, int], overlays: Sequence[CanvasOverlay] = ()
) -> ExportResult:
    return to_png(rasterize(items, size, overlays, for_export=False), "outfit-preview.png")


def data_uri_download(data_uri: str, stem: str) -> ExportResult:
    """Wrap an already-encoded image (e.g. an AI composite) as a download."""

    mime_type, payload = parse_data_uri(data_uri)
    return ExportResult(filename=f"{stem}.{extension_for(mime_type)}", mime_type=mime_type, data=payload)


__all__ = [
    "CanvasOverlay",
    "ExportResult",
    "apply_luminance_mask",
    "crop_region",
    "data_uri_download",
    "decode_image",
    "export_canvas",
    "export_selection",
    "rasterize",
    "render_item",
    "render_preview",
    "solid_image_data_uri",
    "to_png",
    "visible_photo_data_uri",
]
