"""Helpers for base64 ``data:`` URIs carrying images."""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from pathlib import Path
from typing import Tuple

from studio_app.errors import ImageIngestionError, InputValidationError

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+\-]+/[\w.+\-]+)(?P<params>(;[^;,]+)*);base64,(?P<data>.*)$", re.DOTALL)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """Return ``(mime_type, payload)`` for a base64 data URI."""

    match = _DATA_URI.match((uri or "").strip())
    if not match:
        raise InputValidationError(
            "Expected a data URI of the form 'data:<mimetype>;base64,<data>'.", title="Invalid Image Data"
        )
    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InputValidationError(f"Image data is not valid base64: {exc}", title="Invalid Image Data") from exc
    return match.group("mime").lower(), payload


def is_image_data_uri(uri: object) -> bool:
    if not isinstance(uri, str):
        return False
    match = _DATA_URI.match(uri.strip())
    return bool(match) and match.group("mime").lower().startswith("image/")


def extension_for(mime_type: str) -> str:
    if mime_type == "image/jpeg":
        return "jpg"
    guessed = mimetypes.guess_extension(mime_type) or ".png"
    return guessed.lstrip(".")


def file_to_data_uri(path: str | Path) -> str:
    """Read an image file from disk into a data URI."""

    file_path = Path(path)
    mime_type, _ = mimetypes.guess_type(file_path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ImageIngestionError(
            f"{file_path.name} is not a supported image file.", title="File Read Error"
        )
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise ImageIngestionError(
            "There was an error processing your photo.", title="File Read Error"
        ) from exc
    return encode_data_uri(data, mime_type)


__all__ = [
    "encode_data_uri",
    "extension_for",
    "file_to_data_uri",
    "is_image_data_uri",
    "parse_data_uri",
]
