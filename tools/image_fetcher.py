"""Fetch remote images and re-encode them as data URIs."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from studio_app.errors import ImageIngestionError, InputValidationError
from tools.data_uri import encode_data_uri
from tools.observability import instrument_operation

logger = logging.getLogger(__name__)


class InvalidImageURLError(InputValidationError):
    """Raised when the provided URL is not a valid HTTP or HTTPS URL."""

    default_title = "Invalid URL"


class ImageFetchError(ImageIngestionError):
    """Raised when the image cannot be retrieved or is not an image."""


def _validate_url(url: str) -> None:
    parsed = urlparse(url or "")
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InvalidImageURLError("Invalid URL provided.")


@instrument_operation("fetch_image")
def fetch_image_as_data_uri(url: str, timeout: Optional[float] = 10.0) -> str:
    """Download an image and return it as ``data:<mimetype>;base64,<data>``.

    Args:
        url: HTTP or HTTPS URL pointing to an image.
        timeout: Optional network timeout in seconds.

    Raises:
        InvalidImageURLError: If the URL is not HTTP/HTTPS or missing a host.
        ImageFetchError: For network issues, non-2xx responses or a
            ``Content-Type`` that is not ``image/*``.
    """

    _validate_url(url)
    logger.info("Fetching image", extra={"url": url})
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Network error fetching image", extra={"url": url, "error": str(exc)})
        raise ImageFetchError("Could not fetch the image. Please check the URL and try again.") from exc

    if not 200 <= response.status_code < 300:
        logger.warning(
            "Non-success status when fetching image",
            extra={"url": url, "status_code": response.status_code},
        )
        raise ImageFetchError(f"Failed to fetch image. Status: {response.status_code} {response.reason or ''}".strip())

    content_type = (response.headers.get("content-type") or "").strip()
    media_type = content_type.split(";", 1)[0].strip().lower()
    if not media_type.startswith("image/"):
        logger.warning("URL did not return an image", extra={"url": url, "content_type": content_type})
        raise ImageFetchError("The provided URL does not point to a valid image file.")

    logger.debug(
        "Fetched image successfully",
        extra={"url": url, "content_type": media_type, "length": len(response.content)},
    )
    return encode_data_uri(response.content, media_type)


__all__ = [
    "ImageFetchError",
    "InvalidImageURLError",
    "fetch_image_as_data_uri",
]
