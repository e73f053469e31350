"""Error taxonomy shared by stores, tools and the app controller."""

from __future__ import annotations


class StudioError(Exception):
    """Base class for failures that end the triggering operation only."""

    kind = "error"
    default_title = "Something went wrong"

    def __init__(self, message: str, title: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.title = title or self.default_title


class InputValidationError(StudioError, ValueError):
    """Missing fields, blank names, bad URLs or out-of-range values."""

    kind = "validation"
    default_title = "Missing Information"


class NotFoundError(StudioError, KeyError):
    """Unknown catalog item, canvas instance or outfit id."""

    kind = "not_found"
    default_title = "Not Found"

    def __str__(self) -> str:
        return self.message


class ImageIngestionError(StudioError):
    """File read failures, URL fetch failures and non-image content."""

    kind = "io"
    default_title = "Image Error"


class StorageError(StudioError):
    """The storage backend refused a write; nothing was changed."""

    kind = "io"
    default_title = "Save Failed"


class AiServiceError(StudioError):
    """The external image service raised or returned no result."""

    kind = "external"
    default_title = "AI Request Failed"

    def __init__(self, operation: str, message: str, title: str | None = None) -> None:
        super().__init__(message, title=title)
        self.operation = operation


class AiRequestInFlightError(StudioError):
    """A request for the same target is still outstanding."""

    kind = "in_flight"
    default_title = "Already Processing"


__all__ = [
    "StudioError",
    "InputValidationError",
    "NotFoundError",
    "ImageIngestionError",
    "StorageError",
    "AiServiceError",
    "AiRequestInFlightError",
]
