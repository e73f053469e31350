"""Observability helpers for instrumenting store, ingestion and AI calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from studio_app.errors import StudioError
from studio_app.logging_config import (
    ensure_correlation_id,
    get_logger,
    log_event,
    redact_for_log,
)

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _argument_summary(args: tuple, kwargs: dict, max_keys: int = 6) -> dict:
    """Call shape for the log: positional count plus the first few keyword values."""

    summary: dict = {"positional": len(args), **dict(list(kwargs.items())[:max_keys])}
    if len(kwargs) > max_keys:
        summary["truncated"] = True
    return redact_for_log(summary)


def instrument_operation(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a callable to emit ``operation_started/_completed/_failed`` events.

    Expected failures (:class:`StudioError`) are logged as warnings; anything
    else is logged with its traceback. Both are re-raised unchanged.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()

            log_event(
                LOGGER,
                logging.DEBUG,
                "operation_started",
                operation=operation,
                correlation_id=correlation_id,
                arguments=_argument_summary(args, kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except StudioError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "operation_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    error_kind=exc.kind,
                    details=exc.message,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )
                raise
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "operation_completed",
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
