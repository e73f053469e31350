"""Per-target tracking of outstanding AI requests.

Each request is a future keyed by its target (a canvas instance id, or a
reserved key for whole-canvas work). A target can have one request in flight;
different targets run side by side. Results are applied under the caller's
state lock only if the target still exists when the answer arrives.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, FrozenSet, Generic, Optional, Set, TypeVar

from studio_app.errors import AiRequestInFlightError, AiServiceError, StudioError
from studio_app.logging_config import log_event

LOGGER = logging.getLogger(__name__)
T = TypeVar("T")

APPLIED = "applied"
DISCARDED = "discarded"
FAILED = "failed"


@dataclass(frozen=True)
class AiJobOutcome(Generic[T]):
    key: str
    operation: str
    status: str
    result: Optional[T] = None
    error: Optional[AiServiceError] = None

    @property
    def ok(self) -> bool:
        return self.status == APPLIED


class AiJobTracker:
    """Runs AI calls on an executor and keeps the in-flight set as explicit state."""

    def __init__(
        self,
        executor: Executor | None = None,
        max_workers: int = 4,
        state_lock: threading.RLock | None = None,
    ) -> None:
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ai-job")
        self._owns_executor = executor is None
        self._state_lock = state_lock or threading.RLock()
        self._in_flight: Set[str] = set()
        self._guard = threading.Lock()

    def in_flight(self) -> FrozenSet[str]:
        with self._guard:
            return frozenset(self._in_flight)

    def is_in_flight(self, key: str) -> bool:
        with self._guard:
            return key in self._in_flight

    def submit(
        self,
        key: str,
        operation: str,
        call: Callable[[], Optional[T]],
        apply: Callable[[T], None],
        still_valid: Callable[[], bool] = lambda: True,
        on_done: Callable[["AiJobOutcome[T]"], None] | None = None,
    ) -> "Future[AiJobOutcome[T]]":
        """Start ``call`` for ``key``; raises if ``key`` already has a request in flight."""

        with self._guard:
            if key in self._in_flight:
                raise AiRequestInFlightError(
                    f"{_label(operation)} is already running for this item."
                )
            self._in_flight.add(key)

        def job() -> AiJobOutcome[T]:
            try:
                outcome = self._run(key, operation, call, apply, still_valid)
            finally:
                with self._guard:
                    self._in_flight.discard(key)
            if on_done is not None:
                try:
                    on_done(outcome)
                except Exception:  # noqa: BLE001
                    log_event(
                        LOGGER, logging.ERROR, "ai_job_callback_error", key=key, operation=operation, exc_info=True
                    )
            return outcome

        try:
            return self._executor.submit(job)
        except RuntimeError:
            with self._guard:
                self._in_flight.discard(key)
            raise

    def _run(
        self,
        key: str,
        operation: str,
        call: Callable[[], Optional[T]],
        apply: Callable[[T], None],
        still_valid: Callable[[], bool],
    ) -> AiJobOutcome[T]:
        try:
            result = call()
        except AiServiceError as exc:
            return self._failed(key, operation, exc)
        except StudioError as exc:
            return self._failed(key, operation, AiServiceError(operation, exc.message))
        except Exception as exc:  # noqa: BLE001
            log_event(LOGGER, logging.ERROR, "ai_job_error", key=key, operation=operation, exc_info=True)
            return self._failed(key, operation, AiServiceError(operation, f"{_label(operation)} failed: {exc}"))

        if not result:
            return self._failed(
                key, operation, AiServiceError(operation, f"{_label(operation)} did not return a result.")
            )

        with self._state_lock:
            if not still_valid():
                log_event(LOGGER, logging.INFO, "ai_job_discarded", key=key, operation=operation)
                return AiJobOutcome(key=key, operation=operation, status=DISCARDED, result=result)
            try:
                apply(result)
            except StudioError as exc:
                return self._failed(key, operation, AiServiceError(operation, exc.message, title=exc.title))
            except Exception as exc:  # noqa: BLE001
                log_event(LOGGER, logging.ERROR, "ai_job_apply_error", key=key, operation=operation, exc_info=True)
                return self._failed(
                    key, operation, AiServiceError(operation, f"{_label(operation)} could not be applied: {exc}")
                )
        log_event(LOGGER, logging.INFO, "ai_job_applied", key=key, operation=operation)
        return AiJobOutcome(key=key, operation=operation, status=APPLIED, result=result)

    def _failed(self, key: str, operation: str, error: AiServiceError) -> AiJobOutcome:
        log_event(
            LOGGER, logging.WARNING, "ai_job_failed", key=key, operation=operation, details=error.message
        )
        return AiJobOutcome(key=key, operation=operation, status=FAILED, error=error)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)


def _label(operation: str) -> str:
    return operation.replace("_", " ").capitalize()


__all__ = ["APPLIED", "DISCARDED", "FAILED", "AiJobOutcome", "AiJobTracker"]
