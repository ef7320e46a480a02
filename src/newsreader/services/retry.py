"""Bounded exponential-backoff retry for upstream calls."""

from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

T = TypeVar("T")

__all__ = ["call_with_retry", "backoff_delay", "DEFAULT_MAX_ATTEMPTS"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0
MAX_DELAY_SECONDS = 4.0


def backoff_delay(attempt: int) -> float:
    """Return the pause in seconds after the zero-based ``attempt`` failed."""

    return min(BASE_DELAY_SECONDS * 2**attempt, MAX_DELAY_SECONDS)


def call_with_retry(
    operation: Callable[[], T],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Invoke ``operation`` until it succeeds or ``max_attempts`` calls have failed.

    Every failure, including the last one, is followed by a pause of
    :func:`backoff_delay` seconds (1s, 2s, 4s, 4s, ...). All exceptions are
    retried alike; once the attempts are exhausted the last exception is
    re-raised unchanged.
    """

    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_exc: Exception | None = None
    for attempt in range(max_attempts):
        try:
            return operation()
        except Exception as exc:  # noqa: BLE001 - every failure kind is retried
            last_exc = exc
            delay = backoff_delay(attempt)
            logger.warning(
                "Upstream call failed (attempt %s/%s): %s; waiting %.1fs",
                attempt + 1,
                max_attempts,
                exc,
                delay,
            )
            sleep(delay)

    assert last_exc is not None
    raise last_exc
