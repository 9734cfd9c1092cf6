"""Observation channel for non-fatal cache failures."""

import logging
from collections import Counter

from app.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)


class LoggingCacheFailureObserver:
    """Default ICacheFailureObserver: log a warning, count it, and tag the current trace span.

    Failures never change control flow; this only makes them visible.
    Counts are per operation (get, set, delete, decode) since process start.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger
        self._counts: Counter[str] = Counter()

    @property
    def failure_counts(self) -> dict[str, int]:
        return dict(self._counts)

    def cache_failed(self, operation: str, key: str, error: BaseException) -> None:
        self._counts[operation] += 1
        self._logger.warning(
            "Cache %s degraded for key %s: %s: %s",
            operation,
            key,
            type(error).__name__,
            error,
        )
        add_span_event(
            "cache.degraded",
            {
                "cache.operation": operation,
                "cache.key": key,
                "error.type": type(error).__name__,
            },
        )
