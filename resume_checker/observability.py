"""Logging setup and per-request stage tracking for resume checks."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

LOGGER_NAME = "resume_checker"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


@dataclass
class StageEvent:
    """A single pipeline stage in one resume check."""

    timestamp: datetime
    stage: str  # "extract", "evaluate", "normalize"
    success: bool
    duration_ms: float
    data: Dict[str, Any]


class CheckObserver:
    """
    Records stage timings for one resume check.

    One observer per request; nothing is shared between requests.
    """

    def __init__(self, request_id: Optional[str] = None):
        self.events: List[StageEvent] = []
        self.request_id = request_id
        self.logger = logging.getLogger(f"{LOGGER_NAME}.check")

    def _prefix(self) -> str:
        return f"[{self.request_id}] " if self.request_id else ""

    @contextmanager
    def stage(self, name: str, **data: Any) -> Iterator[Dict[str, Any]]:
        """Time a stage; callers may add entries to the yielded dict."""
        start = time.perf_counter()
        details: Dict[str, Any] = dict(data)
        success = False
        try:
            yield details
            success = True
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            self.events.append(
                StageEvent(
                    timestamp=datetime.now(),
                    stage=name,
                    success=success,
                    duration_ms=duration_ms,
                    data=details,
                )
            )
            status = "ok" if success else "failed"
            self.logger.info(f"{self._prefix()}stage={name} status={status} duration_ms={duration_ms:.2f}")

    def log_error(self, error_type: str, message: str) -> None:
        self.logger.error(f"{self._prefix()}Error ({error_type}): {message}")

    def get_stats(self) -> Dict[str, Any]:
        """Aggregate statistics for this check."""
        return {
            "stages": [e.stage for e in self.events],
            "failed_stages": [e.stage for e in self.events if not e.success],
            "total_duration_ms": sum(e.duration_ms for e in self.events),
        }

    def log_summary(self) -> None:
        stats = self.get_stats()
        self.logger.info(
            f"{self._prefix()}check finished stages={','.join(stats['stages']) or '-'} "
            f"failed={','.join(stats['failed_stages']) or '-'} "
            f"total_ms={stats['total_duration_ms']:.2f}"
        )
