"""Periodic progress logging with an estimated finish time."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from time import perf_counter
from typing import Callable, Optional


def format_duration(seconds: float) -> str:
    """Compact duration such as ``1h02m05s`` or ``<1s``."""
    total_seconds = int(round(seconds))
    if total_seconds <= 0:
        return "<1s"
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds_remaining = divmod(remainder, 60)
    if hours:
        return f"{hours}h{minutes:02d}m{seconds_remaining:02d}s"
    if minutes:
        return f"{minutes}m{seconds_remaining:02d}s"
    return f"{seconds_remaining}s"


class ProgressMeter:
    """Log ``completed/total`` roughly every five percent of the work."""

    def __init__(
        self,
        total: int,
        *,
        logger: logging.Logger,
        label: str = "Frames",
        clock: Callable[[], float] = perf_counter,
    ) -> None:
        self.total = max(0, total)
        self.logger = logger
        self.label = label
        self.interval = max(1, self.total // 20)
        self.completed = 0
        self._clock = clock
        self._started: Optional[float] = None

    def eta(self, elapsed: float) -> str:
        if self.completed <= 0 or self.total <= 0 or self.completed > self.total or elapsed <= 0.0:
            return "ETA estimating"
        remaining = max(0.0, elapsed * (self.total - self.completed) / self.completed)
        finish_time = datetime.now() + timedelta(seconds=remaining)
        return f"ETA {format_duration(remaining)} (finish {finish_time.strftime('%H:%M:%S')})"

    def advance(self) -> None:
        if self._started is None:
            self._started = self._clock()
        self.completed += 1
        if self.completed % self.interval != 0 and self.completed != self.total:
            return
        elapsed = self._clock() - self._started
        percent = (self.completed / self.total) * 100.0 if self.total else 100.0
        self.logger.info(
            "%s progress: %s/%s (%0.1f%%, %s)",
            self.label,
            self.completed,
            self.total,
            percent,
            self.eta(elapsed),
        )


__all__ = ["ProgressMeter", "format_duration"]
