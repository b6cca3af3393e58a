"""Fixed-step output timeline and the cursor that maps ticks to source images.

The cursor walks two monotonic sequences in lockstep: the ordered input
files and the output ticks. For every tick it keeps the most recent source
image whose capture time has been reached (the *active* image) and buffers
the next one (the *lookahead*) until the timeline catches up with it.
Source images that are already behind the tick are skipped over in a single
step, so only the newest past image is ever shown.

If input images are sparser than the output step, the active image is
repeated until its successor's capture time is reached. Long gaps in the
input therefore show up as runs of identical frames.
"""

from __future__ import annotations

import enum
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Tuple

from forest_green.config import DayNightWindow
from forest_green.errors import ConfigurationError
from forest_green.models import OutputTick, SourceImage, TickDecision
from forest_green.timestamps import timestamp_from_path

TimestampParser = Callable[[Path], Tuple[datetime, str]]


def iter_ticks(start: datetime, end: datetime, step: timedelta) -> Iterator[OutputTick]:
    """Yield ticks from ``start`` up to and including ``end``."""
    if step <= timedelta(0):
        raise ValueError("step must be positive")
    index = 0
    current = start
    while current <= end:
        yield OutputTick(index=index, instant=current)
        index += 1
        current = current + step


def count_ticks(start: datetime, end: datetime, step: timedelta) -> int:
    if end < start:
        return 0
    return (end - start) // step + 1


def is_night(moment: time, window: Optional[DayNightWindow]) -> bool:
    """Night predicate; without a window every tick is a day tick."""
    if window is None:
        return False
    return window.is_night(moment)


class CursorState(enum.Enum):
    NO_SOURCE_YET = "no_source_yet"
    SOURCE_ACTIVE = "source_active"
    EXHAUSTED = "exhausted"


class TimelineCursor:
    """Stateful walk over source images driven one output tick at a time."""

    def __init__(
        self,
        paths: Iterable[Path],
        *,
        end_date: datetime,
        night_window: Optional[DayNightWindow] = None,
        parse: TimestampParser = timestamp_from_path,
    ) -> None:
        self._paths = iter(paths)
        self.end_date = end_date
        self.night_window = night_window
        self._parse = parse
        self.state = CursorState.NO_SOURCE_YET
        self.active: Optional[SourceImage] = None
        self.lookahead: Optional[SourceImage] = None
        self.last_instant: Optional[datetime] = None
        self.promotions = 0

    def _pull(self) -> Optional[SourceImage]:
        path = next(self._paths, None)
        if path is None:
            return None
        captured_at, date_label = self._parse(path)
        return SourceImage(path=path, captured_at=captured_at, date_label=date_label)

    def start(self) -> SourceImage:
        """Take the first source image as the reference frame."""
        if self.state is not CursorState.NO_SOURCE_YET:
            assert self.active is not None
            return self.active
        first = self._pull()
        if first is None:
            raise ConfigurationError("No input images found")
        self.active = first
        self.state = CursorState.SOURCE_ACTIVE
        return first

    def _fill_lookahead(self) -> None:
        if self.lookahead is not None or self.state is CursorState.EXHAUSTED:
            return
        self.lookahead = self._pull()
        if self.lookahead is None:
            self.state = CursorState.EXHAUSTED

    def _advance_to(self, instant: datetime) -> None:
        """Promote every buffered source whose capture time has been reached."""
        self._fill_lookahead()
        while self.lookahead is not None and self.lookahead.captured_at <= instant:
            self.active = self.lookahead
            self.lookahead = None
            self.promotions += 1
            self._fill_lookahead()

    def tick(self, tick: OutputTick) -> TickDecision:
        """Resolve which source image represents ``tick`` and whether it is night."""
        if self.last_instant is not None and tick.instant <= self.last_instant:
            raise ValueError(
                f"Ticks must strictly increase: {tick.instant} after {self.last_instant}"
            )
        if self.state is CursorState.NO_SOURCE_YET:
            self.start()
        self.last_instant = tick.instant

        # A lookahead beyond the end date is never promoted, so nothing
        # after it is read.
        self._advance_to(tick.instant)

        assert self.active is not None
        return TickDecision(
            tick=tick,
            source=self.active,
            night=is_night(tick.instant.time(), self.night_window),
        )

    def walk(self, ticks: Iterable[OutputTick]) -> Iterator[TickDecision]:
        for tick in ticks:
            if tick.instant > self.end_date:
                break
            yield self.tick(tick)


__all__ = [
    "CursorState",
    "TimelineCursor",
    "count_ticks",
    "is_night",
    "iter_ticks",
]
