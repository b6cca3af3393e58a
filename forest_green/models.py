"""Data models shared by the frame synthesis pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

RgbColor = Tuple[int, int, int]


@dataclass(frozen=True)
class Roi:
    """Rectangular region of interest in source-image pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass(frozen=True)
class SourceImage:
    """One timestamped photograph from the input directory."""

    path: Path
    captured_at: datetime
    date_label: str


@dataclass(frozen=True)
class OutputTick:
    """A single instant on the fixed-step output timeline."""

    index: int
    instant: datetime


@dataclass(frozen=True)
class Caption:
    """Caption text anchored at a pixel position on the output canvas."""

    text: str
    position: Tuple[int, int]


@dataclass
class Frame:
    """Synthesized output frame with the captions drawn on it."""

    pixels: np.ndarray
    captions: Tuple[Caption, ...]
    night: bool


@dataclass(frozen=True)
class TickDecision:
    """Outcome of advancing the timeline cursor to one output tick."""

    tick: OutputTick
    source: SourceImage
    night: bool


@dataclass
class RunSummary:
    """Counters collected while rendering a full timeline."""

    frames_written: int = 0
    day_frames: int = 0
    night_frames: int = 0
    sources_used: int = 0
    first_tick: Optional[datetime] = None
    last_tick: Optional[datetime] = None

    def record(self, decision: TickDecision) -> None:
        if self.first_tick is None:
            self.first_tick = decision.tick.instant
        self.last_tick = decision.tick.instant
        self.frames_written += 1
        if decision.night:
            self.night_frames += 1
        else:
            self.day_frames += 1


__all__ = [
    "Caption",
    "Frame",
    "OutputTick",
    "RgbColor",
    "Roi",
    "RunSummary",
    "SourceImage",
    "TickDecision",
]
