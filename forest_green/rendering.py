"""Render driver: turns timeline decisions into composed, persisted frames."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set, Tuple

import cv2
import numpy as np

from forest_green.analysis import crop_and_average, validate_roi
from forest_green.composer import FrameComposer
from forest_green.config import Config
from forest_green.errors import ConfigurationError, DecodeError, EncodeError
from forest_green.models import Frame, Roi, RunSummary, SourceImage, TickDecision
from forest_green.progress import ProgressMeter
from forest_green.timeline import TimelineCursor, count_ticks, iter_ticks
from forest_green.timestamps import output_file_path

ImageLoader = Callable[[Path], np.ndarray]
FrameWriter = Callable[[Path, Frame], None]


def list_source_images(images_dir: Path) -> List[Path]:
    """Regular files with an extension, sorted by full path."""
    try:
        entries = list(images_dir.iterdir())
    except OSError as exc:
        raise ConfigurationError(f"Cannot list input directory '{images_dir}': {exc}") from exc
    return sorted(path for path in entries if path.suffix and path.is_file())


def decode_image(path: Path) -> np.ndarray:
    """Decode ``path`` into an RGB ``uint8`` array of shape ``(H, W, 3)``."""
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise DecodeError(f"Failed to decode image: {path}")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def write_frame(path: Path, frame: Frame) -> None:
    """Encode an RGB frame to ``path``; the codec follows the file extension."""
    bgr = cv2.cvtColor(frame.pixels, cv2.COLOR_RGB2BGR)
    try:
        success = cv2.imwrite(str(path), bgr)
    except cv2.error as exc:
        raise EncodeError(f"Failed to encode frame {path}: {exc}") from exc
    if not success:
        raise EncodeError(f"Failed to write frame: {path}")


class PixelSlot:
    """Single-slot holder for the decoded pixels of the active source image.

    Loading a different source replaces the held buffer; it is never shared
    between two sources.
    """

    def __init__(self, loader: ImageLoader, *, roi: Optional[Roi] = None) -> None:
        self._loader = loader
        self._roi = roi
        self._path: Optional[Path] = None
        self._pixels: Optional[np.ndarray] = None
        self.dimensions: Optional[Tuple[int, int]] = None
        self.decode_count = 0

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def pixels_for(self, source: SourceImage) -> np.ndarray:
        if self._pixels is not None and self._path == source.path:
            return self._pixels

        self.release()
        pixels = self._loader(source.path)
        height, width = pixels.shape[:2]
        if self._roi is not None:
            validate_roi(self._roi, width, height)
        self._path = source.path
        self._pixels = pixels
        self.dimensions = (width, height)
        self.decode_count += 1
        return pixels

    def release(self) -> None:
        self._path = None
        self._pixels = None


class RenderDriver:
    """Walk the output timeline and write one composed frame per tick."""

    def __init__(
        self,
        config: Config,
        composer: FrameComposer,
        *,
        logger: logging.Logger,
        output_dir: Optional[Path] = None,
        loader: ImageLoader = decode_image,
        writer: FrameWriter = write_frame,
    ) -> None:
        self.config = config
        self.composer = composer
        self.logger = logger
        self.output_dir = output_dir or config.output_dir
        self.writer = writer
        self.slot = PixelSlot(loader, roi=config.roi)

    def render(self, decision: TickDecision) -> Frame:
        """Compose the frame for a single resolved tick."""
        if decision.night:
            if self.slot.dimensions is None:
                self.slot.pixels_for(decision.source)
            elif self.slot.path != decision.source.path:
                self.slot.release()
            assert self.slot.dimensions is not None
            return self.composer.compose_night(
                self.slot.dimensions,
                self.config.night_color,
                decision.tick.instant,
            )

        pixels = self.slot.pixels_for(decision.source)
        color = crop_and_average(pixels, self.config.roi)
        return self.composer.compose_day(pixels, color, decision.source.date_label)

    def run(self, paths: Optional[Sequence[Path]] = None) -> RunSummary:
        """Render every tick between the configured start and end dates."""
        config = self.config
        if paths is None:
            paths = list_source_images(config.images_dir)
        self.logger.info("Found %s candidate images in %s", len(paths), config.images_dir)

        total = count_ticks(config.start_date, config.end_date, config.step)
        self.logger.info("Rendering %s frames into %s", total, self.output_dir)

        cursor = TimelineCursor(
            paths,
            end_date=config.end_date,
            night_window=config.night_window,
        )
        first = cursor.start()
        self.logger.info("Reference image %s captured %s", first.path.name, first.date_label)

        summary = RunSummary()
        progress = ProgressMeter(total, logger=self.logger)
        used: Set[Path] = set()

        try:
            ticks = iter_ticks(config.start_date, config.end_date, config.step)
            for decision in cursor.walk(ticks):
                frame = self.render(decision)
                path = output_file_path(self.output_dir, decision.source.path, decision.tick.instant)
                self.logger.debug("Save %s", path)
                self.writer(path, frame)
                summary.record(decision)
                used.add(decision.source.path)
                progress.advance()
        finally:
            self.slot.release()

        summary.sources_used = len(used)
        self.logger.info(
            "Wrote %s frames (%s day, %s night) from %s source images",
            summary.frames_written,
            summary.day_frames,
            summary.night_frames,
            summary.sources_used,
        )
        return summary


__all__ = [
    "FrameWriter",
    "ImageLoader",
    "PixelSlot",
    "RenderDriver",
    "decode_image",
    "list_source_images",
    "write_frame",
]
