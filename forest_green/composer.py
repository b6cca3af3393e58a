"""Side-by-side frame composition with stacked captions."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from forest_green.fonts import CaptionFont
from forest_green.models import Caption, Frame, RgbColor
from forest_green.timestamps import format_date_label, format_iso_label

TITLE = "Average colour of forest activity"


def format_color(color: RgbColor) -> str:
    """Caption text for a colour, e.g. ``Rgb([42, 21, 84])``."""
    red, green, blue = color
    return f"Rgb([{red}, {green}, {blue}])"


class FrameComposer:
    """Build double-width frames: solid colour block on the left, photo on the right."""

    def __init__(self, font: CaptionFont, *, location: str) -> None:
        self.font = font
        self.location = location

    # ------------------------------------------------------------------
    # Captions
    # ------------------------------------------------------------------

    def caption_stack(self, date_label: str, color: RgbColor) -> List[Caption]:
        """Location/date, title and colour lines, one line height apart."""
        x, y = self.font.position
        step = self.font.line_height
        texts = (f"{self.location}, {date_label}", TITLE, format_color(color))
        return [
            Caption(text=text, position=(x, y + row * step))
            for row, text in enumerate(texts)
        ]

    def _draw_captions(self, canvas: np.ndarray, captions: Sequence[Caption]) -> Tuple[Caption, ...]:
        image = Image.fromarray(canvas)
        draw = ImageDraw.Draw(image)
        drawn = tuple(
            caption for caption in captions if self.font.draw_caption(draw, caption)
        )
        canvas[...] = np.asarray(image)
        return drawn

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def compose_day(self, source: np.ndarray, color: RgbColor, date_label: str) -> Frame:
        """Mean colour block on the left half, ``source`` verbatim on the right."""
        height, width = source.shape[:2]
        canvas = np.empty((height, 2 * width, 3), dtype=np.uint8)
        canvas[:, :width] = color
        canvas[:, width:] = source[:, :, :3]

        captions = self._draw_captions(canvas, self.caption_stack(date_label, color))
        return Frame(pixels=canvas, captions=captions, night=False)

    def compose_night(
        self,
        dimensions: Tuple[int, int],
        night_color: RgbColor,
        tick: datetime,
    ) -> Frame:
        """Uniform night frame sized from the last decoded ``(width, height)``."""
        width, height = dimensions
        canvas = np.empty((height, 2 * width, 3), dtype=np.uint8)
        canvas[...] = night_color

        captions = self.caption_stack(format_date_label(tick), night_color)
        x, y = self.font.position
        captions.append(
            Caption(
                text=f"{self.location}, {format_iso_label(tick)}",
                position=(x + width, y),
            )
        )
        drawn = self._draw_captions(canvas, captions)
        return Frame(pixels=canvas, captions=drawn, night=True)


__all__ = ["FrameComposer", "TITLE", "format_color"]
