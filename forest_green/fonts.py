"""Caption font loading, text measurement and drawing."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple, Union

from PIL import ImageDraw, ImageFont

from forest_green.config import FontSettings
from forest_green.errors import FontError
from forest_green.models import Caption, RgbColor

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@dataclass
class CaptionFont:
    """A loaded font together with its caption colours and anchor."""

    font: PillowFont
    size: float
    background_color: RgbColor
    text_color: RgbColor = (255, 255, 255)
    position: Tuple[int, int] = (0, 0)

    @property
    def line_height(self) -> int:
        return int(self.size)

    def text_width(self, text: str) -> Optional[int]:
        """Pixel width of ``text`` or ``None`` when it lays out no glyphs."""
        if not text:
            return None
        left, _top, right, _bottom = self.font.getbbox(text)
        width = int(right) - min(0, int(left))
        return max(0, width)

    def draw_caption(self, draw: ImageDraw.ImageDraw, caption: Caption) -> bool:
        """Paint the background box then the glyphs; ``False`` when skipped."""
        width = self.text_width(caption.text)
        if width is None:
            return False
        x, y = caption.position
        if width > 0:
            draw.rectangle(
                (x, y, x + width - 1, y + self.line_height - 1),
                fill=self.background_color,
            )
        draw.text((x, y), caption.text, fill=self.text_color, font=self.font)
        return True


def load_font(settings: FontSettings) -> CaptionFont:
    """Load the TrueType font described by ``settings``."""
    try:
        data = settings.path.read_bytes()
    except OSError as exc:
        raise FontError(f"Cannot read font file '{settings.path}': {exc}") from exc

    try:
        font = ImageFont.truetype(BytesIO(data), size=max(1, int(round(settings.size))))
    except OSError as exc:
        raise FontError(f"error constructing a Font from data at '{settings.path}': {exc}") from exc

    return CaptionFont(
        font=font,
        size=settings.size,
        background_color=settings.background_color,
        text_color=settings.text_color,
        position=settings.position,
    )


__all__ = ["CaptionFont", "load_font"]
