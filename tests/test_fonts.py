import sys
from pathlib import Path

import pytest
from PIL import ImageFont

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from forest_green.config import FontSettings
from forest_green.errors import FontError
from forest_green.fonts import CaptionFont, load_font


def test_load_font_missing_file(tmp_path):
    settings = FontSettings(path=tmp_path / "missing.ttf", size=12, background_color=(0, 0, 0))

    with pytest.raises(FontError):
        load_font(settings)


def test_load_font_rejects_garbage(tmp_path):
    font_path = tmp_path / "garbage.ttf"
    font_path.write_bytes(b"definitely not a font")
    settings = FontSettings(path=font_path, size=12, background_color=(0, 0, 0))

    with pytest.raises(FontError):
        load_font(settings)


def test_text_width_grows_with_text():
    font = CaptionFont(font=ImageFont.load_default(), size=10, background_color=(0, 0, 0))

    short = font.text_width("ab")
    long = font.text_width("abcdef")

    assert short is not None and long is not None
    assert 0 < short < long
    assert font.line_height == 10
