import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from forest_green.analysis import crop_and_average, crop_region, mean_color, validate_roi
from forest_green.errors import ConfigurationError
from forest_green.models import Roi


def test_mean_color_of_uniform_region_is_exact():
    expected = (42, 21, 84)
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    image[...] = expected

    assert mean_color(image) == expected


def test_mean_color_truncates_each_channel_independently():
    region = np.array([[[0, 1, 2], [1, 2, 4]]], dtype=np.uint8)

    # sums (1, 3, 6) over two pixels
    assert mean_color(region) == (0, 1, 3)


def test_mean_color_of_saturated_large_region_does_not_overflow():
    image = np.full((2000, 2000, 3), 255, dtype=np.uint8)

    assert mean_color(image) == (255, 255, 255)


def test_crop_region_selects_roi_rows_and_columns():
    image = np.zeros((6, 8, 3), dtype=np.uint8)
    image[2:4, 3:7] = (200, 100, 50)
    roi = Roi(x=3, y=2, width=4, height=2)

    region = crop_region(image, roi)

    assert region.shape == (2, 4, 3)
    assert crop_and_average(image, roi) == (200, 100, 50)


def test_crop_and_average_ignores_pixels_outside_roi():
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    image[0, 0] = (255, 255, 255)
    image[2:, 2:] = (10, 20, 30)

    assert crop_and_average(image, Roi(x=2, y=2, width=2, height=2)) == (10, 20, 30)


def test_validate_roi_accepts_full_frame():
    validate_roi(Roi(x=0, y=0, width=8, height=6), 8, 6)


@pytest.mark.parametrize(
    "roi",
    [
        Roi(x=1, y=0, width=8, height=6),
        Roi(x=0, y=1, width=8, height=6),
        Roi(x=0, y=0, width=9, height=1),
    ],
)
def test_validate_roi_rejects_out_of_bounds(roi):
    with pytest.raises(ConfigurationError):
        validate_roi(roi, 8, 6)
