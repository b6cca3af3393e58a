"""Region-of-interest cropping and mean colour extraction."""

from __future__ import annotations

import numpy as np

from forest_green.errors import ConfigurationError
from forest_green.models import RgbColor, Roi


def validate_roi(roi: Roi, width: int, height: int) -> None:
    """Raise :class:`ConfigurationError` when ``roi`` leaves a ``width`` x ``height`` image."""
    if roi.x < 0 or roi.y < 0 or roi.right > width or roi.bottom > height:
        raise ConfigurationError(
            f"ROI x={roi.x} y={roi.y} {roi.width}x{roi.height} does not fit "
            f"inside a {width}x{height} image"
        )


def crop_region(image: np.ndarray, roi: Roi) -> np.ndarray:
    """Return the ``roi`` sub-rectangle of an ``(H, W, 3)`` image as a view."""
    return image[roi.y:roi.bottom, roi.x:roi.right]


def mean_color(region: np.ndarray) -> RgbColor:
    """Per-channel mean of a region, truncated towards zero.

    Channel sums are accumulated in full before a single floor division, so
    the result is reproducible bit for bit.
    """
    pixel_count = region.shape[0] * region.shape[1]
    if pixel_count == 0:
        raise ValueError("cannot average an empty region")
    sums = region.reshape(-1, region.shape[2]).sum(axis=0, dtype=np.uint64)
    red, green, blue = (int(total) // pixel_count for total in sums[:3])
    return (red, green, blue)


def crop_and_average(image: np.ndarray, roi: Roi) -> RgbColor:
    return mean_color(crop_region(image, roi))


__all__ = ["crop_and_average", "crop_region", "mean_color", "validate_roi"]
