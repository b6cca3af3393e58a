"""Configuration dataclasses and loading helpers for the frame synthesizer."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple

from forest_green.errors import ConfigurationError
from forest_green.locations import resolve_location
from forest_green.models import RgbColor, Roi

OUTPUT_DIR_NAME = "Output"
DEFAULT_TEXT_COLOR: RgbColor = (255, 255, 255)


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigurationError(f"Missing configuration key '{key}'")
    return data[key]


def _parse_int_list(value: Any, key: str, length: int) -> Tuple[int, ...]:
    """Parse a fixed-length list of integers, rejecting anything else."""
    if not isinstance(value, (list, tuple)) or len(value) != length:
        raise ConfigurationError(
            f"Configuration key '{key}' must be a list of {length} integers"
        )
    parsed = []
    for item in value:
        if (
            isinstance(item, bool)
            or not isinstance(item, (int, float))
            or (isinstance(item, float) and not math.isfinite(item))
            or int(item) != item
        ):
            raise ConfigurationError(
                f"Configuration key '{key}' must be a list of {length} integers"
            )
        parsed.append(int(item))
    return tuple(parsed)


def _parse_color(value: Any, key: str) -> RgbColor:
    """Parse an RGB triplet, clamping each channel into 0..255."""
    channels = _parse_int_list(value, key, 3)
    return tuple(max(0, min(255, channel)) for channel in channels)  # type: ignore[return-value]


def _parse_optional_color(value: Any, default: RgbColor) -> RgbColor:
    if value is None:
        return default
    try:
        return _parse_color(value, "text_color")
    except ConfigurationError:
        return default


def _parse_position(value: Any) -> Tuple[int, int]:
    if value is None:
        return (0, 0)
    try:
        x, y = _parse_int_list(value, "font_position", 2)
    except ConfigurationError:
        return (0, 0)
    return (max(0, x), max(0, y))


def _parse_roi(value: Any) -> Roi:
    x, y, width, height = _parse_int_list(value, "roi", 4)
    if x < 0 or y < 0:
        raise ConfigurationError(f"ROI origin must not be negative, got ({x}, {y})")
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"ROI size must be positive, got {width}x{height}")
    return Roi(x=x, y=y, width=width, height=height)


def _parse_date(value: Any, key: str, at: time) -> datetime:
    year, month, day = _parse_int_list(value, key, 3)
    try:
        return datetime.combine(datetime(year, month, day).date(), at, tzinfo=timezone.utc)
    except (ValueError, OverflowError) as exc:
        raise ConfigurationError(f"Configuration key '{key}' is not a valid date: {exc}") from exc


def _parse_duration(value: Any) -> timedelta:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"Configuration key 'duration' must be a positive number of minutes, got {value!r}"
        )
    try:
        return timedelta(minutes=value)
    except OverflowError as exc:
        raise ConfigurationError(f"Configuration key 'duration' is too large: {value!r}") from exc


def _parse_font_size(value: Any) -> float:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value <= 0
    ):
        raise ConfigurationError(
            f"Configuration key 'font_size' must be a positive number, got {value!r}"
        )
    return float(value)


@dataclass(frozen=True)
class DayNightWindow:
    """Wall-clock night window that may wrap past midnight."""

    night_start_time: time
    night_end_time: time

    def is_night(self, moment: time) -> bool:
        """Return ``True`` when ``moment`` lies at or after the start or before the end."""
        return moment >= self.night_start_time or moment < self.night_end_time


def _parse_night_window(value: Any) -> Optional[DayNightWindow]:
    if value is None:
        return None
    start_hour, end_hour = _parse_int_list(value, "night_times", 2)
    for hour in (start_hour, end_hour):
        if not 0 <= hour <= 23:
            raise ConfigurationError(f"Night hour must be within 0..23, got {hour}")
    return DayNightWindow(
        night_start_time=time(start_hour, 0, 0),
        night_end_time=time(end_hour, 0, 0),
    )


@dataclass(frozen=True)
class FontSettings:
    """Caption font file and drawing colours."""

    path: Path
    size: float
    background_color: RgbColor
    text_color: RgbColor = DEFAULT_TEXT_COLOR
    position: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class Config:
    """Root configuration object for a synthesis run."""

    images_dir: Path
    roi: Roi
    font: FontSettings
    location_code: str
    location: str
    start_date: datetime
    end_date: datetime
    step: timedelta
    night_window: Optional[DayNightWindow]
    night_color: RgbColor

    @property
    def output_dir(self) -> Path:
        return self.images_dir / OUTPUT_DIR_NAME


def _parse_images_dir(value: Any) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError("Configuration key 'images_path' must be a non-empty string")
    images_dir = Path(value)
    if not images_dir.exists():
        raise ConfigurationError(f"Input path does not exist: {images_dir}")
    if not images_dir.is_dir():
        raise ConfigurationError(f"Input path is not a directory: {images_dir}")
    return images_dir


def _parse_font_settings(data: Mapping[str, Any]) -> FontSettings:
    font_path = _require(data, "font_path")
    if not isinstance(font_path, str) or not font_path.strip():
        raise ConfigurationError("Configuration key 'font_path' must be a non-empty string")
    return FontSettings(
        path=Path(font_path),
        size=_parse_font_size(_require(data, "font_size")),
        background_color=_parse_color(_require(data, "font_color"), "font_color"),
        text_color=_parse_optional_color(data.get("text_color"), DEFAULT_TEXT_COLOR),
        position=_parse_position(data.get("font_position")),
    )


def parse_config(data: Mapping[str, Any]) -> Config:
    """Build a :class:`Config` from an already decoded mapping."""
    if not isinstance(data, Mapping):
        raise ConfigurationError("Configuration root must be an object")

    location_code = _require(data, "location")
    if not isinstance(location_code, str):
        raise ConfigurationError("Configuration key 'location' must be a string")

    start_date = _parse_date(_require(data, "start_date"), "start_date", time(0, 0, 0))
    end_date = _parse_date(_require(data, "end_date"), "end_date", time(23, 59, 59))
    if end_date < start_date:
        raise ConfigurationError(
            f"End date {end_date:%Y-%m-%d} is before start date {start_date:%Y-%m-%d}"
        )

    return Config(
        images_dir=_parse_images_dir(_require(data, "images_path")),
        roi=_parse_roi(_require(data, "roi")),
        font=_parse_font_settings(data),
        location_code=location_code,
        location=resolve_location(location_code),
        start_date=start_date,
        end_date=end_date,
        step=_parse_duration(_require(data, "duration")),
        night_window=_parse_night_window(data.get("night_times")),
        night_color=_parse_color(_require(data, "night_color"), "night_color"),
    )


def load_config(config_path: Path | str) -> Config:
    """Load and validate configuration from a JSON file."""
    path = Path(config_path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file '{path}' is not valid JSON: {exc}") from exc
    return parse_config(data)


def prepare_output_dir(config: Config) -> Path:
    """Create the output directory; an existing directory is an error."""
    output_dir = config.output_dir
    try:
        output_dir.mkdir()
    except OSError as exc:
        raise ConfigurationError(f"Cannot create output directory '{output_dir}': {exc}") from exc
    return output_dir


def describe_config(config: Config) -> Sequence[str]:
    """Human-readable summary lines used for startup logging."""
    night = "none"
    if config.night_window is not None:
        night = (
            f"{config.night_window.night_start_time:%H:%M}-"
            f"{config.night_window.night_end_time:%H:%M}"
        )
    return (
        f"Images: {config.images_dir}",
        f"Location: {config.location} ({config.location_code})",
        f"Range: {config.start_date:%Y-%m-%d %H:%M:%S} .. {config.end_date:%Y-%m-%d %H:%M:%S} UTC",
        f"Step: {int(config.step.total_seconds() // 60)} min, night window: {night}",
        f"ROI: x={config.roi.x} y={config.roi.y} {config.roi.width}x{config.roi.height}",
    )


__all__ = [
    "Config",
    "DayNightWindow",
    "FontSettings",
    "OUTPUT_DIR_NAME",
    "describe_config",
    "load_config",
    "parse_config",
    "prepare_output_dir",
]
