"""Capture timestamp parsing and output naming for source photographs."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

from forest_green.errors import MalformedName

DATE_FIELD_LENGTH = 8
TIME_FIELD_LENGTH = 6
MIN_NAME_FIELDS = 4
OUTPUT_MARKER = "_green"


def format_date_label(moment: datetime) -> str:
    """Caption form of a timestamp, e.g. ``15.06.2023, 14:30:22``."""
    return moment.strftime("%d.%m.%Y, %H:%M:%S")


def format_iso_label(moment: datetime) -> str:
    """Alternate caption form of a timestamp, e.g. ``2023-06-15, 14:30:22``."""
    return moment.strftime("%Y-%m-%d, %H:%M:%S")


def format_tick(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def _is_digits(field: str, length: int) -> bool:
    return len(field) == length and field.isascii() and field.isdigit()


def _locate_fields(fields: List[str]) -> Tuple[str, str]:
    for index in range(2, len(fields) - 1):
        date_field, time_field = fields[index], fields[index + 1]
        if _is_digits(date_field, DATE_FIELD_LENGTH) and _is_digits(time_field, TIME_FIELD_LENGTH):
            return date_field, time_field
    raise ValueError("no YYYYMMDD_HHMMSS field pair")


def parse_timestamp(name: str) -> Tuple[datetime, str]:
    """Parse the UTC capture time embedded in a file stem.

    The stem is split on ``_``. The first adjacent ``YYYYMMDD`` / ``HHMMSS``
    pair found from the third field onwards is the capture time, so both
    ``camX_loc_20230615_143022`` and ``MC100_a_b_20230615_143022`` parse.

    Returns the timestamp together with its caption label.

    Raises
    ------
    MalformedName
        If the stem has too few fields, no date/time pair, or the pair does
        not describe a real calendar instant.
    """
    fields = name.split("_")
    if len(fields) < MIN_NAME_FIELDS:
        raise MalformedName(name, f"expected at least {MIN_NAME_FIELDS} '_'-separated fields")

    try:
        date_field, time_field = _locate_fields(fields)
        captured_at = datetime(
            int(date_field[0:4]),
            int(date_field[4:6]),
            int(date_field[6:8]),
            int(time_field[0:2]),
            int(time_field[2:4]),
            int(time_field[4:6]),
            tzinfo=timezone.utc,
        )
    except ValueError as exc:
        raise MalformedName(name, str(exc)) from exc

    return captured_at, format_date_label(captured_at)


def timestamp_from_path(path: Path) -> Tuple[datetime, str]:
    """Parse the capture timestamp from a file path's stem."""
    if not path.stem:
        raise MalformedName(str(path), "cannot obtain file name")
    return parse_timestamp(path.stem)


def output_file_path(target_dir: Path, source_file: Path, tick: datetime) -> Path:
    """Output path ``<stem>_green<tick>.<ext>`` inside ``target_dir``."""
    if not source_file.suffix:
        raise MalformedName(str(source_file), "could not obtain the file extension")
    return target_dir / f"{source_file.stem}{OUTPUT_MARKER}{format_tick(tick)}{source_file.suffix}"


__all__ = [
    "format_date_label",
    "format_iso_label",
    "format_tick",
    "output_file_path",
    "parse_timestamp",
    "timestamp_from_path",
]
