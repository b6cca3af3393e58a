import sys
from datetime import datetime, time, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from forest_green.config import DayNightWindow
from forest_green.errors import ConfigurationError, MalformedName
from forest_green.models import OutputTick
from forest_green.timeline import CursorState, TimelineCursor, count_ticks, is_night, iter_ticks

DAY = datetime(2023, 6, 15, tzinfo=timezone.utc)
END_OF_DAY = DAY.replace(hour=23, minute=59, second=59)


def fake_sources(*offsets: timedelta):
    """Paths plus a parser backed by an in-memory timestamp table."""
    table = {}
    paths = []
    for index, offset in enumerate(offsets):
        path = Path(f"img_{index:03d}.png")
        table[path] = DAY + offset
        paths.append(path)

    def parse(path: Path):
        captured_at = table[path]
        return captured_at, captured_at.strftime("%d.%m.%Y, %H:%M:%S")

    return paths, parse


def walk_names(cursor: TimelineCursor, start: datetime, end: datetime, step: timedelta):
    return [decision.source.path.name for decision in cursor.walk(iter_ticks(start, end, step))]


def test_iter_ticks_includes_end_date():
    ticks = list(iter_ticks(DAY, END_OF_DAY, timedelta(minutes=30)))

    assert len(ticks) == 48
    assert ticks[0].instant == DAY
    assert ticks[-1].instant == DAY.replace(hour=23, minute=30)
    assert [tick.index for tick in ticks] == list(range(48))
    assert count_ticks(DAY, END_OF_DAY, timedelta(minutes=30)) == 48


def test_iter_ticks_stops_exactly_on_end():
    ticks = list(iter_ticks(DAY, DAY + timedelta(hours=2), timedelta(hours=1)))

    assert [tick.instant.hour for tick in ticks] == [0, 1, 2]


def test_night_predicate_wraps_midnight():
    window = DayNightWindow(night_start_time=time(20), night_end_time=time(6))

    assert is_night(time(23), window)
    assert is_night(time(5), window)
    assert is_night(time(20), window)
    assert not is_night(time(6), window)
    assert not is_night(time(12), window)


def test_degenerate_night_window_is_always_night():
    window = DayNightWindow(night_start_time=time(6), night_end_time=time(6))

    assert all(is_night(time(hour, minute), window) for hour in range(24) for minute in (0, 30))


def test_non_wrapping_window_uses_disjunction():
    window = DayNightWindow(night_start_time=time(6), night_end_time=time(20))

    assert is_night(time(12), window)
    assert is_night(time(3), window)
    assert is_night(time(21), window)


def test_missing_window_means_always_day():
    assert not is_night(time(0), None)
    assert not is_night(time(23, 59), None)


def test_active_image_switches_at_its_own_capture_time():
    paths, parse = fake_sources(timedelta(hours=0), timedelta(hours=2))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)

    names = walk_names(cursor, DAY, DAY + timedelta(hours=3), timedelta(hours=1))

    assert names == ["img_000.png", "img_000.png", "img_001.png", "img_001.png"]


def test_active_image_switches_on_first_tick_after_capture():
    paths, parse = fake_sources(timedelta(hours=0), timedelta(hours=1, minutes=20))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)

    names = walk_names(cursor, DAY, DAY + timedelta(hours=2), timedelta(hours=1))

    assert names == ["img_000.png", "img_000.png", "img_001.png"]


def test_images_already_in_the_past_are_skipped():
    offsets = [timedelta(minutes=10 * index) for index in range(13)]
    paths, parse = fake_sources(*offsets)
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)

    names = walk_names(cursor, DAY, DAY + timedelta(hours=2), timedelta(hours=1))

    assert names == ["img_000.png", "img_006.png", "img_012.png"]


def test_sparse_input_repeats_active_image():
    paths, parse = fake_sources(timedelta(hours=0), timedelta(hours=5))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)

    names = walk_names(cursor, DAY, DAY + timedelta(hours=4), timedelta(minutes=30))

    assert names == ["img_000.png"] * 9


def test_ticks_before_first_capture_use_first_image():
    paths, parse = fake_sources(timedelta(hours=5), timedelta(hours=6))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)

    names = walk_names(cursor, DAY, DAY + timedelta(hours=6), timedelta(hours=3))

    assert names == ["img_000.png", "img_000.png", "img_001.png"]


def test_state_machine_transitions():
    paths, parse = fake_sources(timedelta(hours=0), timedelta(hours=1))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)
    assert cursor.state is CursorState.NO_SOURCE_YET

    cursor.start()
    assert cursor.state is CursorState.SOURCE_ACTIVE

    decision = cursor.tick(OutputTick(index=0, instant=DAY + timedelta(hours=2)))
    assert decision.source.path.name == "img_001.png"
    assert cursor.state is CursorState.EXHAUSTED
    assert cursor.lookahead is None


def test_tick_reports_night_flag():
    paths, parse = fake_sources(timedelta(hours=0))
    window = DayNightWindow(night_start_time=time(20), night_end_time=time(6))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, night_window=window, parse=parse)

    flags = [
        decision.night
        for decision in cursor.walk(iter_ticks(DAY, END_OF_DAY, timedelta(hours=7)))
    ]

    assert flags == [True, False, False, True]


def test_empty_input_is_a_configuration_error():
    cursor = TimelineCursor([], end_date=END_OF_DAY)

    with pytest.raises(ConfigurationError):
        cursor.start()


def test_malformed_first_name_fails_immediately():
    cursor = TimelineCursor([Path("broken.png")], end_date=END_OF_DAY)

    with pytest.raises(MalformedName):
        cursor.start()


def test_malformed_name_inside_range_aborts_walk():
    paths = [Path("cam_loc_20230615_000000.png"), Path("broken.png")]
    cursor = TimelineCursor(paths, end_date=END_OF_DAY)

    with pytest.raises(MalformedName):
        list(cursor.walk(iter_ticks(DAY, END_OF_DAY, timedelta(hours=1))))


def test_names_after_end_date_are_never_read():
    paths = [
        Path("cam_loc_20230615_000000.png"),
        Path("cam_loc_20230620_000000.png"),
        Path("broken.png"),
    ]
    cursor = TimelineCursor(paths, end_date=END_OF_DAY)

    decisions = list(cursor.walk(iter_ticks(DAY, END_OF_DAY, timedelta(hours=1))))

    assert len(decisions) == 24
    assert {decision.source.path.name for decision in decisions} == {"cam_loc_20230615_000000.png"}


def test_ticks_must_increase():
    paths, parse = fake_sources(timedelta(hours=0))
    cursor = TimelineCursor(paths, end_date=END_OF_DAY, parse=parse)
    cursor.tick(OutputTick(index=0, instant=DAY + timedelta(hours=1)))

    with pytest.raises(ValueError):
        cursor.tick(OutputTick(index=1, instant=DAY + timedelta(hours=1)))
