"""Tests for the half-open interval model."""

from datetime import UTC, datetime, timedelta

import pytest

from practice_scheduler.domain.errors import InvalidDuration, InvalidInterval
from practice_scheduler.domain.intervals import (
    Interval,
    duration_minutes,
    make_interval,
    overlaps,
)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 1, 1, hour, minute, tzinfo=UTC)


def test_make_interval_rejects_end_not_after_start() -> None:
    with pytest.raises(InvalidInterval):
        make_interval(_at(10), _at(10))
    with pytest.raises(InvalidInterval):
        make_interval(_at(11), _at(10))


def test_make_interval_rejects_naive_datetimes() -> None:
    with pytest.raises(InvalidInterval):
        make_interval(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 10))


def test_back_to_back_intervals_do_not_overlap() -> None:
    first = make_interval(_at(10), _at(11))
    second = make_interval(_at(11), _at(12))

    assert not overlaps(first, second)
    assert not overlaps(second, first)


def test_overlap_is_symmetric() -> None:
    cases = [
        (make_interval(_at(9), _at(10)), make_interval(_at(9, 30), _at(11))),
        (make_interval(_at(9), _at(12)), make_interval(_at(10), _at(10, 30))),
        (make_interval(_at(9), _at(10)), make_interval(_at(13), _at(14))),
    ]
    for a, b in cases:
        assert overlaps(a, b) == overlaps(b, a)


def test_interval_overlaps_itself() -> None:
    interval = make_interval(_at(9), _at(9, 1))

    assert overlaps(interval, interval)


def test_contained_interval_overlaps() -> None:
    outer = make_interval(_at(10), _at(11))
    inner = make_interval(_at(10), _at(10, 30))

    assert overlaps(outer, inner)


def test_duration_minutes() -> None:
    interval = make_interval(_at(9), _at(10, 45))

    assert duration_minutes(interval) == 105
    assert interval.duration_minutes == 105


def test_from_start_builds_exact_length() -> None:
    interval = Interval.from_start(_at(9), 50)

    assert interval.end - interval.start == timedelta(minutes=50)


def test_from_start_rejects_non_positive_minutes() -> None:
    with pytest.raises(InvalidDuration):
        Interval.from_start(_at(9), 0)
    with pytest.raises(InvalidDuration):
        Interval.from_start(_at(9), -15)


def test_from_start_rejects_duration_past_calendar_end() -> None:
    with pytest.raises(InvalidDuration):
        Interval.from_start(datetime(9999, 12, 31, 23, 30, tzinfo=UTC), 60)
    with pytest.raises(InvalidDuration):
        Interval.from_start(_at(9), 10**15)
