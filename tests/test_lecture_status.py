"""
Status classification and countdown arithmetic.

A lecture is live from its start through exactly one hour later, both ends
inclusive.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from lecture_portal.utils.lecture_status import (
    Countdown,
    LectureStatus,
    as_utc,
    classify_status,
    format_countdown,
    sort_schedule,
    time_remaining,
)

START = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(seconds=-1), LectureStatus.UPCOMING),
        (timedelta(0), LectureStatus.LIVE),
        (timedelta(minutes=30), LectureStatus.LIVE),
        (timedelta(seconds=3600), LectureStatus.LIVE),
        (timedelta(seconds=3601), LectureStatus.COMPLETED),
    ],
)
def test_classify_status_boundaries(offset, expected):
    assert classify_status(START, START + offset) is expected


def test_classify_status_is_repeatable():
    now = START + timedelta(minutes=10)
    results = {classify_status(START, now) for _ in range(5)}
    assert results == {LectureStatus.LIVE}


def test_classify_status_accepts_iso_strings():
    assert classify_status("2025-03-10T12:00:00Z", "2025-03-10T11:59:59Z") is LectureStatus.UPCOMING
    assert classify_status("2025-03-10T13:00:00+01:00", START) is LectureStatus.LIVE


def test_naive_datetimes_are_utc():
    naive = datetime(2025, 3, 10, 12, 0)
    assert as_utc(naive) == START
    assert classify_status(naive, START + timedelta(hours=2)) is LectureStatus.COMPLETED


def test_status_values_are_plain_strings():
    assert {s.value for s in LectureStatus} == {"upcoming", "live", "completed"}


def test_time_remaining_decomposes_days_hours_minutes():
    now = START - timedelta(days=1, hours=2, minutes=5)
    assert time_remaining(START, now) == Countdown(days=1, hours=2, minutes=5)


def test_time_remaining_floors_partial_minutes():
    now = START - timedelta(hours=3, minutes=4, seconds=59)
    assert time_remaining(START, now) == Countdown(days=0, hours=3, minutes=4)


def test_time_remaining_empty_once_started():
    assert time_remaining(START, START) is None
    assert time_remaining(START, START + timedelta(minutes=1)) is None


@pytest.mark.parametrize(
    "countdown, text",
    [
        (Countdown(1, 2, 5), "1d 2h 5m"),
        (Countdown(0, 2, 0), "2h 0m"),
        (Countdown(0, 0, 7), "7m"),
        (None, ""),
    ],
)
def test_format_countdown(countdown, text):
    assert format_countdown(countdown) == text


def test_sort_schedule_orders_each_bucket():
    def lec(name, offset):
        return SimpleNamespace(name=name, scheduled_time=START + offset)

    lectures = [
        lec("old", -timedelta(days=3)),
        lec("later", timedelta(days=2)),
        lec("recent", -timedelta(hours=5)),
        lec("soon", timedelta(hours=1)),
        lec("now", -timedelta(minutes=5)),
    ]
    schedule = sort_schedule(lectures, START)

    assert [x.name for x in schedule.upcoming] == ["soon", "later"]
    assert [x.name for x in schedule.live] == ["now"]
    assert [x.name for x in schedule.completed] == ["recent", "old"]
