"""
Lecture lifecycle helpers.

Every lecture is assumed to run for exactly one hour. Its status is derived
on read from the scheduled start and the current time; nothing here is
stored or cached, so callers can re-evaluate as often as they like.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional, Union

LECTURE_DURATION = timedelta(hours=1)

Timestamp = Union[datetime, str]


class LectureStatus(str, Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Countdown:
    days: int
    hours: int
    minutes: int


def as_utc(value: Timestamp) -> datetime:
    """
    Normalize an ISO-8601 string or datetime to an aware UTC datetime.

    Naive values are taken to be UTC already.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def classify_status(scheduled_time: Timestamp, now: Optional[Timestamp] = None) -> LectureStatus:
    """
    Classify a lecture against ``now``.

    The live window is closed on both ends: a lecture is live at exactly its
    start time and at exactly one hour past it.
    """
    start = as_utc(scheduled_time)
    current = as_utc(now) if now is not None else utcnow()
    end = start + LECTURE_DURATION

    if current < start:
        return LectureStatus.UPCOMING
    if current <= end:
        return LectureStatus.LIVE
    return LectureStatus.COMPLETED


def time_remaining(scheduled_time: Timestamp, now: Optional[Timestamp] = None) -> Optional[Countdown]:
    """
    Whole days, hours and minutes until the lecture starts.

    Returns None once the lecture has begun.
    """
    start = as_utc(scheduled_time)
    current = as_utc(now) if now is not None else utcnow()
    if current >= start:
        return None

    total_minutes = (start - current) // timedelta(minutes=1)
    days, rest = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(rest, 60)
    return Countdown(days=days, hours=hours, minutes=minutes)


def format_countdown(countdown: Optional[Countdown]) -> str:
    if countdown is None:
        return ""
    if countdown.days > 0:
        return f"{countdown.days}d {countdown.hours}h {countdown.minutes}m"
    if countdown.hours > 0:
        return f"{countdown.hours}h {countdown.minutes}m"
    return f"{countdown.minutes}m"


@dataclass(frozen=True)
class Schedule:
    upcoming: List
    live: List
    completed: List


def sort_schedule(lectures: Iterable, now: Optional[Timestamp] = None) -> Schedule:
    """
    Bucket lectures by status.

    Upcoming and live lectures come soonest first, completed lectures most
    recent first. Each item only needs a ``scheduled_time`` attribute.
    """
    current = as_utc(now) if now is not None else utcnow()
    buckets = {status: [] for status in LectureStatus}
    for lecture in lectures:
        buckets[classify_status(lecture.scheduled_time, current)].append(lecture)

    def key(lecture):
        return as_utc(lecture.scheduled_time)

    return Schedule(
        upcoming=sorted(buckets[LectureStatus.UPCOMING], key=key),
        live=sorted(buckets[LectureStatus.LIVE], key=key),
        completed=sorted(buckets[LectureStatus.COMPLETED], key=key, reverse=True),
    )
