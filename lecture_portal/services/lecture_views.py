from datetime import datetime
from typing import Iterable, List
from urllib.parse import urlencode, urlparse

from .. import schemas
from ..config import PUBLIC_BASE_URL
from ..utils.lecture_status import (
    LectureStatus,
    classify_status,
    format_countdown,
    sort_schedule,
    time_remaining,
)


def embed_url(youtube_id: str, live: bool = False) -> str:
    url = f"https://www.youtube.com/embed/{youtube_id}"
    return f"{url}?autoplay=1" if live else url


def chat_url(youtube_id: str) -> str:
    domain = urlparse(PUBLIC_BASE_URL).hostname or "localhost"
    return "https://www.youtube.com/live_chat?" + urlencode({"v": youtube_id, "embed_domain": domain})


def lecture_view(lecture: schemas.LectureOut, now: datetime) -> schemas.LectureView:
    countdown = time_remaining(lecture.scheduled_time, now)
    return schemas.LectureView(
        **lecture.model_dump(),
        status=classify_status(lecture.scheduled_time, now),
        countdown=schemas.CountdownOut.model_validate(countdown) if countdown else None,
        starts_in=format_countdown(countdown),
    )


def lecture_views(lectures: Iterable[schemas.LectureOut], now: datetime) -> List[schemas.LectureView]:
    return [lecture_view(lec, now) for lec in lectures]


def course_view(course: schemas.CourseOut, now: datetime) -> schemas.CourseView:
    return schemas.CourseView(
        id=course.id,
        name=course.name,
        description=course.description,
        weeks=[
            schemas.WeekView(
                id=week.id,
                course_id=week.course_id,
                name=week.name,
                lectures=lecture_views(week.lectures, now),
            )
            for week in course.weeks
        ],
    )


def lecture_detail(
    lecture: schemas.LectureOut, course_name: str, week_name: str, now: datetime
) -> schemas.LectureDetail:
    view = lecture_view(lecture, now)
    return schemas.LectureDetail(
        **view.model_dump(),
        course_name=course_name,
        week_name=week_name,
        embed_url=embed_url(lecture.youtube_id, live=view.status == LectureStatus.LIVE),
        chat_url=chat_url(lecture.youtube_id),
    )


def schedule_view(lectures: Iterable[schemas.LectureOut], now: datetime) -> schemas.ScheduleOut:
    buckets = sort_schedule(lectures, now)
    return schemas.ScheduleOut(
        upcoming=lecture_views(buckets.upcoming, now),
        live=lecture_views(buckets.live, now),
        completed=lecture_views(buckets.completed, now),
    )
