from datetime import datetime, timezone

from .lecture_status import LECTURE_DURATION, as_utc


def _ics_time(dt: datetime) -> str:
    return as_utc(dt).strftime("%Y%m%dT%H%M%SZ")


def _escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def build_lecture_ics(lecture_id: str, title: str, description: str, watch_url: str, start: datetime) -> str:
    dtstamp = _ics_time(datetime.now(timezone.utc))
    dtstart = _ics_time(start)
    dtend = _ics_time(as_utc(start) + LECTURE_DURATION)
    uid = f"{lecture_id}@lecture-portal"
    details = f"Watch live: {watch_url}"
    if description:
        details = f"{details}\n\n{description}"
    return (
        "BEGIN:VCALENDAR\r\n"
        "VERSION:2.0\r\n"
        "PRODID:-//Lecture Portal//EN\r\n"
        "METHOD:REQUEST\r\n"
        "BEGIN:VEVENT\r\n"
        f"UID:{uid}\r\n"
        f"DTSTAMP:{dtstamp}\r\n"
        f"DTSTART:{dtstart}\r\n"
        f"DTEND:{dtend}\r\n"
        f"SUMMARY:{_escape(title)}\r\n"
        f"DESCRIPTION:{_escape(details)}\r\n"
        f"URL:{watch_url}\r\n"
        "END:VEVENT\r\n"
        "END:VCALENDAR\r\n"
    )
