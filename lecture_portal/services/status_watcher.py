import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from apscheduler.schedulers.base import BaseScheduler

from .. import models
from ..config import STATUS_POLL_SECONDS
from ..database import SessionLocal
from ..utils.lecture_status import LectureStatus, classify_status, utcnow

logger = logging.getLogger(__name__)

Transition = Tuple[str, Optional[LectureStatus], LectureStatus]


class StatusWatcher:
    """
    Periodically re-classifies every lecture and logs status changes.

    Only the last seen status per lecture is remembered, in memory.
    """

    job_id = "lecture-status-watcher"

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory
        self.last_seen: Dict[str, LectureStatus] = {}

    def poll(self, now: Optional[datetime] = None) -> List[Transition]:
        now = now or utcnow()
        db = self.session_factory()
        try:
            rows = db.query(models.Lecture.id, models.Lecture.title, models.Lecture.scheduled_time).all()
        finally:
            db.close()

        transitions = []
        current = {}
        for lecture_id, title, scheduled_time in rows:
            status = classify_status(scheduled_time, now)
            current[lecture_id] = status
            previous = self.last_seen.get(lecture_id)
            if previous is not None and previous != status:
                logger.info("Lecture %s (%s) is now %s", lecture_id, title, status.value)
                transitions.append((lecture_id, previous, status))
        self.last_seen = current
        return transitions

    def schedule(self, scheduler: BaseScheduler, seconds: int = STATUS_POLL_SECONDS) -> None:
        scheduler.add_job(
            self.poll,
            "interval",
            seconds=seconds,
            id=self.job_id,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        logger.info("Polling lecture status every %s seconds", seconds)
