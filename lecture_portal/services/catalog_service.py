import logging
from typing import List, Optional

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db

logger = logging.getLogger(__name__)


class CatalogRepository:
    """
    CRUD over courses, weeks and lectures.

    Every read and write returns a fresh frozen snapshot built from the
    database; ORM objects never leave this class.
    """

    def __init__(self, db: Session):
        self.db = db

    def _course(self, course_id: str) -> models.Course:
        course = self.db.get(models.Course, course_id)
        if not course:
            raise HTTPException(status_code=404, detail="Course not found")
        return course

    def _week(self, week_id: str) -> models.Week:
        week = self.db.get(models.Week, week_id)
        if not week:
            raise HTTPException(status_code=404, detail="Week not found")
        return week

    def _lecture(self, lecture_id: str) -> models.Lecture:
        lecture = self.db.get(models.Lecture, lecture_id)
        if not lecture:
            raise HTTPException(status_code=404, detail="Lecture not found")
        return lecture

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def list_courses(self) -> List[schemas.CourseOut]:
        courses = self.db.query(models.Course).order_by(models.Course.name).all()
        return [schemas.CourseOut.model_validate(c) for c in courses]

    def get_course(self, course_id: str) -> schemas.CourseOut:
        return schemas.CourseOut.model_validate(self._course(course_id))

    def add_course(self, payload: schemas.CourseCreate) -> schemas.CourseOut:
        course = self._save(models.Course(name=payload.name, description=payload.description))
        logger.info("Added course %s (%s)", course.id, course.name)
        return schemas.CourseOut.model_validate(course)

    def update_course(self, course_id: str, payload: schemas.CourseUpdate) -> schemas.CourseOut:
        course = self._course(course_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(course, field, value)
        return schemas.CourseOut.model_validate(self._save(course))

    def delete_course(self, course_id: str) -> None:
        course = self._course(course_id)
        self.db.delete(course)
        self.db.commit()
        logger.info("Deleted course %s with its weeks and lectures", course_id)

    def list_weeks(self, course_id: Optional[str] = None) -> List[schemas.WeekOut]:
        query = self.db.query(models.Week)
        if course_id is not None:
            query = query.filter(models.Week.course_id == course_id)
        return [schemas.WeekOut.model_validate(w) for w in query.order_by(models.Week.name).all()]

    def get_week(self, week_id: str) -> schemas.WeekOut:
        return schemas.WeekOut.model_validate(self._week(week_id))

    def add_week(self, payload: schemas.WeekCreate) -> schemas.WeekOut:
        course = self._course(payload.course_id)
        week = models.Week(name=payload.name)
        course.weeks.append(week)
        week = self._save(week)
        logger.info("Added week %s to course %s", week.id, week.course_id)
        return schemas.WeekOut.model_validate(week)

    def update_week(self, week_id: str, payload: schemas.WeekUpdate) -> schemas.WeekOut:
        week = self._week(week_id)
        week.name = payload.name
        return schemas.WeekOut.model_validate(self._save(week))

    def delete_week(self, week_id: str) -> None:
        week = self._week(week_id)
        self.db.delete(week)
        self.db.commit()
        logger.info("Deleted week %s with its lectures", week_id)

    def list_lectures(
        self, course_id: Optional[str] = None, week_id: Optional[str] = None
    ) -> List[schemas.LectureOut]:
        query = self.db.query(models.Lecture)
        if course_id is not None:
            query = query.filter(models.Lecture.course_id == course_id)
        if week_id is not None:
            query = query.filter(models.Lecture.week_id == week_id)
        lectures = query.order_by(models.Lecture.scheduled_time).all()
        return [schemas.LectureOut.model_validate(lec) for lec in lectures]

    def get_lecture(self, lecture_id: str) -> schemas.LectureOut:
        return schemas.LectureOut.model_validate(self._lecture(lecture_id))

    def add_lecture(self, payload: schemas.LectureCreate) -> schemas.LectureOut:
        course = self._course(payload.course_id)
        week = self._week(payload.week_id)
        if week.course_id != course.id:
            raise HTTPException(status_code=400, detail="Week does not belong to course")
        lecture = models.Lecture(
            title=payload.title,
            youtube_id=payload.youtube_id,
            scheduled_time=payload.scheduled_time,
            description=payload.description,
        )
        # a new lecture must hang off both of its parents before flushing
        course.lectures.append(lecture)
        week.lectures.append(lecture)
        lecture = self._save(lecture)
        logger.info("Added lecture %s scheduled for %s", lecture.id, lecture.scheduled_time)
        return schemas.LectureOut.model_validate(lecture)

    def update_lecture(self, lecture_id: str, payload: schemas.LectureUpdate) -> schemas.LectureOut:
        lecture = self._lecture(lecture_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            setattr(lecture, field, value)
        return schemas.LectureOut.model_validate(self._save(lecture))

    def delete_lecture(self, lecture_id: str) -> None:
        lecture = self._lecture(lecture_id)
        self.db.delete(lecture)
        self.db.commit()
        logger.info("Deleted lecture %s", lecture_id)

    def names_for(self, lecture: schemas.LectureOut) -> tuple:
        """Course and week display names for a lecture."""
        course = self.db.get(models.Course, lecture.course_id)
        week = self.db.get(models.Week, lecture.week_id)
        return (
            course.name if course else "Unknown Course",
            week.name if week else "Unknown Week",
        )


def get_catalog(db: Session = Depends(get_db)) -> CatalogRepository:
    return CatalogRepository(db)
