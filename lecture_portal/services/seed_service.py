import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from .. import models

logger = logging.getLogger(__name__)

PLACEHOLDER_VIDEO = "dQw4w9WgXcQ"

SAMPLE_COURSES = [
    ("JEE Chemistry", "Comprehensive course covering all chemistry topics for JEE preparation."),
    ("NEET Biology", "Complete biology preparation for NEET aspirants with detailed explanations."),
]

# (course index, week name, title, offset from now, description)
SAMPLE_LECTURES = [
    (0, "Week 1", "Atomic Structure - Basics", timedelta(days=1),
     "Introduction to atomic structure and basic principles of chemistry."),
    (0, "Week 1", "Chemical Bonding", timedelta(days=2),
     "Understanding different types of chemical bonds and their properties."),
    (0, "Week 2", "Thermodynamics Part 1", timedelta(days=-2),
     "First laws of thermodynamics and their applications."),
    (1, "Week 1", "Cell Structure & Functions", timedelta(minutes=10),
     "Detailed explanation of cell organelles and their functions."),
    (1, "Week 1", "Plant Physiology", timedelta(minutes=-30),
     "Understanding plant growth, development and physiological processes."),
    (1, "Week 2", "Human Anatomy Basics", timedelta(days=3),
     "Introduction to major organ systems in the human body."),
]


def seed_sample_catalog(db: Session, now: datetime) -> dict:
    """
    Insert two sample courses with two weeks each and lectures spread
    around ``now``, so every lecture status is represented.
    """
    courses = [models.Course(name=name, description=desc) for name, desc in SAMPLE_COURSES]
    db.add_all(courses)

    weeks = {}
    for idx, course in enumerate(courses):
        for name in ("Week 1", "Week 2"):
            week = models.Week(name=name)
            course.weeks.append(week)
            weeks[(idx, name)] = week

    lectures = []
    for idx, week_name, title, offset, desc in SAMPLE_LECTURES:
        lecture = models.Lecture(
            title=title,
            description=desc,
            youtube_id=PLACEHOLDER_VIDEO,
            scheduled_time=now + offset,
        )
        courses[idx].lectures.append(lecture)
        weeks[(idx, week_name)].lectures.append(lecture)
        lectures.append(lecture)

    db.commit()
    logger.info("Seeded %d courses, %d weeks, %d lectures", len(courses), len(weeks), len(lectures))
    return {"courses": len(courses), "weeks": len(weeks), "lectures": len(lectures)}
