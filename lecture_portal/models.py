from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .database import Base


def now():
    return datetime.now(timezone.utc)


def new_id():
    # hex ids never contain "-" and are therefore safe inside referral codes
    return uuid4().hex


class Course(Base):
    __tablename__ = "courses"
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(String)
    created_at = Column(DateTime(timezone=True), default=now)
    weeks = relationship(
        "Week", back_populates="course", cascade="all, delete-orphan", order_by="Week.name"
    )
    lectures = relationship("Lecture", back_populates="course", cascade="all, delete-orphan")


class Week(Base):
    __tablename__ = "weeks"
    id = Column(String, primary_key=True, index=True, default=new_id)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now)
    course = relationship("Course", back_populates="weeks")
    lectures = relationship(
        "Lecture",
        back_populates="week",
        cascade="all, delete-orphan",
        order_by="Lecture.scheduled_time",
    )


class Lecture(Base):
    __tablename__ = "lectures"
    id = Column(String, primary_key=True, index=True, default=new_id)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False)
    week_id = Column(String, ForeignKey("weeks.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String)
    youtube_id = Column(String, nullable=False)
    scheduled_time = Column(DateTime(timezone=True), nullable=False, index=True)
    course = relationship("Course", back_populates="lectures")
    week = relationship("Week", back_populates="lectures")
    referral_links = relationship("ReferralLink", back_populates="lecture", cascade="all, delete-orphan")


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, index=True, default=new_id)
    email = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    mobile = Column(String)
    password_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now)
    # referral attribution, recorded once at signup
    referral_code = Column(String)
    referred_by_rm_id = Column(String, index=True)
    referred_lecture_id = Column(String)


class ReferralManager(Base):
    __tablename__ = "referral_managers"
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), default=now)
    links = relationship("ReferralLink", back_populates="manager", cascade="all, delete-orphan")


class ReferralLink(Base):
    __tablename__ = "referral_links"
    __table_args__ = (UniqueConstraint("rm_id", "lecture_id", name="uq_referral_link"),)
    referral_code = Column(String, primary_key=True)
    rm_id = Column(String, ForeignKey("referral_managers.id"), nullable=False)
    lecture_id = Column(String, ForeignKey("lectures.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now)
    manager = relationship("ReferralManager", back_populates="links")
    lecture = relationship("Lecture", back_populates="referral_links")
