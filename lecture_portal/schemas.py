from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .utils.lecture_status import LectureStatus, as_utc


class CourseCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class CourseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class WeekCreate(BaseModel):
    course_id: str
    name: str = Field(..., min_length=1)


class WeekUpdate(BaseModel):
    name: str = Field(..., min_length=1)


class LectureCreate(BaseModel):
    course_id: str
    week_id: str
    title: str = Field(..., min_length=1)
    youtube_id: str = Field(..., min_length=1)
    scheduled_time: datetime
    description: Optional[str] = None

    @field_validator("scheduled_time")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class LectureUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    youtube_id: Optional[str] = Field(None, min_length=1)
    scheduled_time: Optional[datetime] = None
    description: Optional[str] = None

    @field_validator("scheduled_time")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


# Snapshots handed out by the catalog repository; frozen so callers cannot
# mutate what they were given.

class LectureOut(BaseModel):
    id: str
    course_id: str
    week_id: str
    title: str
    description: Optional[str]
    youtube_id: str
    scheduled_time: datetime

    @field_validator("scheduled_time")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    class Config:
        from_attributes = True
        frozen = True


class WeekOut(BaseModel):
    id: str
    course_id: str
    name: str
    lectures: List[LectureOut]

    class Config:
        from_attributes = True
        frozen = True


class CourseOut(BaseModel):
    id: str
    name: str
    description: Optional[str]
    weeks: List[WeekOut]

    class Config:
        from_attributes = True
        frozen = True


class CountdownOut(BaseModel):
    days: int
    hours: int
    minutes: int

    class Config:
        from_attributes = True


class LectureView(LectureOut):
    status: LectureStatus
    countdown: Optional[CountdownOut]
    starts_in: str


class WeekView(BaseModel):
    id: str
    course_id: str
    name: str
    lectures: List[LectureView]


class CourseView(BaseModel):
    id: str
    name: str
    description: Optional[str]
    weeks: List[WeekView]


class LectureDetail(LectureView):
    course_name: str
    week_name: str
    embed_url: str
    chat_url: str


class ScheduleOut(BaseModel):
    upcoming: List[LectureView]
    live: List[LectureView]
    completed: List[LectureView]


class DashboardOut(BaseModel):
    is_admin: bool
    live: List[LectureView]
    upcoming: List[LectureView]
    courses: List[CourseView]


class VideoInfo(BaseModel):
    youtube_id: str
    embed_url: str
    title: Optional[str] = None
    author_name: Optional[str] = None
    thumbnail_url: Optional[str] = None


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1)
    mobile: Optional[str] = Field(None, pattern=r"^\d{10}$")
    referral_code: Optional[str] = None


class ReferredBy(BaseModel):
    rm_id: str
    lecture_id: str


class UserOut(BaseModel):
    id: str
    email: EmailStr
    name: str
    mobile: Optional[str]
    is_admin: bool
    created_at: datetime
    referred_by: Optional[ReferredBy]


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SignupOut(Token):
    user: UserOut
    redirect_to: str


class SetAdminRequest(BaseModel):
    email: EmailStr


class ReferralLanding(BaseModel):
    referral_detected: bool
    referral_code: Optional[str] = None
    lecture_id: Optional[str] = None


class ManagerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr


class ManagerOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    created_at: datetime
    link_count: int = 0
    client_count: int = 0


class LinkCreate(BaseModel):
    rm_id: str
    lecture_id: str


class LinkOut(BaseModel):
    referral_code: str
    rm_id: str
    lecture_id: str
    lecture_title: str
    created_at: datetime
    url: str


class ManagerLinks(BaseModel):
    manager: ManagerOut
    links: List[LinkOut]
