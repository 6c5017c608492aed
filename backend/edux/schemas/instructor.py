"""Instructor/InstructorProfile 응답 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, JsonValue

from edux.schemas.common import CamelModel, PageArgs


class InstructorOut(CamelModel):
    id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    affiliation: Optional[str] = None
    tagline: Optional[str] = None
    bio: Optional[str] = None
    links: JsonValue = None
    created_at: Optional[datetime] = None


class InstructorProfileOut(CamelModel):
    id: str
    user_id: str
    display_name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    affiliation: Optional[str] = None
    email: Optional[str] = None
    links: JsonValue = None


class InstructorCourseOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    duration_hours: Optional[float] = None
    goal: Optional[str] = None


class InstructorScheduleOut(CamelModel):
    id: str
    course_id: str
    date: Optional[datetime] = None
    location: Optional[str] = None


class InstructorDetailOut(InstructorOut):
    courses: List[InstructorCourseOut] = Field(default_factory=list)
    schedules: List[InstructorScheduleOut] = Field(default_factory=list)


class InstructorListArgs(PageArgs):
    query: Optional[str] = Field(default=None, description="이름 검색어")
