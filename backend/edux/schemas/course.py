"""Course/Lecture/Schedule 응답 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from edux.schemas.common import CamelModel, PageArgs
from edux.schemas.instructor import InstructorOut


class LectureOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    hours: Optional[float] = None
    goal: Optional[str] = None
    content: Optional[str] = None
    order: Optional[int] = None


class ScheduleOut(CamelModel):
    id: str
    course_id: str
    instructor_id: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None
    audience: Optional[str] = None
    remarks: Optional[str] = None
    instructor: Optional[InstructorOut] = None


class CourseOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    duration_hours: Optional[float] = None
    goal: Optional[str] = None
    content: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseDetailOut(CourseOut):
    instructors: List[InstructorOut] = Field(default_factory=list)
    lectures: List[LectureOut] = Field(default_factory=list)
    schedules: List[ScheduleOut] = Field(default_factory=list)


class CourseListArgs(PageArgs):
    query: Optional[str] = Field(default=None, description="제목 검색어")
