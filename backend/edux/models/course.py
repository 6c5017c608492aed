"""Course 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from edux.database import Base
from edux.models.user import new_id


class Course(Base):
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    duration_hours = Column(Float)
    goal = Column(Text)
    content = Column(Text)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    instructor_links = relationship("CourseInstructor", back_populates="course")
    lecture_links = relationship(
        "CourseLecture",
        back_populates="course",
        order_by="CourseLecture.order",
    )
    schedules = relationship("Schedule", back_populates="course")


class CourseInstructor(Base):
    __tablename__ = "course_instructors"

    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True)
    instructor_id = Column(String(36), ForeignKey("instructors.id", ondelete="CASCADE"), primary_key=True)

    course = relationship("Course", back_populates="instructor_links")
    instructor = relationship("Instructor", back_populates="course_links")


class CourseLecture(Base):
    __tablename__ = "course_lectures"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    lecture_id = Column(String(36), ForeignKey("lectures.id", ondelete="CASCADE"), nullable=False)
    order = Column(Integer, nullable=False, default=0)

    course = relationship("Course", back_populates="lecture_links")
    lecture = relationship("Lecture")

    __table_args__ = (
        UniqueConstraint("course_id", "lecture_id", name="uq_course_lecture"),
        Index("idx_course_lecture_order", "course_id", "order"),
    )
