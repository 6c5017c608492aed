"""Schedule 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from edux.database import Base
from edux.models.user import new_id


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False)
    instructor_id = Column(String(36), ForeignKey("instructors.id"), nullable=True)
    date = Column(DateTime, nullable=True)
    location = Column(String(200))
    audience = Column(String(200))
    remarks = Column(Text)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    course = relationship("Course", back_populates="schedules")
    instructor = relationship("Instructor", back_populates="schedules")

    __table_args__ = (
        Index("idx_schedule_course", "course_id", "date"),
    )
