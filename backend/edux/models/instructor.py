"""강사/강사 프로필 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from edux.database import Base
from edux.models.user import new_id


class Instructor(Base):
    __tablename__ = "instructors"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    name = Column(String(100), nullable=False)
    title = Column(String(200))
    email = Column(String(200))
    phone = Column(String(50))
    affiliation = Column(String(200))
    tagline = Column(String(300))
    bio = Column(Text)
    links = Column(JSON)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    user = relationship("User", foreign_keys=[user_id])
    course_links = relationship("CourseInstructor", back_populates="instructor")
    schedules = relationship("Schedule", back_populates="instructor")

    __table_args__ = (
        Index("idx_instructor_user", "user_id"),
    )


class InstructorProfile(Base):
    """사용자가 직접 관리하는 강사 프로필. Instructor와는 user_id로만 연결된다."""

    __tablename__ = "instructor_profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    display_name = Column(String(100))
    title = Column(String(200))
    bio = Column(Text)
    affiliation = Column(String(200))
    email = Column(String(200))
    links = Column(JSON)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    user = relationship("User", back_populates="instructor_profile")
