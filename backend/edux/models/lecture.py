"""강의(코스 구성 단위) SQLAlchemy 모델입니다."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.sql import func

from edux.database import Base
from edux.models.user import new_id


class Lecture(Base):
    __tablename__ = "lectures"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    hours = Column(Float, nullable=True)
    goal = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
