"""Handlebars 템플릿 저장을 위한 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from edux.database import Base
from edux.models.user import new_id

TEMPLATE_TYPES = ("brochure_package", "course_intro", "instructor_profile")


class Template(Base):
    __tablename__ = "templates"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False)
    type = Column(String(30), nullable=False, default="course_intro")
    html = Column(Text, nullable=False)
    css = Column(Text, nullable=False, default="")
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    __table_args__ = (
        Index("idx_template_type", "type", "created_at"),
    )
