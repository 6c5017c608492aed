"""키-값 형태의 앱 설정(브로셔 패키지 저장 포함) SQLAlchemy 모델입니다."""

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func

from edux.database import Base


class AppSetting(Base):
    __tablename__ = "app_settings"

    key = Column(String(200), primary_key=True)
    value = Column(JSON, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
