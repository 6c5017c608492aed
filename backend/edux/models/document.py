"""렌더 작업과 사용자 문서(내 문서함) SQLAlchemy 모델입니다."""

import threading
import time
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, Boolean, BigInteger, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from edux.database import Base
from edux.models.user import new_id

_seq_lock = threading.Lock()
_last_seq = 0


def next_sequence() -> int:
    """프로세스 안에서 단조 증가하는 삽입 순번. created_at이 같을 때 최신 판단에 쓴다."""
    global _last_seq
    with _seq_lock:
        _last_seq = max(time.time_ns(), _last_seq + 1)
        return _last_seq


class RenderJob(Base):
    __tablename__ = "render_jobs"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    template_id = Column(String(36), ForeignKey("templates.id"), nullable=True)
    target_type = Column(String(30), nullable=False)  # course/instructor_profile/brochure_package
    target_id = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending/processing/done/failed
    pdf_url = Column(String(500))
    error_message = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())


class UserDocument(Base):
    __tablename__ = "user_documents"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    render_job_id = Column(String(36), ForeignKey("render_jobs.id"), nullable=True)
    template_id = Column(String(36), ForeignKey("templates.id"), nullable=True)
    target_type = Column(String(30), nullable=False)
    target_id = Column(String(100), nullable=False)
    label = Column(String(300))
    pdf_url = Column(String(500))
    share_token = Column(String(64), unique=True, nullable=True)
    is_active = Column(Boolean, default=True)
    # 초 단위 server_default만으로는 같은 초에 생성된 문서의 선후를 가릴 수 없다.
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    seq = Column(BigInteger, nullable=False, default=next_sequence)
    updated_at = Column(DateTime, onupdate=func.now())

    render_job = relationship("RenderJob")
    template = relationship("Template")

    __table_args__ = (
        Index("idx_user_document_target", "user_id", "target_type", "target_id"),
    )
