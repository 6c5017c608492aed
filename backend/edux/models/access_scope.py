"""사용자/그룹/역할 단위 권한 부여(allow/deny) 모델 정의입니다."""

from sqlalchemy import Column, String, ForeignKey, DateTime, Index
from sqlalchemy.sql import func

from edux.database import Base
from edux.models.user import new_id


class PermissionGrant(Base):
    __tablename__ = "permission_grants"

    id = Column(String(36), primary_key=True, default=new_id)
    permission_key = Column(String(100), nullable=False)  # "document.list", "course.*", "*"
    effect = Column(String(10), nullable=False)  # allow/deny
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=True)
    role = Column(String(20), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_permission_grant_user", "user_id"),
        Index("idx_permission_grant_group", "group_id"),
        Index("idx_permission_grant_role", "role"),
    )
