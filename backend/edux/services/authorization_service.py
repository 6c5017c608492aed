"""권한 판정 서비스입니다. 사용자/그룹/역할 grant를 조회해 판정 규칙에 위임합니다."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from edux.models.access_scope import PermissionGrant
from edux.models.user import Group, GroupMember, User
from edux.services.auth_service import verify_and_get_actor
from edux.services.tool_response import PermissionDeniedError
from edux.utils.permissions import PermissionDecision, evaluate_permission_decision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActorDecision:
    decision: PermissionDecision
    actor: User


def _active_grants(db: Session):
    return db.query(PermissionGrant).filter(PermissionGrant.deleted_at.is_(None))


def _group_ids(db: Session, user: User) -> list[str]:
    rows = (
        db.query(GroupMember.group_id)
        .join(Group, Group.id == GroupMember.group_id)
        .filter(
            GroupMember.user_id == user.id,
            GroupMember.deleted_at.is_(None),
            Group.deleted_at.is_(None),
            Group.is_active == True,  # noqa: E712
        )
        .all()
    )
    return [str(row[0]) for row in rows]


def evaluate_permission(db: Session, token: str, permission_key: str) -> ActorDecision:
    actor = verify_and_get_actor(db, token)
    group_ids = _group_ids(db, actor)
    user_grants = _active_grants(db).filter(PermissionGrant.user_id == actor.id).all()
    group_grants = (
        _active_grants(db).filter(PermissionGrant.group_id.in_(group_ids)).all()
        if group_ids
        else []
    )
    role_grants = _active_grants(db).filter(PermissionGrant.role == actor.role).all()
    decision = evaluate_permission_decision(
        actor.role,
        permission_key,
        user_grants=user_grants,
        group_grants=group_grants,
        role_grants=role_grants,
    )
    return ActorDecision(decision=decision, actor=actor)


def require_permission(
    db: Session,
    token: str,
    permission_key: str,
    error_message: str = "권한이 없습니다.",
) -> User:
    result = evaluate_permission(db, token, permission_key)
    if not result.decision.allowed:
        logger.info(
            "[authz] denied user=%s key=%s reason=%s",
            result.actor.id,
            permission_key,
            result.decision.reason,
        )
        raise PermissionDeniedError(error_message)
    return result.actor
