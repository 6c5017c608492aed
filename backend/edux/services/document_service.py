"""내 문서함 서비스 레이어입니다. 문서 목록/삭제/공유 규칙을 캡슐화합니다."""

import logging
import secrets
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session, joinedload

from edux.config import settings
from edux.models.document import UserDocument
from edux.models.site_setting import AppSetting
from edux.schemas.common import PageArgs
from edux.schemas.document import DocumentPage, DocumentShareArgs, UserDocumentOut
from edux.services.authorization_service import require_permission
from edux.services.brochure_service import setting_key
from edux.services.brochure_sources import TARGET_BROCHURE_PACKAGE, TARGET_COURSE, TARGET_INSTRUCTOR_PROFILE
from edux.services.tool_response import NotFoundError, ToolError

logger = logging.getLogger(__name__)

SHARE_TOKEN_ATTEMPTS = 5

# 브로셔 배치 렌더로 만들어진 강의/강사 문서는 라벨에 이 표식과 배치 토큰을 담는다.
BATCH_LABEL_MARKER = "brochure-batch:"
BATCH_ARTIFACT_TYPES = (TARGET_COURSE, TARGET_INSTRUCTOR_PROFILE)


def _get_owned_document(db: Session, *, user_id: str, document_id: str, active_only: bool = True) -> UserDocument:
    query = db.query(UserDocument).filter(UserDocument.id == document_id, UserDocument.user_id == user_id)
    if active_only:
        query = query.filter(UserDocument.is_active == True)  # noqa: E712
    row = query.first()
    if not row:
        raise NotFoundError("문서를 찾을 수 없습니다.")
    return row


def list_documents(db: Session, args: PageArgs) -> DocumentPage:
    user = require_permission(db, args.token, "document.list", "문서 목록 조회 권한이 없습니다.")
    page_size = min(args.page_size, settings.DOCUMENT_PAGE_SIZE_MAX)
    base = db.query(UserDocument).filter(
        UserDocument.user_id == user.id,
        UserDocument.is_active == True,  # noqa: E712
    )
    total = base.count()
    rows = (
        base.options(joinedload(UserDocument.template), joinedload(UserDocument.render_job))
        .order_by(UserDocument.created_at.desc(), UserDocument.seq.desc())
        .offset((args.page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return DocumentPage(items=[UserDocumentOut.model_validate(row) for row in rows], total=total)


def _batch_token(db: Session, package_id: str) -> Optional[str]:
    row = db.query(AppSetting).filter(AppSetting.key == setting_key(package_id)).first()
    value = row.value if row else None
    token = value.get("renderBatchToken") if isinstance(value, dict) else None
    if isinstance(token, str) and token.strip():
        return token.strip()
    return None


def delete_document(db: Session, token: str, document_id: str) -> Dict[str, Any]:
    user = require_permission(db, token, "document.delete", "문서 삭제 권한이 없습니다.")
    doc = _get_owned_document(db, user_id=user.id, document_id=document_id, active_only=False)
    target_type = doc.target_type
    try:
        if target_type == TARGET_BROCHURE_PACKAGE:
            # 패키지 문서와 저장된 스냅샷, 같은 배치로 렌더된 강의/강사 산출물을 함께 지운다.
            # render_job은 다른 문서가 참조할 수 있어 남긴다.
            batch_token = _batch_token(db, doc.target_id)
            (
                db.query(UserDocument)
                .filter(
                    UserDocument.user_id == user.id,
                    UserDocument.target_type == TARGET_BROCHURE_PACKAGE,
                    UserDocument.target_id == doc.target_id,
                )
                .delete(synchronize_session=False)
            )
            db.query(AppSetting).filter(AppSetting.key == setting_key(doc.target_id)).delete(
                synchronize_session=False
            )
            if batch_token:
                (
                    db.query(UserDocument)
                    .filter(
                        UserDocument.user_id == user.id,
                        UserDocument.target_type.in_(BATCH_ARTIFACT_TYPES),
                        UserDocument.label.contains(batch_token, autoescape=True),
                    )
                    .delete(synchronize_session=False)
                )
        elif target_type in BATCH_ARTIFACT_TYPES and BATCH_LABEL_MARKER in (doc.label or ""):
            # 배치 렌더 산출물은 숨기지 않고 바로 지운다.
            db.delete(doc)
        else:
            doc.is_active = False
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("[document] deleted id=%s type=%s user=%s", document_id, target_type, user.id)
    return {"id": document_id}


def _generate_share_token(db: Session) -> str:
    for _ in range(SHARE_TOKEN_ATTEMPTS):
        token = secrets.token_hex(16)
        exists = db.query(UserDocument.id).filter(UserDocument.share_token == token).first()
        if not exists:
            return token
    raise ToolError("공유 토큰 생성에 실패했습니다.")


def share_document(db: Session, args: DocumentShareArgs) -> Dict[str, Any]:
    user = require_permission(db, args.token, "document.share", "문서 공유 권한이 없습니다.")
    doc = _get_owned_document(db, user_id=user.id, document_id=args.id)
    if not doc.share_token or args.regenerate:
        doc.share_token = _generate_share_token(db)
        db.commit()
        db.refresh(doc)
    return {"id": doc.id, "shareToken": doc.share_token}


def revoke_share(db: Session, token: str, document_id: str) -> Dict[str, Any]:
    user = require_permission(db, token, "document.revokeShare", "문서 공유 해제 권한이 없습니다.")
    doc = _get_owned_document(db, user_id=user.id, document_id=document_id)
    doc.share_token = None
    db.commit()
    return {"id": doc.id, "shareToken": None}
