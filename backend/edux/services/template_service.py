"""템플릿 서비스 레이어입니다."""

from typing import Any, Dict

from sqlalchemy.orm import Session

from edux.models.template import Template
from edux.schemas.template import TemplateCreateArgs, TemplateListArgs, TemplateOut, TemplatePreviewArgs
from edux.services.authorization_service import require_permission
from edux.services.template_engine import render_template
from edux.services.tool_response import NotFoundError
from edux.utils.html import wrap_document


def create_template(db: Session, args: TemplateCreateArgs) -> Dict[str, Any]:
    user = require_permission(db, args.token, "template.update", "템플릿 생성 권한이 없습니다.")
    row = Template(
        name=args.name,
        type=args.type,
        html=args.html,
        css=args.css,
        created_by=user.id,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return {"id": row.id, "name": row.name, "type": row.type}


def get_template(db: Session, token: str, template_id: str) -> TemplateOut:
    require_permission(db, token, "template.read", "템플릿 조회 권한이 없습니다.")
    row = (
        db.query(Template)
        .filter(Template.id == template_id, Template.deleted_at.is_(None))
        .first()
    )
    if not row:
        raise NotFoundError(f"템플릿을 찾을 수 없습니다: {template_id}")
    return TemplateOut.model_validate(row)


def list_templates(db: Session, args: TemplateListArgs) -> Dict[str, Any]:
    require_permission(db, args.token, "template.read", "템플릿 조회 권한이 없습니다.")
    query = db.query(Template).filter(Template.deleted_at.is_(None))
    if args.type:
        query = query.filter(Template.type == args.type)
    total = query.count()
    rows = (
        query.order_by(Template.created_at.desc(), Template.id.desc())
        .offset((args.page - 1) * args.page_size)
        .limit(args.page_size)
        .all()
    )
    return {
        "items": [TemplateOut.model_validate(row).to_payload() for row in rows],
        "total": total,
    }


def preview_html(db: Session, args: TemplatePreviewArgs) -> str:
    require_permission(db, args.token, "template.use", "템플릿 사용 권한이 없습니다.")
    return wrap_document(render_template(args.html, args.data), args.css)
