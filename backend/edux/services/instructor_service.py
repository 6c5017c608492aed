"""Instructor 조회 서비스 레이어입니다."""

from sqlalchemy.orm import Session

from edux.models.instructor import Instructor
from edux.schemas.instructor import InstructorDetailOut, InstructorListArgs, InstructorOut
from edux.services.authorization_service import require_permission
from edux.services.brochure_render import build_instructor_template_data
from edux.services.tool_response import NotFoundError


def get_instructor(db: Session, token: str, instructor_id: str) -> InstructorDetailOut:
    require_permission(db, token, "instructor.get", "강사 조회 권한이 없습니다.")
    data = build_instructor_template_data(db, instructor_id)
    if data is None:
        raise NotFoundError("강사를 찾을 수 없습니다.")
    return InstructorDetailOut.model_validate({
        **data["instructor"],
        "courses": data["courses"],
        "schedules": data["schedules"],
    })


def list_instructors(db: Session, args: InstructorListArgs) -> dict:
    require_permission(db, args.token, "instructor.list", "강사 목록 조회 권한이 없습니다.")
    query = db.query(Instructor).filter(Instructor.deleted_at.is_(None))
    if args.query:
        query = query.filter(Instructor.name.contains(args.query.strip()))
    total = query.count()
    rows = (
        query.order_by(Instructor.name.asc(), Instructor.id.asc())
        .offset((args.page - 1) * args.page_size)
        .limit(args.page_size)
        .all()
    )
    return {"items": [InstructorOut.model_validate(row).to_payload() for row in rows], "total": total}
