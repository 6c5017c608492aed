"""Course 조회 서비스 레이어입니다."""

from sqlalchemy.orm import Session

from edux.models.course import Course
from edux.schemas.course import CourseDetailOut, CourseListArgs, CourseOut
from edux.services.authorization_service import require_permission
from edux.services.brochure_render import build_course_template_data
from edux.services.tool_response import NotFoundError


def get_course(db: Session, token: str, course_id: str) -> CourseDetailOut:
    require_permission(db, token, "course.get", "코스 조회 권한이 없습니다.")
    data = build_course_template_data(db, course_id)
    if data is None:
        raise NotFoundError("코스를 찾을 수 없습니다.")
    return CourseDetailOut.model_validate({
        **data["course"],
        "instructors": data["instructors"],
        "lectures": data["lectures"],
        "schedules": data["schedules"],
    })


def list_courses(db: Session, args: CourseListArgs) -> dict:
    require_permission(db, args.token, "course.list", "코스 목록 조회 권한이 없습니다.")
    query = db.query(Course).filter(Course.deleted_at.is_(None))
    if args.query:
        query = query.filter(Course.title.contains(args.query.strip()))
    total = query.count()
    rows = (
        query.order_by(Course.created_at.desc(), Course.id.asc())
        .offset((args.page - 1) * args.page_size)
        .limit(args.page_size)
        .all()
    )
    return {"items": [CourseOut.model_validate(row).to_payload() for row in rows], "total": total}
