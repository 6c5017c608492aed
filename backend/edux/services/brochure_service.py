"""브로셔 패키지 생성/조회 서비스 레이어입니다.

생성 흐름: 포함 옵션 검증 -> 권한 확인 -> 템플릿 조회 -> 소스 해석 -> 섹션 렌더 ->
패키지 조립 -> 단일 트랜잭션 저장(app_settings, render_jobs, user_documents).
"""

import logging
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from edux.models.document import RenderJob, UserDocument
from edux.models.site_setting import AppSetting
from edux.models.template import Template
from edux.schemas.brochure import (
    BrochureCourse,
    BrochureCreateArgs,
    BrochureInstructor,
    BrochurePackage,
)
from edux.schemas.document import UserDocumentOut
from edux.services import brochure_render
from edux.services.authorization_service import require_permission
from edux.services.brochure_sources import (
    RENDER_DONE,
    TARGET_BROCHURE_PACKAGE,
    resolve_brochure_sources,
)
from edux.services.template_engine import render_template
from edux.services.tool_response import NotFoundError, ValidationFailed
from edux.utils.html import wrap_document
from edux.utils.pdf_print_styles import PDF_PRINT_HELPER_CSS

logger = logging.getLogger(__name__)

PERMISSION_KEY = "document.list"
SETTING_KEY_PREFIX = "brochure.package."


@dataclass(frozen=True)
class ComposeOptions:
    title: str
    summary: str = ""
    include_toc: bool = True
    include_courses: bool = True
    include_instructors: bool = True
    content_order: str = "course-first"
    output_mode: str = "both"


@dataclass(frozen=True)
class ComposedPackage:
    package_id: str
    html: str

    @property
    def url(self) -> str:
        return brochure_url(self.package_id)


def setting_key(package_id: str) -> str:
    return f"{SETTING_KEY_PREFIX}{package_id}"


def brochure_url(package_id: str) -> str:
    return f"/brochure/{package_id}"


def new_package_id() -> str:
    return f"brochure_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


def _get_template(db: Session, template_id: Optional[str], template_type: str) -> Optional[Template]:
    if not template_id:
        return None
    return (
        db.query(Template)
        .filter(Template.id == template_id, Template.type == template_type, Template.deleted_at.is_(None))
        .first()
    )


def compose_package(
    template: Template,
    courses: Sequence[BrochureCourse],
    instructors: Sequence[BrochureInstructor],
    options: ComposeOptions,
) -> ComposedPackage:
    context = {
        "brochure": {
            "title": options.title,
            "summary": options.summary or "",
            "includeToc": options.include_toc,
            "includeCourses": options.include_courses,
            "includeInstructors": options.include_instructors,
            # 실제 배치 순서는 템플릿이 이 값을 보고 결정한다.
            "courseFirst": options.content_order != "instructor-first",
            "outputMode": options.output_mode,
        },
        "courses": [row.to_payload(exclude_none=True) for row in courses],
        "instructors": [row.to_payload(exclude_none=True) for row in instructors],
    }
    body = render_template(template.html, context)
    return ComposedPackage(
        package_id=new_package_id(),
        html=wrap_document(body, template.css, PDF_PRINT_HELPER_CSS),
    )


def _upsert_setting(db: Session, key: str, value: Dict[str, Any], now: datetime) -> AppSetting:
    row = db.query(AppSetting).filter(AppSetting.key == key).first()
    if row is None:
        row = AppSetting(key=key, value=value)
        db.add(row)
    else:
        row.value = value
        row.updated_at = now
    db.flush()
    return row


def _create_render_job(db: Session, *, user_id: str, template_id: str, package_id: str) -> RenderJob:
    row = RenderJob(
        user_id=user_id,
        template_id=template_id,
        target_type=TARGET_BROCHURE_PACKAGE,
        target_id=package_id,
        # 렌더링은 요청 안에서 이미 끝났다.
        status=RENDER_DONE,
        pdf_url=brochure_url(package_id),
    )
    db.add(row)
    db.flush()
    return row


def _create_user_document(
    db: Session,
    *,
    user_id: str,
    render_job: RenderJob,
    template_id: str,
    package_id: str,
    label: str,
) -> UserDocument:
    row = UserDocument(
        user_id=user_id,
        render_job_id=render_job.id,
        template_id=template_id,
        target_type=TARGET_BROCHURE_PACKAGE,
        target_id=package_id,
        label=label,
        pdf_url=brochure_url(package_id),
        is_active=True,
    )
    db.add(row)
    db.flush()
    return row


def commit_package(
    db: Session,
    *,
    package: BrochurePackage,
    label: str,
) -> tuple[RenderJob, UserDocument]:
    """세 저장소 쓰기를 한 트랜잭션으로 묶는다. 하나라도 실패하면 전부 롤백한다."""
    now = datetime.now(timezone.utc)
    try:
        _upsert_setting(db, setting_key(package.id), package.to_payload(), now)
        job = _create_render_job(
            db,
            user_id=package.user_id,
            template_id=package.template_id,
            package_id=package.id,
        )
        doc = _create_user_document(
            db,
            user_id=package.user_id,
            render_job=job,
            template_id=package.template_id,
            package_id=package.id,
            label=label,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("[brochure] commit failed package=%s", package.id)
        raise
    db.refresh(job)
    db.refresh(doc)
    return job, doc


def _ensure_resolved(include_course: bool, include_instructor: bool, courses: List, instructors: List):
    if include_course and not courses:
        raise NotFoundError("포함할 강의 데이터를 찾을 수 없습니다.")
    if include_instructor and not instructors:
        raise NotFoundError("포함할 강사 데이터를 찾을 수 없습니다.")


def create_brochure(db: Session, args: BrochureCreateArgs) -> Dict[str, Any]:
    # 데이터 조회 전에 포함 옵션부터 검증한다.
    if not args.include_course and not args.include_instructor:
        raise ValidationFailed("강의 또는 강사 중 최소 하나는 포함해야 합니다.")

    user = require_permission(db, args.token, PERMISSION_KEY, "브로셔 저장 권한이 없습니다.")

    template = _get_template(db, args.brochure_template_id, "brochure_package")
    if template is None:
        raise NotFoundError("브로셔 템플릿을 찾을 수 없습니다.")
    course_template = _get_template(db, args.course_template_id, "course_intro")
    instructor_template = _get_template(db, args.instructor_template_id, "instructor_profile")

    resolved = resolve_brochure_sources(
        db,
        user_id=user.id,
        source_mode=args.source_mode,
        include_course=args.include_course,
        include_instructor=args.include_instructor,
        source_course_doc_ids=args.source_course_doc_ids,
        source_instructor_doc_ids=args.source_instructor_doc_ids,
        source_course_ids=args.source_course_ids,
        source_instructor_ids=args.source_instructor_ids,
    )
    _ensure_resolved(args.include_course, args.include_instructor, resolved.courses, resolved.instructors)

    courses, instructors = brochure_render.render_sections(
        db,
        resolved.courses,
        resolved.instructors,
        course_template=course_template,
        instructor_template=instructor_template,
    )

    composed = compose_package(
        template,
        courses,
        instructors,
        ComposeOptions(
            title=args.title,
            summary=args.summary or "",
            include_toc=args.include_toc,
            include_courses=args.include_course,
            include_instructors=args.include_instructor,
            content_order=args.content_order,
            output_mode=args.output_mode,
        ),
    )

    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    package = BrochurePackage(
        id=composed.package_id,
        user_id=user.id,
        title=args.title,
        summary=args.summary or "",
        source_mode=args.source_mode,
        include_toc=args.include_toc,
        include_course=args.include_course,
        include_instructor=args.include_instructor,
        content_order=args.content_order,
        output_mode=args.output_mode,
        render_batch_token=args.render_batch_token or None,
        template_id=template.id,
        template_name=template.name,
        course_template_id=course_template.id if course_template else None,
        course_template_name=course_template.name if course_template else None,
        instructor_template_id=instructor_template.id if instructor_template else None,
        instructor_template_name=instructor_template.name if instructor_template else None,
        source_course_doc_ids=list(args.source_course_doc_ids),
        source_instructor_doc_ids=list(args.source_instructor_doc_ids),
        source_course_ids=resolved.course_ids,
        source_instructor_ids=resolved.instructor_ids,
        html=composed.html,
        created_at=timestamp,
        updated_at=timestamp,
    )
    job, doc = commit_package(db, package=package, label=args.title)
    logger.info(
        "[brochure] created package=%s user=%s courses=%d instructors=%d",
        package.id,
        user.id,
        len(courses),
        len(instructors),
    )
    return {
        "id": package.id,
        "url": composed.url,
        "renderJobId": job.id,
        "document": UserDocumentOut.model_validate(doc).to_payload(),
    }


def load_package(db: Session, package_id: str) -> Optional[Dict[str, Any]]:
    row = db.query(AppSetting).filter(AppSetting.key == setting_key(package_id)).first()
    if row is None or not isinstance(row.value, dict):
        return None
    return row.value


def get_brochure(db: Session, token: str, package_id: str) -> Dict[str, Any]:
    user = require_permission(db, token, PERMISSION_KEY, "브로셔 조회 권한이 없습니다.")
    value = load_package(db, package_id)
    if not value or value.get("userId") != user.id:
        raise NotFoundError("브로셔를 찾을 수 없습니다.")
    return value


def get_brochure_html(db: Session, package_id: str) -> Optional[str]:
    value = load_package(db, package_id)
    html = value.get("html") if value else None
    return html if isinstance(html, str) and html else None
