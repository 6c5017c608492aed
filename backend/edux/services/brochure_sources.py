"""브로셔에 포함할 강의/강사 레코드를 데이터 소스 모드별로 해석합니다.

두 모드를 지원한다.

- ``my_documents``: 사용자가 고른 내 문서(UserDocument) ID 목록에서 대상을 찾는다.
  강사 문서는 InstructorProfile.id를 대상으로 하므로 Instructor.id로 다시 키를 맞추고,
  Instructor 행이 없는 프로필은 프로필/사용자 정보로 만든 대체 행으로 남긴다.
- ``edux``: 전달된 Course/Instructor ID를 그대로 사용하고 최신 PDF만 따로 찾는다.

어느 모드든 결과 순서는 호출자가 넘긴 ID 순서를 따른다.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from edux.models.course import Course
from edux.models.document import RenderJob, UserDocument
from edux.models.instructor import Instructor, InstructorProfile
from edux.models.user import User
from edux.schemas.brochure import BrochureCourse, BrochureInstructor

logger = logging.getLogger(__name__)

MY_DOCUMENTS = "my_documents"
EDUX = "edux"

TARGET_COURSE = "course"
TARGET_INSTRUCTOR_PROFILE = "instructor_profile"
TARGET_BROCHURE_PACKAGE = "brochure_package"

RENDER_DONE = "done"

# 요청 목록에 없는 대상은 맨 뒤로 보낸다.
UNORDERED = float("inf")


@dataclass
class ResolvedSources:
    courses: List[BrochureCourse] = field(default_factory=list)
    instructors: List[BrochureInstructor] = field(default_factory=list)
    course_ids: List[str] = field(default_factory=list)
    instructor_ids: List[str] = field(default_factory=list)


def unique_ids(values: Optional[Iterable[str]]) -> List[str]:
    seen = set()
    rows: List[str] = []
    for raw in values or []:
        value = str(raw or "").strip()
        if not value or value in seen:
            continue
        seen.add(value)
        rows.append(value)
    return rows


def position_map(ids: Sequence[str]) -> Dict[str, int]:
    return {value: idx for idx, value in enumerate(ids)}


def _ready_pdf_url(doc: UserDocument, status: Optional[str]) -> Optional[str]:
    if status != RENDER_DONE or not doc.pdf_url:
        return None
    return doc.pdf_url


def latest_pdf_map(
    db: Session,
    *,
    user_id: str,
    target_type: str,
    target_ids: Sequence[str],
) -> Dict[str, str]:
    """대상별 가장 최근 문서 한 건만 본다. 그 문서의 렌더가 끝나지 않았으면 PDF 없음으로 처리한다."""
    if not target_ids:
        return {}
    rows = (
        db.query(UserDocument, RenderJob.status)
        .outerjoin(RenderJob, RenderJob.id == UserDocument.render_job_id)
        .filter(
            UserDocument.user_id == user_id,
            UserDocument.is_active == True,  # noqa: E712
            UserDocument.target_type == target_type,
            UserDocument.target_id.in_(list(target_ids)),
        )
        .order_by(UserDocument.created_at.desc(), UserDocument.seq.desc())
        .all()
    )
    decided = set()
    payload: Dict[str, str] = {}
    for doc, status in rows:
        if doc.target_id in decided:
            continue
        decided.add(doc.target_id)
        pdf_url = _ready_pdf_url(doc, status)
        if pdf_url:
            payload[doc.target_id] = pdf_url
    return payload


def _fetch_courses(db: Session, course_ids: Sequence[str]) -> List[Course]:
    if not course_ids:
        return []
    return (
        db.query(Course)
        .filter(Course.id.in_(list(course_ids)), Course.deleted_at.is_(None))
        .all()
    )


def _fetch_instructors(db: Session, instructor_ids: Sequence[str]) -> List[Instructor]:
    if not instructor_ids:
        return []
    return (
        db.query(Instructor)
        .filter(Instructor.id.in_(list(instructor_ids)), Instructor.deleted_at.is_(None))
        .all()
    )


def _sort_by_ids(rows, ids: Sequence[str]):
    order = position_map(ids)
    return sorted(rows, key=lambda row: order.get(row.id, 0))


def _instructor_record(instructor: Instructor, pdf_url: Optional[str]) -> BrochureInstructor:
    return BrochureInstructor(
        id=instructor.id,
        name=instructor.name or None,
        title=instructor.title or None,
        email=instructor.email or None,
        affiliation=instructor.affiliation or None,
        tagline=instructor.tagline or None,
        bio=instructor.bio or None,
        pdf_url=pdf_url,
    )


def _profile_record(
    profile: InstructorProfile,
    user: User,
    pdf_url: Optional[str],
) -> BrochureInstructor:
    return BrochureInstructor(
        id=profile.id,
        name=profile.display_name or user.name or None,
        title=profile.title or None,
        email=profile.email or user.email or None,
        affiliation=profile.affiliation or None,
        tagline=None,
        bio=profile.bio or None,
        pdf_url=pdf_url,
    )


def _load_selected_documents(
    db: Session,
    *,
    user_id: str,
    doc_ids: Sequence[str],
) -> List[tuple]:
    if not doc_ids:
        return []
    rows = (
        db.query(UserDocument, RenderJob.status)
        .outerjoin(RenderJob, RenderJob.id == UserDocument.render_job_id)
        .filter(
            UserDocument.user_id == user_id,
            UserDocument.is_active == True,  # noqa: E712
            UserDocument.id.in_(list(doc_ids)),
        )
        .all()
    )
    order = position_map(doc_ids)
    return sorted(rows, key=lambda row: order.get(row[0].id, UNORDERED))


def _first_ready_pdf_by_target(rows: Iterable[tuple]) -> Dict[str, str]:
    payload: Dict[str, str] = {}
    for doc, status in rows:
        pdf_url = _ready_pdf_url(doc, status)
        if pdf_url and doc.target_id not in payload:
            payload[doc.target_id] = pdf_url
    return payload


def _resolve_profile_instructors(
    db: Session,
    profile_ids: List[str],
    pdf_by_profile_id: Dict[str, str],
) -> tuple[List[BrochureInstructor], List[str]]:
    profiles = (
        db.query(InstructorProfile)
        .filter(InstructorProfile.id.in_(profile_ids))
        .all()
    )
    user_ids = unique_ids(profile.user_id for profile in profiles)
    instructors = (
        db.query(Instructor)
        .filter(Instructor.user_id.in_(user_ids), Instructor.deleted_at.is_(None))
        .order_by(Instructor.created_at.asc(), Instructor.id.asc())
        .all()
        if user_ids
        else []
    )
    users = (
        db.query(User)
        .filter(User.id.in_(user_ids), User.deleted_at.is_(None), User.is_active == True)  # noqa: E712
        .all()
        if user_ids
        else []
    )
    user_by_id = {user.id: user for user in users}
    instructor_by_user_id: Dict[str, Instructor] = {}
    for instructor in instructors:
        instructor_by_user_id.setdefault(instructor.user_id, instructor)

    profile_order = position_map(profile_ids)
    ranked: List[tuple] = []
    for profile in profiles:
        order = profile_order.get(profile.id, UNORDERED)
        pdf_url = pdf_by_profile_id.get(profile.id)
        instructor = instructor_by_user_id.get(profile.user_id)
        if instructor is not None:
            ranked.append((order, instructor.id, _instructor_record(instructor, pdf_url)))
            continue
        user = user_by_id.get(profile.user_id)
        if user is None:
            logger.debug("[brochure] skip profile without active user profile=%s", profile.id)
            continue
        ranked.append((order, profile.id, _profile_record(profile, user, pdf_url)))

    ranked.sort(key=lambda row: row[0])
    records: List[BrochureInstructor] = []
    instructor_ids: List[str] = []
    for _order, instructor_id, record in ranked:
        if instructor_id in instructor_ids:
            continue
        instructor_ids.append(instructor_id)
        records.append(record)
    return records, instructor_ids


def _resolve_my_documents(
    db: Session,
    *,
    user_id: str,
    include_course: bool,
    include_instructor: bool,
    course_doc_ids: List[str],
    instructor_doc_ids: List[str],
) -> ResolvedSources:
    selected = unique_ids(
        (course_doc_ids if include_course else [])
        + (instructor_doc_ids if include_instructor else [])
    )
    rows = _load_selected_documents(db, user_id=user_id, doc_ids=selected)
    course_rows = [row for row in rows if row[0].target_type == TARGET_COURSE]
    instructor_rows = [row for row in rows if row[0].target_type == TARGET_INSTRUCTOR_PROFILE]

    course_ids = unique_ids(doc.target_id for doc, _status in course_rows)
    course_pdf_map = _first_ready_pdf_by_target(course_rows)
    courses = [
        BrochureCourse.model_validate(course).model_copy(update={"pdf_url": course_pdf_map.get(course.id)})
        for course in _sort_by_ids(_fetch_courses(db, course_ids), course_ids)
    ]

    profile_ids = unique_ids(doc.target_id for doc, _status in instructor_rows)
    instructors: List[BrochureInstructor] = []
    instructor_ids: List[str] = []
    if profile_ids:
        instructors, instructor_ids = _resolve_profile_instructors(
            db,
            profile_ids,
            _first_ready_pdf_by_target(instructor_rows),
        )

    return ResolvedSources(
        courses=courses,
        instructors=instructors,
        course_ids=course_ids,
        instructor_ids=instructor_ids,
    )


def _profile_id_by_instructor_id(db: Session, instructor_ids: List[str]) -> Dict[str, str]:
    rows = (
        db.query(Instructor.id, Instructor.user_id)
        .filter(Instructor.id.in_(instructor_ids), Instructor.deleted_at.is_(None))
        .all()
    )
    user_ids = unique_ids(user_id for _id, user_id in rows if user_id)
    if not user_ids:
        return {}
    profile_id_by_user_id = {
        profile_user_id: profile_id
        for profile_id, profile_user_id in db.query(InstructorProfile.id, InstructorProfile.user_id)
        .filter(InstructorProfile.user_id.in_(user_ids))
        .all()
    }
    return {
        instructor_id: profile_id_by_user_id[user_id]
        for instructor_id, user_id in rows
        if user_id and user_id in profile_id_by_user_id
    }


def _resolve_edux(
    db: Session,
    *,
    user_id: str,
    include_course: bool,
    include_instructor: bool,
    course_ids: List[str],
    instructor_ids: List[str],
) -> ResolvedSources:
    course_ids = course_ids if include_course else []
    instructor_ids = instructor_ids if include_instructor else []

    course_pdf_map = latest_pdf_map(
        db,
        user_id=user_id,
        target_type=TARGET_COURSE,
        target_ids=course_ids,
    )
    profile_by_instructor: Dict[str, str] = {}
    profile_pdf_map: Dict[str, str] = {}
    if instructor_ids:
        profile_by_instructor = _profile_id_by_instructor_id(db, instructor_ids)
        profile_pdf_map = latest_pdf_map(
            db,
            user_id=user_id,
            target_type=TARGET_INSTRUCTOR_PROFILE,
            target_ids=unique_ids(profile_by_instructor.values()),
        )

    courses = [
        BrochureCourse.model_validate(course).model_copy(update={"pdf_url": course_pdf_map.get(course.id)})
        for course in _sort_by_ids(_fetch_courses(db, course_ids), course_ids)
    ]
    instructors = [
        _instructor_record(
            instructor,
            profile_pdf_map.get(profile_by_instructor.get(instructor.id, "")),
        )
        for instructor in _sort_by_ids(_fetch_instructors(db, instructor_ids), instructor_ids)
    ]
    return ResolvedSources(
        courses=courses,
        instructors=instructors,
        course_ids=course_ids,
        instructor_ids=instructor_ids,
    )


def resolve_brochure_sources(
    db: Session,
    *,
    user_id: str,
    source_mode: str,
    include_course: bool,
    include_instructor: bool,
    source_course_doc_ids: Optional[Sequence[str]] = None,
    source_instructor_doc_ids: Optional[Sequence[str]] = None,
    source_course_ids: Optional[Sequence[str]] = None,
    source_instructor_ids: Optional[Sequence[str]] = None,
) -> ResolvedSources:
    if source_mode == MY_DOCUMENTS:
        resolved = _resolve_my_documents(
            db,
            user_id=user_id,
            include_course=include_course,
            include_instructor=include_instructor,
            course_doc_ids=unique_ids(source_course_doc_ids),
            instructor_doc_ids=unique_ids(source_instructor_doc_ids),
        )
    else:
        resolved = _resolve_edux(
            db,
            user_id=user_id,
            include_course=include_course,
            include_instructor=include_instructor,
            course_ids=unique_ids(source_course_ids),
            instructor_ids=unique_ids(source_instructor_ids),
        )
    logger.debug(
        "[brochure] resolved mode=%s courses=%d instructors=%d",
        source_mode,
        len(resolved.courses),
        len(resolved.instructors),
    )
    return resolved
