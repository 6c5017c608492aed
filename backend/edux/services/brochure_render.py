"""강의/강사 섹션 템플릿 렌더링입니다.

섹션은 서로 독립이므로 엔티티마다 병렬로 렌더링한다. 워커는 각자 세션을 열고,
한 엔티티의 실패는 해당 엔티티만 원본 레코드로 되돌린다.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from edux.config import settings
from edux.models.course import Course
from edux.models.instructor import Instructor, InstructorProfile
from edux.models.template import Template
from edux.schemas.brochure import BrochureCourse, BrochureInstructor
from edux.schemas.course import CourseOut, LectureOut, ScheduleOut
from edux.schemas.instructor import InstructorCourseOut, InstructorOut, InstructorProfileOut, InstructorScheduleOut
from edux.services.template_engine import compile_template
from edux.utils.html import wrap_section_html

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", BrochureCourse, BrochureInstructor)


def _dump(model) -> Dict[str, Any]:
    return model.to_payload()


def build_course_template_data(db: Session, course_id: str) -> Optional[Dict[str, Any]]:
    course = (
        db.query(Course)
        .filter(Course.id == course_id, Course.deleted_at.is_(None))
        .first()
    )
    if not course:
        return None

    instructors = [
        _dump(InstructorOut.model_validate(link.instructor))
        for link in course.instructor_links
        if link.instructor is not None
    ]
    lectures = [
        _dump(LectureOut.model_validate(link.lecture).model_copy(update={"order": link.order}))
        for link in course.lecture_links
        if link.lecture is not None and link.lecture.deleted_at is None
    ]
    schedules = [
        _dump(ScheduleOut.model_validate(schedule))
        for schedule in course.schedules
        if schedule.deleted_at is None
    ]
    course_payload = _dump(CourseOut.model_validate(course))
    course_payload["Instructors"] = instructors
    course_payload["instructorIds"] = [row["id"] for row in instructors]
    return {
        "course": course_payload,
        "instructors": instructors,
        "content": course.content or "",
        "lectures": lectures,
        "modules": lectures,
        "schedules": schedules,
        "courseLectures": lectures,
        "courseSchedules": schedules,
    }


def _coalesce(*values):
    for value in values:
        if value is not None:
            return value
    return None


def build_instructor_template_data(db: Session, instructor_id: str) -> Optional[Dict[str, Any]]:
    instructor = (
        db.query(Instructor)
        .filter(Instructor.id == instructor_id, Instructor.deleted_at.is_(None))
        .first()
    )
    if not instructor:
        return None
    profile = (
        db.query(InstructorProfile).filter(InstructorProfile.user_id == instructor.user_id).first()
        if instructor.user_id
        else None
    )
    user = instructor.user

    merged = _dump(InstructorOut.model_validate(instructor))
    merged.update({
        "name": instructor.name or (profile.display_name if profile else None) or (user.name if user else None),
        "title": _coalesce(instructor.title, profile.title if profile else None),
        "bio": _coalesce(instructor.bio, profile.bio if profile else None),
        "phone": user.phone if user else None,
        "email": _coalesce(user.email if user else None, instructor.email),
        "links": _coalesce(instructor.links, profile.links if profile else None),
    })
    courses = [
        _dump(InstructorCourseOut.model_validate(link.course))
        for link in instructor.course_links
        if link.course is not None and link.course.deleted_at is None
    ]
    schedules = [
        _dump(InstructorScheduleOut.model_validate(schedule))
        for schedule in instructor.schedules
        if schedule.deleted_at is None
    ]
    return {
        "instructor": merged,
        "instructorProfile": _dump(InstructorProfileOut.model_validate(profile)) if profile else None,
        "courses": courses,
        "schedules": schedules,
    }


def _render_with(
    db: Session,
    record: RecordT,
    template,
    build_data: Callable[[Session, str], Optional[Dict[str, Any]]],
) -> RecordT:
    if template is None:
        return record
    source = _detach(template)
    data = build_data(db, record.id)
    if data is None:
        return record
    section_html = source.compiled(data)
    return record.model_copy(update={"web_html": wrap_section_html(source.css, section_html)})


def render_course_section(db: Session, course: BrochureCourse, template) -> BrochureCourse:
    return _render_with(db, course, template, build_course_template_data)


def render_instructor_section(db: Session, instructor: BrochureInstructor, template) -> BrochureInstructor:
    return _render_with(db, instructor, template, build_instructor_template_data)


class _TemplateSource:
    """워커 스레드로 넘길 템플릿. 세션에 묶이지 않도록 값만 복사하고 HTML은 미리 컴파일해 둔다."""

    def __init__(self, template: Template):
        self.id = template.id
        self.name = template.name
        self.css = template.css
        self.compiled = compile_template(template.html)


def _detach(template):
    if template is None or isinstance(template, _TemplateSource):
        return template
    return _TemplateSource(template)


def _prepare(kind: str, template: Optional[Template]):
    if template is None:
        return None
    try:
        return _detach(template)
    except Exception as exc:
        logger.warning("[brochure] %s template compile failed id=%s: %s", kind, template.id, exc)
        return None


def render_sections(
    db: Session,
    courses: Sequence[BrochureCourse],
    instructors: Sequence[BrochureInstructor],
    course_template: Optional[Template] = None,
    instructor_template: Optional[Template] = None,
    max_workers: Optional[int] = None,
) -> tuple[List[BrochureCourse], List[BrochureInstructor]]:
    # 컴파일은 호출 스레드에서 끝내고 워커에는 컴파일된 템플릿만 넘긴다.
    jobs: List[tuple] = []
    course_source = _prepare("course", course_template)
    if course_source is not None:
        jobs.extend(("course", idx, row, course_source, render_course_section) for idx, row in enumerate(courses))
    instructor_source = _prepare("instructor", instructor_template)
    if instructor_source is not None:
        jobs.extend(
            ("instructor", idx, row, instructor_source, render_instructor_section)
            for idx, row in enumerate(instructors)
        )

    rendered_courses = list(courses)
    rendered_instructors = list(instructors)
    if not jobs:
        return rendered_courses, rendered_instructors

    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db.get_bind())

    def _run(job):
        _kind, _idx, record, source, render = job
        with session_factory() as session:
            return render(session, record, source)

    workers = max(1, min(max_workers or settings.BROCHURE_RENDER_WORKERS, len(jobs)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="brochure-render") as pool:
        futures = [(job, pool.submit(_run, job)) for job in jobs]
        for job, future in futures:
            kind, idx, record, _source, _render = job
            try:
                result = future.result()
            except Exception as exc:
                logger.warning("[brochure] %s section render failed id=%s: %s", kind, record.id, exc)
                continue
            if kind == "course":
                rendered_courses[idx] = result
            else:
                rendered_instructors[idx] = result
    return rendered_courses, rendered_instructors
