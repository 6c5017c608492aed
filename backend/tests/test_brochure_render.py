from datetime import datetime

from edux.models.course import Course
from edux.models.instructor import Instructor
from edux.schemas.brochure import BrochureCourse, BrochureInstructor
from edux.services import brochure_render
from edux.services.brochure_render import (
    build_course_template_data,
    build_instructor_template_data,
    render_course_section,
    render_sections,
)


def test_course_template_data(db, seed_catalog):
    data = build_course_template_data(db, "c1")
    assert data["course"]["title"] == "파이썬 기초"
    assert data["course"]["instructorIds"] == ["i1"]
    assert [row["id"] for row in data["lectures"]] == ["l1", "l2"]
    assert [row["order"] for row in data["lectures"]] == [1, 2]
    assert data["modules"] == data["lectures"] == data["courseLectures"]
    assert [row["id"] for row in data["schedules"]] == ["s1"]
    assert data["schedules"][0]["instructor"]["id"] == "i1"
    assert data["content"] == "<p>c1</p>"


def test_course_template_data_missing_course(db, seed_catalog):
    assert build_course_template_data(db, "nope") is None


def test_instructor_template_data_falls_back_to_profile_and_user(db, seed_catalog):
    data = build_instructor_template_data(db, "i1")
    instructor = data["instructor"]
    assert instructor["name"] == "김강사"
    assert instructor["title"] == "책임연구원"
    assert instructor["bio"] == "프로필 소개"
    assert instructor["phone"] == "010-3333-4444"
    assert instructor["email"] == "kim@edux.io"
    assert data["instructorProfile"]["id"] == "p-kim"
    assert [row["id"] for row in data["courses"]] == ["c1"]
    assert [row["id"] for row in data["schedules"]] == ["s1"]


def test_instructor_template_data_without_profile(db, seed_catalog):
    data = build_instructor_template_data(db, "i2")
    assert data["instructor"]["title"] == "수석"
    assert data["instructorProfile"] is None


def test_render_course_section_wraps_and_sanitizes(db, seed_catalog, seed_templates):
    record = BrochureCourse(id="c1", title="파이썬 기초")
    rendered = render_course_section(db, record, seed_templates["course"])
    assert rendered.web_html.startswith("<style>.course-intro{margin:0}</style>")
    assert '<a href="#">목록</a>' in rendered.web_html
    assert '<a href="/courses/c1">상세</a>' in rendered.web_html
    assert "<li>변수와 자료형</li><li>제어문</li>" in rendered.web_html
    assert "삭제된 강의" not in rendered.web_html
    assert record.web_html is None


def test_render_without_template_returns_base_record(db, seed_catalog):
    record = BrochureCourse(id="c1", title="파이썬 기초")
    courses, instructors = render_sections(db, [record], [])
    assert courses == [record]
    assert instructors == []


def test_render_sections_keeps_order_and_isolates_failures(db, seed_catalog, seed_templates, monkeypatch):
    original = brochure_render.build_instructor_template_data

    def flaky(session, instructor_id):
        if instructor_id == "i2":
            raise RuntimeError("template data unavailable")
        return original(session, instructor_id)

    monkeypatch.setattr(brochure_render, "build_instructor_template_data", flaky)
    monkeypatch.setattr(
        brochure_render,
        "render_instructor_section",
        lambda session, record, template: brochure_render._render_with(session, record, template, flaky),
    )

    courses = [BrochureCourse(id="c2", title="데이터 분석"), BrochureCourse(id="c1", title="파이썬 기초")]
    instructors = [BrochureInstructor(id="i2", name="이강사"), BrochureInstructor(id="i1", name="김강사")]
    rendered_courses, rendered_instructors = render_sections(
        db,
        courses,
        instructors,
        course_template=seed_templates["course"],
        instructor_template=seed_templates["instructor"],
        max_workers=3,
    )
    assert [row.id for row in rendered_courses] == ["c2", "c1"]
    assert all(row.web_html for row in rendered_courses)
    assert [row.id for row in rendered_instructors] == ["i2", "i1"]
    assert rendered_instructors[0].web_html is None
    assert "프로필 소개" in rendered_instructors[1].web_html
    assert "<h2>김강사</h2>" in rendered_instructors[1].web_html
    assert "010-3333-4444" in rendered_instructors[1].web_html


def test_render_skips_instructor_deleted_mid_flight(db, seed_catalog, seed_templates):
    db.query(Instructor).filter(Instructor.id == "i2").update({"deleted_at": datetime(2026, 1, 1)})
    db.commit()
    record = BrochureInstructor(id="i2", name="이강사")
    _courses, instructors = render_sections(db, [], [record], instructor_template=seed_templates["instructor"])
    assert instructors == [record]


def test_render_sections_many_entities_all_rendered(db, seed_catalog, seed_templates):
    db.add_all([Course(id=f"c-{n:02d}", title=f"과정 {n}") for n in range(12)])
    db.commit()
    records = [BrochureCourse(id=f"c-{n:02d}", title=f"과정 {n}") for n in range(12)]

    rendered, _instructors = render_sections(db, records, [], course_template=seed_templates["course"], max_workers=4)

    assert [row.id for row in rendered] == [row.id for row in records]
    assert all(row.web_html for row in rendered)
    assert all(f"과정 {n}" in rendered[n].web_html for n in range(12))


def test_render_sections_skips_template_that_fails_to_compile(db, seed_catalog, seed_templates, monkeypatch):
    def broken(source):
        raise ValueError("bad template")

    monkeypatch.setattr(brochure_render, "compile_template", broken)
    record = BrochureCourse(id="c1", title="파이썬 기초")
    courses, _instructors = render_sections(db, [record], [], course_template=seed_templates["course"])
    assert courses == [record]
