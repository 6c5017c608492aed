import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from edux.database import Base, get_db
from edux.main import app
from edux.models.course import Course, CourseInstructor, CourseLecture
from edux.models.document import RenderJob, UserDocument
from edux.models.instructor import Instructor, InstructorProfile
from edux.models.lecture import Lecture
from edux.models.schedule import Schedule
from edux.models.template import Template
from edux.models.user import User

TEST_DB_URL = "sqlite:///./test_edux.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(id="u-admin", email="admin@edux.io", name="Admin", role="admin"),
        "editor": User(id="u-editor", email="editor@edux.io", name="Editor", role="editor", phone="010-1111-2222"),
        "viewer": User(id="u-viewer", email="viewer@edux.io", name="Viewer", role="viewer"),
        "guest": User(id="u-guest", email="guest@edux.io", name="Guest", role="guest"),
        "kim": User(id="u-kim", email="kim@edux.io", name="김강사", role="instructor", phone="010-3333-4444"),
        "lee": User(id="u-lee", email="lee@edux.io", name="이강사", role="instructor"),
        "park": User(id="u-park", email="park@edux.io", name="박프로필", role="instructor"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


BROCHURE_HTML = (
    "<h1>{{brochure.title}}</h1>"
    "{{#if brochure.includeToc}}<nav>"
    "{{#each courses}}<a href=\"#course-{{id}}\">{{plus1 @index}}. {{title}}</a>{{/each}}"
    "</nav>{{/if}}"
    "{{#if brochure.courseFirst}}"
    "<div class=\"courses\">{{#each courses}}<section id=\"course-{{id}}\">{{title}}{{{webHtml}}}</section>{{/each}}</div>"
    "<div class=\"instructors\">{{#each instructors}}<section id=\"instructor-{{id}}\">{{name}}{{{webHtml}}}</section>{{/each}}</div>"
    "{{else}}"
    "<div class=\"instructors\">{{#each instructors}}<section id=\"instructor-{{id}}\">{{name}}{{{webHtml}}}</section>{{/each}}</div>"
    "<div class=\"courses\">{{#each courses}}<section id=\"course-{{id}}\">{{title}}{{{webHtml}}}</section>{{/each}}</div>"
    "{{/if}}"
)


@pytest.fixture
def seed_templates(db, seed_users):
    templates = {
        "brochure": Template(id="t-brochure", name="기본 브로셔", type="brochure_package", html=BROCHURE_HTML, css="h1{color:#123}"),
        "course": Template(
            id="t-course",
            name="코스 소개",
            type="course_intro",
            html=(
                "<article class=\"course-intro\"><h2>{{course.title}}</h2>"
                "<a href=\"/courses\">목록</a><a href=\"/courses/{{course.id}}\">상세</a>"
                "<ol>{{#each lectures}}<li>{{title}}</li>{{/each}}</ol>"
                "<p class=\"course-instructors\">{{#each instructors}}{{name}} {{/each}}</p></article>"
            ),
            css=".course-intro{margin:0}",
        ),
        "instructor": Template(
            id="t-instructor",
            name="강사 프로필",
            type="instructor_profile",
            html=(
                "<article class=\"profile\"><h2>{{instructor.name}}</h2>"
                "<p class=\"email\">{{instructor.email}}</p><p class=\"phone\">{{instructor.phone}}</p>"
                "<p class=\"bio\">{{instructor.bio}}</p></article>"
            ),
            css=".profile{padding:0}",
        ),
    }
    for row in templates.values():
        db.add(row)
    db.commit()
    return templates


@pytest.fixture
def seed_catalog(db, seed_users):
    """코스 c1~c3, 강사 i1(김강사, 프로필 있음)/i2(이강사, 프로필 없음), 강사 행이 없는 프로필 p-park."""
    courses = [
        Course(id="c1", title="파이썬 기초", description="입문", duration_hours=16, goal="기초 문법", content="<p>c1</p>"),
        Course(id="c2", title="데이터 분석", description="pandas", duration_hours=24, goal="분석 실습"),
        Course(id="c3", title="머신러닝", description="sklearn", duration_hours=32),
    ]
    instructors = [
        Instructor(id="i1", user_id="u-kim", name="김강사", title=None, email="kim-old@edux.io", bio=None),
        Instructor(id="i2", user_id="u-lee", name="이강사", title="수석", email="lee@edux.io", bio="분석 전문"),
    ]
    profiles = [
        InstructorProfile(id="p-kim", user_id="u-kim", display_name="김프로필", title="책임연구원", bio="프로필 소개"),
        InstructorProfile(id="p-park", user_id="u-park", display_name="박프로필", title="컨설턴트", bio="박 소개"),
    ]
    lectures = [
        Lecture(id="l1", title="변수와 자료형"),
        Lecture(id="l2", title="제어문"),
        Lecture(id="l3", title="삭제된 강의", deleted_at=datetime(2026, 1, 1)),
    ]
    db.add_all(courses + instructors + profiles + lectures)
    db.flush()
    db.add_all([
        CourseInstructor(course_id="c1", instructor_id="i1"),
        CourseInstructor(course_id="c2", instructor_id="i2"),
        CourseLecture(course_id="c1", lecture_id="l2", order=2),
        CourseLecture(course_id="c1", lecture_id="l1", order=1),
        CourseLecture(course_id="c1", lecture_id="l3", order=3),
        Schedule(id="s1", course_id="c1", instructor_id="i1", date=datetime(2026, 3, 2, 9), location="서울"),
    ])
    db.commit()
    return {"courses": courses, "instructors": instructors, "profiles": profiles}


def add_document(
    db,
    *,
    doc_id: str,
    user_id: str,
    target_type: str,
    target_id: str,
    pdf_url: str | None = None,
    status: str | None = "done",
    created_at: datetime | None = None,
    is_active: bool = True,
    label: str | None = None,
) -> UserDocument:
    job = None
    if status is not None:
        job = RenderJob(
            id=f"job-{doc_id}",
            user_id=user_id,
            target_type=target_type,
            target_id=target_id,
            status=status,
            pdf_url=pdf_url,
        )
        db.add(job)
        db.flush()
    doc = UserDocument(
        id=doc_id,
        user_id=user_id,
        render_job_id=job.id if job else None,
        target_type=target_type,
        target_id=target_id,
        pdf_url=pdf_url,
        label=label or doc_id,
        is_active=is_active,
    )
    if created_at is not None:
        doc.created_at = created_at
    db.add(doc)
    db.commit()
    return doc


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["accessToken"]


def call_tool(client, tool_name: str, /, **args) -> dict:
    resp = client.post(f"/api/tools/{tool_name}", json=args)
    assert resp.status_code == 200, resp.text
    return resp.json()


def tool_payload(result: dict):
    assert not result.get("isError"), result
    return json.loads(result["content"][0]["text"])


def tool_call(client, tool_name: str, /, **args):
    return tool_payload(call_tool(client, tool_name, **args))


def error_text(result: dict) -> str:
    assert result.get("isError") is True, result
    return result["content"][0]["text"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
