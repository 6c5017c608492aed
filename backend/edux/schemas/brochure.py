"""브로셔 패키지 툴 요청/응답 스키마입니다."""

from typing import List, Literal, Optional

from pydantic import Field

from edux.schemas.common import CamelModel, TokenArgs

SourceMode = Literal["my_documents", "edux"]
ContentOrder = Literal["course-first", "instructor-first"]
OutputMode = Literal["web", "pdf", "both"]


class BrochureCreateArgs(TokenArgs):
    title: str = Field(min_length=1, description="브로셔 제목")
    summary: Optional[str] = Field(default=None, description="브로셔 요약")
    brochure_template_id: str = Field(description="브로셔 템플릿 ID")
    course_template_id: Optional[str] = Field(default=None, description="웹용 강의 템플릿 ID")
    instructor_template_id: Optional[str] = Field(default=None, description="웹용 강사 템플릿 ID")
    include_toc: bool = Field(default=True, description="목차 포함 여부")
    include_course: bool = Field(default=True, description="강의 포함 여부")
    include_instructor: bool = Field(default=True, description="강사 포함 여부")
    content_order: ContentOrder = Field(default="course-first", description="콘텐츠 정렬 순서")
    output_mode: OutputMode = Field(default="both", description="출력 모드")
    source_mode: SourceMode = Field(default="edux", description="데이터 소스 모드")
    render_batch_token: Optional[str] = Field(default=None, description="브로셔 배치 렌더 토큰")
    source_course_doc_ids: List[str] = Field(default_factory=list, description="내문서함 코스 문서 ID 목록")
    source_instructor_doc_ids: List[str] = Field(default_factory=list, description="내문서함 강사 문서 ID 목록")
    source_course_ids: List[str] = Field(default_factory=list, description="Edux 코스 ID 목록")
    source_instructor_ids: List[str] = Field(default_factory=list, description="Edux 강사 ID 목록")


class BrochureGetArgs(TokenArgs):
    id: str = Field(description="브로셔 패키지 ID")


class BrochureCourse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    duration_hours: Optional[float] = None
    goal: Optional[str] = None
    pdf_url: Optional[str] = None
    web_html: Optional[str] = None


class BrochureInstructor(CamelModel):
    id: str
    name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    affiliation: Optional[str] = None
    tagline: Optional[str] = None
    bio: Optional[str] = None
    pdf_url: Optional[str] = None
    web_html: Optional[str] = None


class BrochurePackage(CamelModel):
    """app_settings에 `brochure.package.<id>` 키로 저장되는 패키지 스냅샷."""

    id: str
    user_id: str
    title: str
    summary: str = ""
    source_mode: SourceMode
    include_toc: bool
    include_course: bool
    include_instructor: bool
    content_order: ContentOrder
    output_mode: OutputMode
    render_batch_token: Optional[str] = None
    template_id: str
    template_name: str
    course_template_id: Optional[str] = None
    course_template_name: Optional[str] = None
    instructor_template_id: Optional[str] = None
    instructor_template_name: Optional[str] = None
    source_course_doc_ids: List[str] = Field(default_factory=list)
    source_instructor_doc_ids: List[str] = Field(default_factory=list)
    source_course_ids: List[str] = Field(default_factory=list)
    source_instructor_ids: List[str] = Field(default_factory=list)
    html: str
    created_at: str
    updated_at: str
