"""템플릿 툴 요청/응답 스키마입니다."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, JsonValue

from edux.schemas.common import CamelModel, PageArgs, TokenArgs

TemplateType = Literal["brochure_package", "course_intro", "instructor_profile"]


class TemplateCreateArgs(TokenArgs):
    name: str = Field(min_length=1, max_length=120, description="템플릿 이름")
    type: TemplateType = Field(default="course_intro", description="템플릿 유형")
    html: str = Field(description="Handlebars 템플릿 HTML")
    css: str = Field(default="", description="템플릿 CSS")


class TemplateListArgs(PageArgs):
    type: Optional[TemplateType] = Field(default=None, description="템플릿 유형 필터")


class TemplatePreviewArgs(TokenArgs):
    html: str = Field(description="Handlebars 템플릿")
    css: str = Field(default="", description="CSS")
    data: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="템플릿에 주입할 데이터 (course, instructor, schedule 등)",
    )


class TemplateOut(CamelModel):
    id: str
    name: str
    type: str
    html: str
    css: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TemplateSummary(CamelModel):
    id: str
    name: str
    type: str
