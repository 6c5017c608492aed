"""툴 호출 레지스트리입니다.

툴마다 이름, 설명, 인자 스키마, 핸들러를 등록한다. 핸들러에서 발생한 예외는
여기서 모두 ``ToolResult``로 바뀌며 전송 계층으로 넘어가지 않는다.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from edux.schemas.brochure import BrochureCreateArgs, BrochureGetArgs
from edux.schemas.common import IdArgs, PageArgs, TextContent, TokenArgs, ToolInfo, ToolResult
from edux.schemas.course import CourseListArgs
from edux.schemas.document import DocumentShareArgs
from edux.schemas.instructor import InstructorListArgs
from edux.schemas.template import TemplateCreateArgs, TemplateListArgs, TemplatePreviewArgs
from edux.schemas.user import LoginRequest, TokenResponse, UserOut
from edux.services import (
    auth_service,
    brochure_service,
    course_service,
    document_service,
    instructor_service,
    template_service,
)
from edux.services.tool_response import ToolError, ToolErrorKind, error_result, render_error, text_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_schema: Type[BaseModel]
    handler: Callable[[Session, Any], Any]
    error_prefix: str


def _login(db: Session, args: LoginRequest):
    user = auth_service.mock_sso_login(db, args.email)
    return TokenResponse(
        access_token=auth_service.create_access_token(user),
        refresh_token=auth_service.create_refresh_token(user),
        user=UserOut.model_validate(user),
    )


def _me(db: Session, args: TokenArgs):
    return UserOut.model_validate(auth_service.verify_and_get_actor(db, args.token))


def _preview(db: Session, args: TemplatePreviewArgs):
    # 미리보기는 JSON이 아닌 HTML 원문을 그대로 돌려준다.
    return ToolResult(content=[TextContent(text=template_service.preview_html(db, args))])


_TOOLS: List[Tool] = [
    Tool("user.login", "로그인 (토큰 발급)", LoginRequest, _login, "로그인 실패"),
    Tool("user.me", "내 정보 조회", TokenArgs, _me, "내 정보 조회 실패"),
    Tool(
        "brochure.create",
        "브로셔 패키지 저장",
        BrochureCreateArgs,
        brochure_service.create_brochure,
        "브로셔 저장 실패",
    ),
    Tool(
        "brochure.get",
        "브로셔 패키지 조회",
        BrochureGetArgs,
        lambda db, args: brochure_service.get_brochure(db, args.token, args.id),
        "브로셔 조회 실패",
    ),
    Tool("document.list", "내 문서 목록 조회", PageArgs, document_service.list_documents, "문서 목록 조회 실패"),
    Tool(
        "document.delete",
        "문서 삭제",
        IdArgs,
        lambda db, args: document_service.delete_document(db, args.token, args.id),
        "문서 삭제 실패",
    ),
    Tool(
        "document.share",
        "문서 공유 토큰 생성/재발급",
        DocumentShareArgs,
        document_service.share_document,
        "문서 공유 실패",
    ),
    Tool(
        "document.revokeShare",
        "문서 공유 토큰 해제",
        IdArgs,
        lambda db, args: document_service.revoke_share(db, args.token, args.id),
        "문서 공유 해제 실패",
    ),
    Tool("template.create", "새 템플릿 생성", TemplateCreateArgs, template_service.create_template, "템플릿 생성 실패"),
    Tool(
        "template.get",
        "템플릿 단건 조회",
        IdArgs,
        lambda db, args: template_service.get_template(db, args.token, args.id),
        "템플릿 조회 실패",
    ),
    Tool("template.list", "템플릿 목록 조회", TemplateListArgs, template_service.list_templates, "템플릿 목록 조회 실패"),
    Tool("template.previewHtml", "Handlebars 템플릿 미리보기", TemplatePreviewArgs, _preview, "미리보기 실패"),
    Tool(
        "course.get",
        "코스 단건 조회 (강의, 일정, 강사 포함)",
        IdArgs,
        lambda db, args: course_service.get_course(db, args.token, args.id),
        "코스 조회 실패",
    ),
    Tool("course.list", "코스 목록 조회", CourseListArgs, course_service.list_courses, "코스 목록 조회 실패"),
    Tool(
        "instructor.get",
        "강사 단건 조회",
        IdArgs,
        lambda db, args: instructor_service.get_instructor(db, args.token, args.id),
        "강사 조회 실패",
    ),
    Tool(
        "instructor.list",
        "강사 목록 조회",
        InstructorListArgs,
        instructor_service.list_instructors,
        "강사 목록 조회 실패",
    ),
]

TOOLS: Dict[str, Tool] = {tool.name: tool for tool in _TOOLS}


def list_tools() -> List[ToolInfo]:
    return [ToolInfo(name=tool.name, description=tool.description) for tool in _TOOLS]


def _validation_result(exc: ValidationError) -> ToolResult:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    text = render_error(ToolErrorKind.VALIDATION, f"요청 인자가 올바르지 않습니다. {details}")
    return ToolResult(
        content=[TextContent(text=text)],
        isError=True,
        errorCode=ToolErrorKind.VALIDATION.value,
    )


def call_tool(db: Session, tool: Tool, raw_args: Mapping[str, Any]) -> ToolResult:
    try:
        args = tool.args_schema.model_validate(dict(raw_args or {}))
    except ValidationError as exc:
        return _validation_result(exc)
    try:
        result = tool.handler(db, args)
    except Exception as exc:
        if not isinstance(exc, ToolError):
            logger.exception("[tool] %s failed", tool.name)
        return error_result(tool.error_prefix, exc)
    if isinstance(result, ToolResult):
        return result
    return text_result(result)
