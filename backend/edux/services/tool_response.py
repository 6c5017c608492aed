"""툴 응답 포맷과 구조화된 오류 종류를 정의합니다."""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel

from edux.schemas.common import TextContent, ToolResult


class ToolErrorKind(str, Enum):
    AUTH_FAILED = "AUTH_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    TOOL_ERROR = "TOOL_ERROR"


class ToolError(Exception):
    kind = ToolErrorKind.TOOL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(ToolError):
    kind = ToolErrorKind.AUTH_FAILED


class PermissionDeniedError(ToolError):
    kind = ToolErrorKind.PERMISSION_DENIED


class NotFoundError(ToolError):
    kind = ToolErrorKind.NOT_FOUND


class ValidationFailed(ToolError):
    kind = ToolErrorKind.VALIDATION


def _to_jsonable(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, mode="json")
    return payload


def text_result(payload: Any) -> ToolResult:
    text = json.dumps(_to_jsonable(payload), ensure_ascii=False, default=str)
    return ToolResult(content=[TextContent(text=text)])


def render_error(kind: ToolErrorKind, message: str) -> str:
    return f"[{kind.value}] {message}"


def error_result(prefix: str, error: BaseException) -> ToolResult:
    if isinstance(error, ToolError):
        kind = error.kind
        text = render_error(kind, error.message)
    else:
        kind = ToolErrorKind.TOOL_ERROR
        text = render_error(kind, f"{prefix}: {error or 'Unknown error'}")
    return ToolResult(content=[TextContent(text=text)], isError=True, errorCode=kind.value)
