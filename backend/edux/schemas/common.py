"""툴 호출 요청/응답 공통 계약입니다."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 키로 주고받고, snake_case 키도 입력으로 허용한다."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_payload(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, mode="json", **kwargs)


class TokenArgs(CamelModel):
    token: str = Field(description="액세스 토큰")


class PageArgs(TokenArgs):
    page: int = Field(default=1, ge=1, description="페이지 번호")
    page_size: int = Field(default=20, ge=1, le=100, description="페이지당 항목 수")


class IdArgs(TokenArgs):
    id: str = Field(description="대상 ID")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    content: List[TextContent]
    isError: Optional[bool] = None
    errorCode: Optional[str] = None


class ToolInfo(BaseModel):
    name: str
    description: str
