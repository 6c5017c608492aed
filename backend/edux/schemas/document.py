"""내 문서함 툴 요청/응답 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from edux.schemas.common import CamelModel, IdArgs
from edux.schemas.template import TemplateSummary


class RenderJobStatus(CamelModel):
    status: str


class RenderJobOut(CamelModel):
    id: str
    user_id: str
    template_id: Optional[str] = None
    target_type: str
    target_id: str
    status: str
    pdf_url: Optional[str] = None
    created_at: Optional[datetime] = None


class UserDocumentOut(CamelModel):
    id: str
    user_id: str
    render_job_id: Optional[str] = None
    template_id: Optional[str] = None
    target_type: str
    target_id: str
    label: Optional[str] = None
    pdf_url: Optional[str] = None
    share_token: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    template: Optional[TemplateSummary] = None
    render_job: Optional[RenderJobStatus] = None


class DocumentPage(CamelModel):
    items: List[UserDocumentOut] = Field(default_factory=list)
    total: int = 0


class DocumentShareArgs(IdArgs):
    regenerate: bool = Field(default=False, description="공유 토큰 재발급 여부")
