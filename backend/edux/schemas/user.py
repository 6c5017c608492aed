"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from edux.schemas.common import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(min_length=3, max_length=200, description="이메일")


class UserOut(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    is_active: bool
    created_at: Optional[datetime] = None


class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserOut
