"""툴 호출 API 라우터입니다. 평평한 인자 객체를 받아 레지스트리의 핸들러로 위임합니다."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from edux.database import get_db
from edux.schemas.common import ToolInfo, ToolResult
from edux.services import tool_registry

router = APIRouter(prefix="/api/tools", tags=["tools"])


@router.get("", response_model=List[ToolInfo])
def list_tools():
    return tool_registry.list_tools()


@router.post("/{tool_name}", response_model=ToolResult, response_model_exclude_none=True)
def call_tool(
    tool_name: str,
    args: Dict[str, Any] = Body(default={}),
    db: Session = Depends(get_db),
):
    tool = tool_registry.TOOLS.get(tool_name)
    if tool is None:
        raise HTTPException(status_code=404, detail=f"알 수 없는 툴입니다: {tool_name}")
    return tool_registry.call_tool(db, tool, args)
