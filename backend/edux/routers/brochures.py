"""저장된 브로셔 패키지 HTML을 그대로 내려주는 라우터입니다."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from edux.database import get_db
from edux.services import brochure_service

router = APIRouter(tags=["brochures"])


@router.get("/brochure/{package_id}", response_class=HTMLResponse)
def view_brochure(package_id: str, db: Session = Depends(get_db)):
    html = brochure_service.get_brochure_html(db, package_id)
    if html is None:
        raise HTTPException(status_code=404, detail="브로셔를 찾을 수 없습니다.")
    return HTMLResponse(content=html)
