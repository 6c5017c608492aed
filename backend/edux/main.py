"""FastAPI 애플리케이션 진입점. 미들웨어, 툴 호출/인증 라우터, 브로셔 뷰를 등록합니다."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from edux.config import settings
from edux.database import Base, engine
import edux.models  # noqa: F401 - 모델 import로 metadata 등록
from edux.routers import auth, brochures, tools
from edux.utils.log_utils import configure_logging

configure_logging()

app = FastAPI(
    title="Edux 교육 콘텐츠 관리 시스템",
    description="코스/강사/일정/템플릿 관리와 브로셔 패키지 생성을 위한 툴 호출 백엔드",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(tools.router)
app.include_router(brochures.router)


@app.on_event("startup")
def ensure_schema():
    # 신규 기능 배포 시 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Edux 교육 콘텐츠 관리 시스템"}
