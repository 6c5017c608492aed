"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./edux.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:8000"]

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60

    # Logging
    LOG_LEVEL: str = ""

    # Brochure
    # 섹션 템플릿 렌더링 동시 실행 수 (강의/강사 단위 fan-out)
    BROCHURE_RENDER_WORKERS: int = 4
    DOCUMENT_PAGE_SIZE_MAX: int = 100

    def log_level(self) -> str:
        level = str(self.LOG_LEVEL or "").strip().upper()
        if level:
            return level
        return "DEBUG" if self.DEBUG else "INFO"

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
