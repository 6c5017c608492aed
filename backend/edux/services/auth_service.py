"""Auth Service 도메인 서비스 레이어입니다. 토큰 발급/검증과 로그인 흐름을 캡슐화합니다."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from edux.config import settings
from edux.models.user import User
from edux.services.tool_response import AuthError

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    email: str
    role: str


def _encode(user: User, token_type: str, expires_minutes: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "tokenType": token_type,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(user: User) -> str:
    return _encode(user, ACCESS, settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def create_refresh_token(user: User) -> str:
    return _encode(user, REFRESH, settings.REFRESH_TOKEN_EXPIRE_MINUTES)


def _decode(token: str, expected_type: str) -> TokenPayload:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthError("인증 토큰이 유효하지 않습니다. 다시 로그인해주세요.")
    token_type = payload.get("tokenType")
    # 타입이 없는 레거시 토큰은 access로 간주한다.
    if expected_type == ACCESS and token_type not in (None, ACCESS):
        raise AuthError("액세스 토큰 형식이 올바르지 않습니다.")
    if expected_type == REFRESH and token_type != REFRESH:
        raise AuthError("리프레시 토큰 형식이 올바르지 않습니다.")
    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("인증 토큰 정보가 올바르지 않습니다.")
    return TokenPayload(
        user_id=str(user_id),
        email=str(payload.get("email") or ""),
        role=str(payload.get("role") or ""),
    )


def verify_token(token: str) -> TokenPayload:
    return _decode(token, ACCESS)


def verify_refresh_token(token: str) -> TokenPayload:
    return _decode(token, REFRESH)


def get_active_user(db: Session, user_id: str) -> User | None:
    return (
        db.query(User)
        .filter(User.id == user_id, User.is_active == True, User.deleted_at.is_(None))  # noqa: E712
        .first()
    )


def verify_and_get_actor(db: Session, token: str) -> User:
    payload = verify_token(token)
    user = get_active_user(db, payload.user_id)
    if not user:
        raise AuthError("유효한 사용자 계정을 찾을 수 없습니다.")
    return user


def mock_sso_login(db: Session, email: str) -> User:
    user = (
        db.query(User)
        .filter(User.email == email.strip().lower(), User.is_active == True, User.deleted_at.is_(None))  # noqa: E712
        .first()
    )
    if not user:
        raise AuthError(f"이메일 '{email}'에 해당하는 활성 사용자를 찾을 수 없습니다.")
    return user
