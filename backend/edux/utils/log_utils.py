"""로깅 초기화와 민감 정보 마스킹 필터입니다."""

import logging
import re
from typing import Any

from edux.config import settings

REDACT_KEYS = {
    "password",
    "newPassword",
    "currentPassword",
    "token",
    "accessToken",
    "refreshToken",
    "authorization",
}
REDACTED = "[REDACTED]"

_KV_PATTERN = re.compile(
    r"(?P<key>\b(?:%s))(?P<sep>\s*[=:]\s*)(?P<quote>['\"]?)[^'\"\s,}]+(?P=quote)"
    % "|".join(sorted(REDACT_KEYS, key=len, reverse=True)),
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def redact_value(value: Any, depth: int = 0) -> Any:
    if depth > 4:
        return "[truncated]"
    if isinstance(value, dict):
        return {
            key: REDACTED if key in REDACT_KEYS else redact_value(nested, depth + 1)
            for key, nested in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact_value(item, depth + 1) for item in value)
    if isinstance(value, str):
        return _KV_PATTERN.sub(lambda m: f"{m.group('key')}{m.group('sep')}{REDACTED}", value)
    return value


class RedactingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_value(record.msg)
        if isinstance(record.args, dict):
            record.args = redact_value(record.args)
        elif isinstance(record.args, tuple):
            record.args = tuple(redact_value(arg) for arg in record.args)
        return True


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel(level or settings.log_level())
    if any(getattr(handler, "_edux_handler", False) for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RedactingFilter())
    handler._edux_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
