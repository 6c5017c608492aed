"""Handlebars(pybars) 템플릿 렌더링 래퍼입니다.

헬퍼는 전역 등록하지 않고 렌더 호출마다 전달한다.
pybars 컴파일러는 코드 빌더를 클래스 속성으로 공유하므로 스레드 안전하지 않다.
컴파일은 모듈 락 안에서만 하고, 컴파일된 템플릿 호출은 락 없이 여러 스레드에서 써도 된다.
"""

import threading
from typing import Any, Callable, Dict, Mapping, Optional

from pybars import Compiler

_COMPILE_LOCK = threading.Lock()


def _plus1(this, value):
    # 목차 번호를 1부터 매기기 위한 헬퍼 ({{plus1 @index}})
    try:
        return int(value) + 1
    except (TypeError, ValueError):
        return value


DEFAULT_HELPERS: Dict[str, Callable] = {
    "plus1": _plus1,
}


class CompiledTemplate:
    def __init__(self, source: str):
        with _COMPILE_LOCK:
            self._render = Compiler().compile(source or "")

    def __call__(
        self,
        context: Mapping[str, Any],
        helpers: Optional[Mapping[str, Callable]] = None,
    ) -> str:
        call_helpers = dict(DEFAULT_HELPERS)
        if helpers:
            call_helpers.update(helpers)
        return "".join(self._render(dict(context), helpers=call_helpers))


def compile_template(source: str) -> CompiledTemplate:
    return CompiledTemplate(source)


def render_template(
    source: str,
    context: Mapping[str, Any],
    helpers: Optional[Mapping[str, Callable]] = None,
) -> str:
    return compile_template(source)(context, helpers)
