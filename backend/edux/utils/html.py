"""브로셔/PDF에 삽입되는 HTML 조각을 다루는 헬퍼입니다."""

import re

# 앱 최상위 라우트. 정확히 일치하는 경로만 비활성 링크로 바꾼다.
APP_ROUTE_PATHS = frozenset({
    "/",
    "/courses",
    "/instructors",
    "/documents",
    "/my-documents",
    "/templates",
})

_HREF_PATTERN = re.compile(r"""href=(['"])(/[^'"]*)\1""")
_QUERY_OR_FRAGMENT = re.compile(r"[?#]")


def sanitize_embedded_html(html: str) -> str:
    """섹션 템플릿의 앱 내비게이션 링크가 브로셔 밖으로 이동하지 않도록 ``href="#"``로 바꾼다."""

    def _replace(match: re.Match) -> str:
        quote, path = match.group(1), match.group(2)
        normalized = _QUERY_OR_FRAGMENT.split(path, 1)[0]
        if normalized in APP_ROUTE_PATHS:
            return f"href={quote}#{quote}"
        return match.group(0)

    return _HREF_PATTERN.sub(_replace, html or "")


def wrap_section_html(css: str, section_html: str) -> str:
    return f"<style>{css or ''}</style>{sanitize_embedded_html(section_html)}"


def wrap_document(body: str, *stylesheets: str) -> str:
    styles = "".join(f"<style>{css or ''}</style>" for css in stylesheets)
    return (
        '<!doctype html><html><head><meta charset="utf-8">'
        f"{styles}</head><body>{body}</body></html>"
    )
