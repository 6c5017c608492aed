"""역할 기본 권한 매트릭스와 권한 판정 규칙입니다."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol


ADMIN = "admin"
OPERATOR = "operator"
EDITOR = "editor"
INSTRUCTOR = "instructor"
VIEWER = "viewer"
GUEST = "guest"

ALL_ROLES = (ADMIN, OPERATOR, EDITOR, INSTRUCTOR, VIEWER, GUEST)

ALLOW = "allow"
DENY = "deny"

_CONTENT_PERMISSIONS = [
    "dashboard.read",
    "template.read",
    "template.use",
    "course.upsert",
    "course.get",
    "course.list",
    "course.listMine",
    "course.delete",
    "instructor.upsert",
    "instructor.get",
    "instructor.getByUser",
    "instructor.list",
    "schedule.upsert",
    "schedule.get",
    "schedule.list",
    "lecture.get",
    "lecture.list",
    "lecture.upsert",
    "lecture.delete",
    "render.coursePdf",
    "render.schedulePdf",
    "render.instructorProfilePdf",
]

_DOCUMENT_PERMISSIONS = [
    "document.list",
    "document.delete",
    "document.share",
    "document.revokeShare",
]

ROLE_DEFAULT_ALLOW: Dict[str, List[str]] = {
    ADMIN: ["*"],
    OPERATOR: [
        *_CONTENT_PERMISSIONS,
        "group.manage",
        "group.member.manage",
        "group.permission.manage",
        "site.settings.read",
        "site.settings.update",
        "template.update",
        "template.delete",
        *_DOCUMENT_PERMISSIONS,
    ],
    EDITOR: [*_CONTENT_PERMISSIONS, *_DOCUMENT_PERMISSIONS],
    INSTRUCTOR: [*_CONTENT_PERMISSIONS, *_DOCUMENT_PERMISSIONS],
    VIEWER: [
        "dashboard.read",
        "template.read",
        "template.use",
        "course.get",
        "course.list",
        "course.listMine",
        "instructor.get",
        "instructor.getByUser",
        "instructor.list",
        "schedule.get",
        "schedule.list",
        "lecture.get",
        "lecture.list",
        *_DOCUMENT_PERMISSIONS,
    ],
    GUEST: ["template.read", "template.use", *_DOCUMENT_PERMISSIONS],
}


class GrantLike(Protocol):
    permission_key: str
    effect: str


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    reason: str
    source: str


def permission_matches(rule_key: str, permission_key: str) -> bool:
    if rule_key == "*" or rule_key == permission_key:
        return True
    if rule_key.endswith(".*"):
        return permission_key.startswith(rule_key[:-1])
    return False


def has_role_default_allow(role: str, permission_key: str) -> bool:
    return any(permission_matches(rule, permission_key) for rule in ROLE_DEFAULT_ALLOW.get(role, []))


def _matches_effect(grants: Iterable[GrantLike], effect: str, permission_key: str) -> bool:
    return any(
        grant.effect == effect and permission_matches(grant.permission_key, permission_key)
        for grant in grants
    )


def evaluate_permission_decision(
    role: str,
    permission_key: str,
    user_grants: Optional[Iterable[GrantLike]] = None,
    group_grants: Optional[Iterable[GrantLike]] = None,
    role_grants: Optional[Iterable[GrantLike]] = None,
) -> PermissionDecision:
    if role == ADMIN:
        return PermissionDecision(True, "admin-bypass", "admin")

    scoped = [
        ("user", list(user_grants or [])),
        ("group", list(group_grants or [])),
        ("role", list(role_grants or [])),
    ]
    # deny는 모든 출처의 allow보다 먼저 평가한다.
    for source, grants in scoped:
        if _matches_effect(grants, DENY, permission_key):
            return PermissionDecision(False, f"{source}-deny", source)
    for source, grants in scoped:
        if _matches_effect(grants, ALLOW, permission_key):
            return PermissionDecision(True, f"{source}-allow", source)

    if has_role_default_allow(role, permission_key):
        return PermissionDecision(True, "role-default-allow", "role-default")
    return PermissionDecision(False, "default-deny", "none")
