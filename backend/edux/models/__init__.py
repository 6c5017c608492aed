"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from edux.models.user import User, Group, GroupMember
from edux.models.access_scope import PermissionGrant
from edux.models.course import Course, CourseInstructor, CourseLecture
from edux.models.lecture import Lecture
from edux.models.schedule import Schedule
from edux.models.instructor import Instructor, InstructorProfile
from edux.models.template import Template
from edux.models.document import RenderJob, UserDocument
from edux.models.site_setting import AppSetting

__all__ = [
    "User", "Group", "GroupMember",
    "PermissionGrant",
    "Course", "CourseInstructor", "CourseLecture",
    "Lecture",
    "Schedule",
    "Instructor", "InstructorProfile",
    "Template",
    "RenderJob", "UserDocument",
    "AppSetting",
]
