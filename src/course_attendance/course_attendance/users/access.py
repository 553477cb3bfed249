from __future__ import annotations

from typing import Optional

from ..core.enums import Capability, Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..courses.model import Course
from .service import SessionUser

_ROLE_CAPABILITIES = {
    Role.ADMIN: frozenset({Capability.LOOKUP, Capability.VIEW_REPORTS, Capability.MANAGE_COURSES}),
    Role.TEACHER: frozenset({Capability.LOOKUP, Capability.VIEW_REPORTS, Capability.MARK_ATTENDANCE}),
    Role.STUDENT: frozenset({Capability.LOOKUP}),
}


class AccessPolicy:
    """Resolves identity -> capability set and rejects before the core runs.

    MARK_ATTENDANCE is bound to a course: only the teacher assigned to that
    course holds it.
    """

    def capabilities_for(self, user: SessionUser, course: Optional[Course] = None) -> set[Capability]:
        caps = set(_ROLE_CAPABILITIES.get(user.role, ()))
        if course is None or course.teacher_id != user.user_id:
            caps.discard(Capability.MARK_ATTENDANCE)
        return caps

    def require_role(self, user: Optional[SessionUser], capability: Capability) -> None:
        """Reject identities whose role can never hold ``capability``, for any course."""

        if user is None:
            raise AuthenticationError("Authentication required")
        if capability not in _ROLE_CAPABILITIES.get(user.role, ()):
            raise AuthorizationError("You do not have permission for this action")

    def require(self, user: Optional[SessionUser], capability: Capability, course: Optional[Course] = None) -> None:
        self.require_role(user, capability)
        if capability not in self.capabilities_for(user, course):
            raise AuthorizationError("You do not have permission for this action")
