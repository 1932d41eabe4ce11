"""Service layer: business rules over the repositories."""

from app.services.groups import GroupService, MembershipError, MembershipErrorKind
from app.services.users import UserService

__all__ = ["GroupService", "MembershipError", "MembershipErrorKind", "UserService"]
