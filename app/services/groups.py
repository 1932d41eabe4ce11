"""Group service: CRUD plus membership changes that keep both sides in sync."""

import logging
from enum import Enum
from typing import Any

from app.models import Group, User
from app.repositories import GroupRepository, UserRepository

logger = logging.getLogger(__name__)


class MembershipErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_MEMBER = "already_member"
    NOT_MEMBER = "not_member"


class MembershipError(Exception):
    """Raised when a membership change cannot be applied."""

    def __init__(self, kind: MembershipErrorKind, message: str, entity: str | None = None) -> None:
        self.kind = kind
        self.message = message
        # "user" or "group" for NOT_FOUND
        self.entity = entity
        super().__init__(message)


class GroupService:
    """Business rules for groups. Callers check name uniqueness before create()."""

    def __init__(self, groups: GroupRepository, users: UserRepository) -> None:
        self._groups = groups
        self._users = users

    def create(self, data: dict[str, Any]) -> Group:
        group = self._groups.add(Group(**data))
        logger.info("Group created", extra={"group_id": group.id})
        return group

    def find_all(self) -> list[Group]:
        return self._groups.list_all()

    def find_by_id(self, group_id: int) -> Group | None:
        return self._groups.get(group_id)

    def find_by_name(self, name: str) -> Group | None:
        return self._groups.get_by_name(name)

    def update(self, group_id: int, data: dict[str, Any]) -> Group | None:
        group = self._groups.get(group_id)
        if group is None:
            return None
        for field, value in data.items():
            setattr(group, field, value)
        return self._groups.save(group)

    def delete(self, group_id: int) -> Group | None:
        group = self._groups.get(group_id)
        if group is None:
            return None
        self._groups.delete(group)
        logger.info("Group deleted", extra={"group_id": group_id})
        return group

    def add_user_to_group(self, group_id: int, user_id: int) -> Group:
        """
        Add user_id to the group and group_id to the user in one write.

        Raises MembershipError (NOT_FOUND, ALREADY_MEMBER).
        """
        group, user = self._load_pair(group_id, user_id)
        if self._groups.is_member(group_id, user_id) or not self._groups.add_member(group, user):
            raise MembershipError(
                MembershipErrorKind.ALREADY_MEMBER,
                "User already exists in group",
            )
        logger.info("User added to group", extra={"group_id": group_id, "user_id": user_id})
        return group

    def remove_user_from_group(self, group_id: int, user_id: int) -> Group:
        """
        Remove the membership from both sides in one write.

        Raises MembershipError (NOT_FOUND, NOT_MEMBER).
        """
        group, user = self._load_pair(group_id, user_id)
        if not self._groups.remove_member(group, user):
            raise MembershipError(
                MembershipErrorKind.NOT_MEMBER,
                "User not found in group",
            )
        logger.info("User removed from group", extra={"group_id": group_id, "user_id": user_id})
        return group

    def list_by_user(self, user_id: int) -> list[Group]:
        if self._users.get(user_id) is None:
            return []
        return self._groups.list_by_user_id(user_id)

    def _load_pair(self, group_id: int, user_id: int) -> tuple[Group, User]:
        user = self._users.get(user_id)
        if user is None:
            raise MembershipError(MembershipErrorKind.NOT_FOUND, "User not found", entity="user")
        group = self._groups.get(group_id)
        if group is None:
            raise MembershipError(MembershipErrorKind.NOT_FOUND, "Group not found", entity="group")
        return group, user
