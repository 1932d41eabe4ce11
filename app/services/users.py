"""User service: CRUD and group-membership lookups on top of UserRepository."""

import logging
from typing import Any

from app.core.security import hash_password
from app.models import User
from app.repositories import GroupRepository, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Business rules for users. Repository failures propagate unchanged.

    Callers hash the password and check email uniqueness before create().
    """

    def __init__(self, users: UserRepository, groups: GroupRepository) -> None:
        self._users = users
        self._groups = groups

    def create(self, data: dict[str, Any]) -> User:
        user = self._users.add(User(**data))
        logger.info("User created", extra={"user_id": user.id, "role": user.role})
        return user

    def find_all(self) -> list[User]:
        return self._users.list_all()

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        return self._users.get_by_email(email)

    def update(self, user_id: int, data: dict[str, Any]) -> User | None:
        """Apply the supplied fields; a new password is hashed. None if the user does not exist."""
        user = self._users.get(user_id)
        if user is None:
            return None
        for field, value in data.items():
            if field == "password":
                value = hash_password(value)
            setattr(user, field, value)
        return self._users.save(user)

    def delete(self, user_id: int) -> User | None:
        """Hard delete; memberships go with the user. Returns the removed record."""
        user = self._users.get(user_id)
        if user is None:
            return None
        self._users.delete(user)
        logger.info("User deleted", extra={"user_id": user_id})
        return user

    def list_by_group(self, group_id: int) -> list[User]:
        if self._groups.get(group_id) is None:
            return []
        return self._users.list_by_group_id(group_id)

    def list_by_group_name(self, name: str) -> list[User]:
        if self._groups.get_by_name(name) is None:
            return []
        return self._users.list_by_group_name(name)
