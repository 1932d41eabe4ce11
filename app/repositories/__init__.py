"""Data access for users, groups and their memberships."""

from app.repositories.groups import GroupRepository
from app.repositories.users import UserRepository

__all__ = ["GroupRepository", "UserRepository"]
