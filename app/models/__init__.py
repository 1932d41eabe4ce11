"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.group import Group, user_groups
from app.models.user import User

__all__ = ["Base", "Group", "User", "user_groups"]
