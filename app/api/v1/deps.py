"""Request-scoped construction of repositories and services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories import GroupRepository, UserRepository
from app.services import GroupService, UserService


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_group_repository(db: Annotated[Session, Depends(get_db)]) -> GroupRepository:
    return GroupRepository(db)


def get_user_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    groups: Annotated[GroupRepository, Depends(get_group_repository)],
) -> UserService:
    """UserService bound to this request's session (shared through dependency caching)."""
    return UserService(users=users, groups=groups)


def get_group_service(
    groups: Annotated[GroupRepository, Depends(get_group_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> GroupService:
    return GroupService(groups=groups, users=users)
