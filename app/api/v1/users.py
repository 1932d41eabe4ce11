"""User endpoints: CRUD and the groups a user belongs to."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.api.v1.auth import require_admin
from app.api.v1.deps import get_group_service, get_user_service
from app.core.errors import ErrorCode, conflict, not_found
from app.core.security import hash_password
from app.schemas.groups import GroupResponse
from app.schemas.users import UserCreate, UserResponse, UserUpdate
from app.services import GroupService, UserService

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def _user_exists_error() -> HTTPException:
    return conflict(ErrorCode.USER_ALREADY_EXISTS, "User already exists")


def _user_not_found_error() -> HTTPException:
    return not_found(ErrorCode.USER_NOT_FOUND, "User not found")


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_user(body: UserCreate, users: UserServiceDep) -> UserResponse:
    """Create a user (admin only). 400 if the email is already registered."""
    if users.find_by_email(body.email) is not None:
        raise _user_exists_error()
    data = body.model_dump()
    data["password"] = hash_password(body.password)
    try:
        user = users.create(data)
    except IntegrityError as e:
        # Lost a race with a concurrent create for the same email.
        raise _user_exists_error() from e
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
def list_users(users: UserServiceDep) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in users.find_all()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, users: UserServiceDep) -> UserResponse:
    user = users.find_by_id(user_id)
    if user is None:
        raise _user_not_found_error()
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, body: UserUpdate, users: UserServiceDep) -> UserResponse:
    """Update the supplied fields. 404 if the user does not exist, 400 if the new email is taken."""
    if users.find_by_id(user_id) is None:
        raise _user_not_found_error()
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in data:
        other = users.find_by_email(data["email"])
        if other is not None and other.id != user_id:
            raise _user_exists_error()
    try:
        user = users.update(user_id, data)
    except IntegrityError as e:
        raise _user_exists_error() from e
    if user is None:
        raise _user_not_found_error()
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=UserResponse)
def delete_user(user_id: int, users: UserServiceDep) -> UserResponse:
    """Hard delete; returns the removed record."""
    user = users.delete(user_id)
    if user is None:
        raise _user_not_found_error()
    return UserResponse.model_validate(user)


@router.get("/{user_id}/groups", response_model=list[GroupResponse])
def get_groups_by_user(
    user_id: int,
    users: UserServiceDep,
    groups: Annotated[GroupService, Depends(get_group_service)],
) -> list[GroupResponse]:
    """Groups the user belongs to. 404 if the user does not exist."""
    if users.find_by_id(user_id) is None:
        raise _user_not_found_error()
    return [GroupResponse.model_validate(g) for g in groups.list_by_user(user_id)]
