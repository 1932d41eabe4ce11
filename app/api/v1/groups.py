"""Group endpoints: CRUD, membership changes and member listings."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.api.v1.deps import get_group_service, get_user_service
from app.core.errors import ErrorCode, conflict, not_found
from app.schemas.groups import GroupCreate, GroupResponse, GroupUpdate
from app.schemas.users import UserResponse
from app.services import GroupService, MembershipError, MembershipErrorKind, UserService

logger = logging.getLogger(__name__)
router = APIRouter()

GroupServiceDep = Annotated[GroupService, Depends(get_group_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def _group_exists_error() -> HTTPException:
    return conflict(ErrorCode.GROUP_ALREADY_EXISTS, "Group already exists")


def _group_not_found_error() -> HTTPException:
    return not_found(ErrorCode.GROUP_NOT_FOUND, "Group not found")


def _membership_error_to_http(e: MembershipError) -> HTTPException:
    if e.kind is MembershipErrorKind.ALREADY_MEMBER:
        return conflict(ErrorCode.USER_ALREADY_IN_GROUP, e.message)
    if e.kind is MembershipErrorKind.NOT_MEMBER:
        return not_found(ErrorCode.USER_NOT_IN_GROUP, e.message)
    if e.entity == "user":
        return not_found(ErrorCode.USER_NOT_FOUND, e.message)
    return not_found(ErrorCode.GROUP_NOT_FOUND, e.message)


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(body: GroupCreate, groups: GroupServiceDep) -> GroupResponse:
    """Create a group. 400 if the name is already taken."""
    if groups.find_by_name(body.name) is not None:
        raise _group_exists_error()
    try:
        group = groups.create(body.model_dump())
    except IntegrityError as e:
        raise _group_exists_error() from e
    return GroupResponse.model_validate(group)


@router.get("", response_model=list[GroupResponse])
def list_groups(groups: GroupServiceDep) -> list[GroupResponse]:
    return [GroupResponse.model_validate(g) for g in groups.find_all()]


@router.get("/by-name/{name}", response_model=GroupResponse)
def get_group_by_name(name: str, groups: GroupServiceDep) -> GroupResponse:
    group = groups.find_by_name(name)
    if group is None:
        raise _group_not_found_error()
    return GroupResponse.model_validate(group)


@router.get("/by-name/{name}/users", response_model=list[UserResponse])
def get_users_by_group_name(
    name: str,
    groups: GroupServiceDep,
    users: UserServiceDep,
) -> list[UserResponse]:
    if groups.find_by_name(name) is None:
        raise _group_not_found_error()
    return [UserResponse.model_validate(u) for u in users.list_by_group_name(name)]


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(group_id: int, groups: GroupServiceDep) -> GroupResponse:
    group = groups.find_by_id(group_id)
    if group is None:
        raise _group_not_found_error()
    return GroupResponse.model_validate(group)


@router.put("/{group_id}", response_model=GroupResponse)
def update_group(group_id: int, body: GroupUpdate, groups: GroupServiceDep) -> GroupResponse:
    """Rename the group. 404 if it does not exist, 400 if the new name is taken."""
    if groups.find_by_id(group_id) is None:
        raise _group_not_found_error()
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in data:
        other = groups.find_by_name(data["name"])
        if other is not None and other.id != group_id:
            raise _group_exists_error()
    try:
        group = groups.update(group_id, data)
    except IntegrityError as e:
        raise _group_exists_error() from e
    if group is None:
        raise _group_not_found_error()
    return GroupResponse.model_validate(group)


@router.delete("/{group_id}", response_model=GroupResponse)
def delete_group(group_id: int, groups: GroupServiceDep) -> GroupResponse:
    group = groups.delete(group_id)
    if group is None:
        raise _group_not_found_error()
    return GroupResponse.model_validate(group)


@router.get("/{group_id}/users", response_model=list[UserResponse])
def get_users_by_group(
    group_id: int,
    groups: GroupServiceDep,
    users: UserServiceDep,
) -> list[UserResponse]:
    """Members of the group. 404 if the group does not exist."""
    if groups.find_by_id(group_id) is None:
        raise _group_not_found_error()
    return [UserResponse.model_validate(u) for u in users.list_by_group(group_id)]


@router.post("/{group_id}/{user_id}", response_model=GroupResponse)
def add_user_to_group(
    group_id: int,
    user_id: int,
    groups: GroupServiceDep,
    users: UserServiceDep,
) -> GroupResponse:
    """
    Add the user to the group (and the group to the user).
    404 if either does not exist, 400 if the user is already a member.
    """
    if users.find_by_id(user_id) is None:
        raise not_found(ErrorCode.USER_NOT_FOUND, "User not found")
    try:
        group = groups.add_user_to_group(group_id, user_id)
    except MembershipError as e:
        logger.info(
            "Membership add rejected",
            extra={"group_id": group_id, "user_id": user_id, "reason": e.kind.value},
        )
        raise _membership_error_to_http(e) from e
    return GroupResponse.model_validate(group)


@router.delete("/{group_id}/{user_id}", response_model=GroupResponse)
def remove_user_from_group(
    group_id: int,
    user_id: int,
    groups: GroupServiceDep,
    users: UserServiceDep,
) -> GroupResponse:
    """Remove the user from the group. 404 if either does not exist or the user is not a member."""
    if users.find_by_id(user_id) is None:
        raise not_found(ErrorCode.USER_NOT_FOUND, "User not found")
    try:
        group = groups.remove_user_from_group(group_id, user_id)
    except MembershipError as e:
        logger.info(
            "Membership removal rejected",
            extra={"group_id": group_id, "user_id": user_id, "reason": e.kind.value},
        )
        raise _membership_error_to_http(e) from e
    return GroupResponse.model_validate(group)
