"""Pydantic request/response schemas."""

from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.groups import GroupCreate, GroupResponse, GroupUpdate
from app.schemas.health import HealthResponse
from app.schemas.users import UserCreate, UserResponse, UserUpdate

__all__ = [
    "GroupCreate",
    "GroupResponse",
    "GroupUpdate",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
