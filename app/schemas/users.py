"""Request/response schemas for user endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    Role,
)


class UserCreate(BaseModel):
    """Body for POST /users. The password is hashed before it is stored."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = "user"


class UserUpdate(BaseModel):
    """Body for PUT /users/{id}. Only the supplied fields change; groups are managed via /groups."""

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: str | None = Field(
        default=None, min_length=3, max_length=EMAIL_MAX_LEN, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    role: Role | None = None


class UserResponse(BaseModel):
    """Serialized user. password is the stored bcrypt hash."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    email: str
    password: str
    role: Role
    groups: list[int] = Field(default_factory=list, validation_alias="group_ids")
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
