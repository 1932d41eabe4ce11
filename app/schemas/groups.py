"""Request/response schemas for group endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import NAME_MAX_LEN, NAME_MIN_LEN


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)


class GroupUpdate(BaseModel):
    """Body for PUT /groups/{id}. Members are managed via /groups/{idGroup}/{idUser}."""

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)


class GroupResponse(BaseModel):
    """Serialized group with the ids of its members."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    users: list[int] = Field(default_factory=list, validation_alias="user_ids")
    created_at: datetime | None = None
    updated_at: datetime | None = None
