"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: Literal["ok", "degraded"] = Field(
        default="ok", description="'degraded' when the database is unreachable"
    )
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against DATABASE_URL",
    )
