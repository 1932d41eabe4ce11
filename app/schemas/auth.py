"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from app.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN


class LoginRequest(BaseModel):
    """Credentials for login. Length rules only; a wrong password is a 401, not a 422."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class LoginResponse(BaseModel):
    """JWT returned after successful login."""

    email: str = Field(..., description="Email of the authenticated user")
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
