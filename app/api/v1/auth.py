"""JWT login and auth dependencies (get_token_claims, require_role, protect_if_configured)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.deps import get_user_service
from app.core.config import Settings, get_settings
from app.core.errors import ErrorCode, api_error, unauthenticated
from app.core.security import (
    TokenClaims,
    TokenRejection,
    issue_token,
    verify_password,
    verify_token,
)
from app.schemas.auth import LoginRequest, LoginResponse
from app.services import UserService

router = APIRouter()
security = HTTPBearer(auto_error=False)

_REJECTION_MESSAGES = {
    TokenRejection.MALFORMED: "Invalid token",
    TokenRejection.EXPIRED: "Token has expired",
    TokenRejection.INVALID_SIGNATURE: "Invalid token signature",
    TokenRejection.INVALID_CLAIMS: "Invalid token payload",
}


@router.post("", response_model=LoginResponse)
def login(
    body: LoginRequest,
    users: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = users.find_by_email(body.email)
    if user is None or not verify_password(body.password, user.password):
        raise unauthenticated(ErrorCode.INVALID_CREDENTIALS, "Invalid credentials")
    token = issue_token(email=user.email, role=user.role, settings=settings)
    return LoginResponse(email=user.email, token=token)


def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise unauthenticated(ErrorCode.NOT_AUTHENTICATED, "Not logged in")
    result = verify_token(credentials.credentials, settings=settings)
    if isinstance(result, TokenRejection):
        raise unauthenticated(ErrorCode.INVALID_TOKEN, _REJECTION_MESSAGES[result])
    return result


def require_role(role: str) -> Callable[..., TokenClaims]:
    """Build a dependency that admits only tokens whose role equals `role` exactly."""

    def dependency(
        claims: Annotated[TokenClaims, Depends(get_token_claims)],
    ) -> TokenClaims:
        if claims.role != role:
            raise api_error(
                status.HTTP_403_FORBIDDEN,
                ErrorCode.FORBIDDEN,
                "You do not have the authorization and permissions to access this resource.",
            )
        return claims

    return dependency


require_admin = require_role("admin")


def protect_if_configured(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenClaims | None:
    """Dependency: enforce get_token_claims only when AUTH_PROTECT_ALL_ROUTES is enabled."""
    if not settings.AUTH_PROTECT_ALL_ROUTES:
        return None
    return get_token_claims(credentials, settings)
