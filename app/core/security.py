"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

import bcrypt
import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.config import settings as default_settings

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

# Min/max lengths for name, email and password validation.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 320
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

Role = Literal["admin", "user"]
ROLES: tuple[str, ...] = ("admin", "user")


class TokenClaims(BaseModel):
    """Decoded bearer token payload."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    role: Role
    time_exp: int = Field(alias="timeExp", description="Explicit expiry (unix seconds)")


class TokenRejection(str, Enum):
    """Why a bearer token was refused."""

    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_CLAIMS = "invalid_claims"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def issue_token(
    email: str,
    role: str,
    settings: "Settings | None" = None,
    now: datetime | None = None,
) -> str:
    """
    Create a JWT carrying email, role and two expiries.

    timeExp is the authoritative lifetime (JWT_EXPIRE_MINUTES); exp is the
    envelope checked by PyJWT (JWT_ENVELOPE_EXPIRE_MINUTES).
    """
    settings = settings or default_settings
    now = now or datetime.now(UTC)
    time_exp = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "email": email,
        "role": role,
        "timeExp": int(time_exp.timestamp()),
        "exp": now + timedelta(minutes=settings.JWT_ENVELOPE_EXPIRE_MINUTES),
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_token(
    token: str,
    settings: "Settings | None" = None,
    now: datetime | None = None,
) -> TokenClaims | TokenRejection:
    """
    Validate signature and both expiries; return claims or the rejection reason.

    Never raises for a bad token.
    """
    settings = settings or default_settings
    now = now or datetime.now(UTC)
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "timeExp"]},
        )
    except jwt.ExpiredSignatureError:
        return TokenRejection.EXPIRED
    except jwt.InvalidSignatureError:
        return TokenRejection.INVALID_SIGNATURE
    except jwt.MissingRequiredClaimError:
        return TokenRejection.INVALID_CLAIMS
    except jwt.PyJWTError:
        return TokenRejection.MALFORMED

    try:
        claims = TokenClaims.model_validate(payload)
    except ValidationError:
        return TokenRejection.INVALID_CLAIMS
    if claims.time_exp <= int(now.timestamp()):
        return TokenRejection.EXPIRED
    return claims
