"""Configuration, database session, security helpers and error codes."""

from app.core.config import Settings, get_settings, settings
from app.core.database import SessionLocal, get_db
from app.core.errors import ErrorCode

__all__ = ["ErrorCode", "SessionLocal", "Settings", "get_db", "get_settings", "settings"]
