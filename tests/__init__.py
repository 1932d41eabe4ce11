"""Test package. Point the app at SQLite before any app module builds its engine."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("AUTH_PROTECT_ALL_ROUTES", "false")
