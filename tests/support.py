"""Shared fixtures: in-memory SQLite database and an app client wired to it."""

import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import hash_password, issue_token
from app.main import app
from app.models import Base, Group, User

TEST_PASSWORD = "correct-horse"


def make_session_factory():
    """Fresh in-memory database with foreign keys enforced; returns (engine, sessionmaker)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    factory = sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )
    return engine, factory


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret",
        "AUTH_PROTECT_ALL_ROUTES": False,
    }
    values.update(overrides)
    return Settings(**values)


class DatabaseTestCase(unittest.TestCase):
    """Gives each test its own empty database and a session on it."""

    def setUp(self) -> None:
        self.engine, self.SessionFactory = make_session_factory()
        self.db: Session = self.SessionFactory()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def seed_user(
        self,
        email: str = "user@example.com",
        role: str = "user",
        name: str = "Test User",
        password: str = TEST_PASSWORD,
    ) -> User:
        with self.SessionFactory() as db:
            user = User(name=name, email=email, password=hash_password(password), role=role)
            db.add(user)
            db.commit()
            db.refresh(user)
            return user

    def seed_group(self, name: str = "Engineering") -> Group:
        with self.SessionFactory() as db:
            group = Group(name=name)
            db.add(group)
            db.commit()
            db.refresh(group)
            return group


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db/get_settings use the test database."""

    settings_overrides: dict = {}
    raise_server_exceptions = True

    def setUp(self) -> None:
        super().setUp()
        self.settings = make_settings(**self.settings_overrides)

        def override_get_db():
            db = self.SessionFactory()
            try:
                yield db
            finally:
                db.close()

        self.app = self.build_app()
        self.app.dependency_overrides[get_db] = override_get_db
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(self.app, raise_server_exceptions=self.raise_server_exceptions)

    def build_app(self) -> FastAPI:
        return app

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()
        super().tearDown()

    def token_for(self, email: str, role: str) -> str:
        return issue_token(email=email, role=role, settings=self.settings)

    def auth_headers(self, email: str = "admin@example.com", role: str = "admin") -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(email, role)}"}

    def create_user_via_api(
        self,
        email: str,
        name: str = "Someone",
        password: str = TEST_PASSWORD,
        role: str = "user",
    ) -> dict:
        response = self.client.post(
            "/users",
            json={"name": name, "email": email, "password": password, "role": role},
            headers=self.auth_headers(),
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_group_via_api(self, name: str) -> dict:
        response = self.client.post("/groups", json={"name": name})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()
