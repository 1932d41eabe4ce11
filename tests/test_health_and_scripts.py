"""Health endpoint and the create_user bootstrap script."""

import runpy
import unittest
from unittest.mock import patch

from app.core.security import verify_password
from app.models import User
from app.main import create_app
from app.scripts import create_user
from tests.support import ApiTestCase, DatabaseTestCase, make_settings


class TestHealth(ApiTestCase):
    def test_reports_connected_database(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"status": "ok", "environment": "dev", "database": "connected"},
        )

    def test_reports_disconnected_database(self) -> None:
        with patch("app.api.v1.health.check_db_connected", return_value=False):
            response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["database"], "disconnected")


class TestCreateUserScript(DatabaseTestCase):
    def run_script(self, *argv: str) -> int:
        with patch.object(create_user, "SessionLocal", self.SessionFactory):
            return create_user.main(list(argv))

    def test_creates_admin_with_hashed_password(self) -> None:
        code = self.run_script("Ada Admin", "ada@example.com", "long-enough-pw", "admin")
        self.assertEqual(code, 0)
        user = self.db.query(User).filter(User.email == "ada@example.com").one()
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.name, "Ada Admin")
        self.assertTrue(verify_password("long-enough-pw", user.password))

    def test_existing_email_fails(self) -> None:
        self.seed_user(email="ada@example.com")
        self.assertEqual(self.run_script("Ada", "ada@example.com", "long-enough-pw"), 1)

    def test_short_password_fails(self) -> None:
        self.assertEqual(self.run_script("Ada", "ada@example.com", "short"), 1)
        self.assertEqual(self.db.query(User).count(), 0)


class TestApiPrefix(ApiTestCase):
    def build_app(self):
        return create_app(make_settings(API_PREFIX="/api/v1"))

    def test_routes_mount_under_prefix(self) -> None:
        self.assertEqual(self.client.get("/api/v1/health").status_code, 200)
        self.assertEqual(self.client.get("/api/v1/groups").json(), [])
        self.assertEqual(self.client.get("/groups").status_code, 404)


class TestModuleEntrypoint(unittest.TestCase):
    def test_python_dash_m_app_starts_server(self) -> None:
        with patch("app.main.run") as run:
            runpy.run_module("app", run_name="__main__")
        run.assert_called_once_with()
