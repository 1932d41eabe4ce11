"""Unit tests for app.core.security: bcrypt hashing and token issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    TokenClaims,
    TokenRejection,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)
from tests.support import make_settings


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("s3cret-pass")
        self.assertNotEqual(hashed, "s3cret-pass")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("s3cret-pass", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("s3cret-pass")
        self.assertFalse(verify_password("other-pass", hashed))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("s3cret-pass"), hash_password("s3cret-pass"))

    def test_malformed_stored_hash_is_false(self) -> None:
        self.assertFalse(verify_password("s3cret-pass", "not-a-bcrypt-hash"))


class TestIssueAndVerifyToken(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings(JWT_EXPIRE_MINUTES=60, JWT_ENVELOPE_EXPIRE_MINUTES=120)

    def test_round_trip_returns_claims(self) -> None:
        token = issue_token("a@x.com", "admin", settings=self.settings)
        claims = verify_token(token, settings=self.settings)
        self.assertIsInstance(claims, TokenClaims)
        self.assertEqual(claims.email, "a@x.com")
        self.assertEqual(claims.role, "admin")

    def test_payload_carries_both_expiries(self) -> None:
        now = datetime.now(UTC)
        token = issue_token("a@x.com", "user", settings=self.settings, now=now)
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])
        self.assertEqual(payload["timeExp"], int((now + timedelta(minutes=60)).timestamp()))
        self.assertEqual(payload["exp"], int((now + timedelta(minutes=120)).timestamp()))

    def test_explicit_expiry_is_authoritative(self) -> None:
        # timeExp passed 30 minutes ago while the exp envelope is still valid.
        issued = datetime.now(UTC) - timedelta(minutes=90)
        token = issue_token("a@x.com", "user", settings=self.settings, now=issued)
        self.assertIs(verify_token(token, settings=self.settings), TokenRejection.EXPIRED)

    def test_verify_uses_supplied_clock(self) -> None:
        token = issue_token("a@x.com", "user", settings=self.settings)
        later = datetime.now(UTC) + timedelta(minutes=61)
        self.assertIs(verify_token(token, settings=self.settings, now=later), TokenRejection.EXPIRED)

    def test_envelope_expiry_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=3)
        token = issue_token("a@x.com", "user", settings=self.settings, now=issued)
        self.assertIs(verify_token(token, settings=self.settings), TokenRejection.EXPIRED)

    def test_wrong_secret_rejected(self) -> None:
        other = make_settings(JWT_SECRET="another-secret")
        token = issue_token("a@x.com", "user", settings=other)
        self.assertIs(
            verify_token(token, settings=self.settings), TokenRejection.INVALID_SIGNATURE
        )

    def test_garbage_token_rejected(self) -> None:
        self.assertIs(verify_token("not-a-token", settings=self.settings), TokenRejection.MALFORMED)

    def test_missing_time_exp_rejected(self) -> None:
        token = jwt.encode(
            {"email": "a@x.com", "role": "user", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "test-secret",
            algorithm="HS256",
        )
        self.assertIs(verify_token(token, settings=self.settings), TokenRejection.INVALID_CLAIMS)

    def test_unknown_role_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "email": "a@x.com",
                "role": "root",
                "timeExp": int((now + timedelta(hours=1)).timestamp()),
                "exp": now + timedelta(hours=2),
            },
            "test-secret",
            algorithm="HS256",
        )
        self.assertIs(verify_token(token, settings=self.settings), TokenRejection.INVALID_CLAIMS)
