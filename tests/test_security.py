"""
Tests for password hashing and bearer token handling.
"""

from datetime import timedelta

import pytest

from core.errors import ConfigurationError, InvalidToken
from core.security import PasswordHasher, TokenService


CLAIMS = {"id": 7, "username": "alice", "email": "alice@example.com"}


class TestPasswordHasher:
    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        digest = self.hasher.hash("hunter2")
        assert digest != "hunter2"
        assert digest.startswith("$2")

    def test_hash_is_salted(self):
        assert self.hasher.hash("hunter2") != self.hasher.hash("hunter2")

    def test_verify(self):
        digest = self.hasher.hash("hunter2")
        assert self.hasher.verify("hunter2", digest) is True
        assert self.hasher.verify("wrong", digest) is False

    def test_verify_garbage_hash_returns_false(self):
        assert self.hasher.verify("hunter2", "not-a-hash") is False


class TestTokenService:
    def test_missing_secret_fails_fast(self):
        with pytest.raises(ConfigurationError):
            TokenService(None)
        with pytest.raises(ConfigurationError):
            TokenService("")

    def test_issue_and_verify(self):
        tokens = TokenService("secret-a")
        claims = tokens.verify(tokens.issue(CLAIMS))
        assert claims["id"] == 7
        assert claims["username"] == "alice"
        assert claims["email"] == "alice@example.com"

    def test_default_expiry_is_one_hour(self):
        tokens = TokenService("secret-a")
        claims = tokens.verify(tokens.issue(CLAIMS))
        assert claims["exp"] - claims["iat"] == 3600

    def test_expired_token_rejected(self):
        tokens = TokenService("secret-a")
        token = tokens.issue(CLAIMS, expires_delta=timedelta(seconds=-10))
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_token_signed_with_other_key_rejected(self):
        token = TokenService("secret-b").issue(CLAIMS)
        with pytest.raises(InvalidToken):
            TokenService("secret-a").verify(token)

    def test_tampered_payload_rejected(self):
        tokens = TokenService("secret-a")
        header, _, signature = tokens.issue(CLAIMS).split(".")
        forged_payload = TokenService("secret-b").issue({**CLAIMS, "id": 1}).split(".")[1]
        with pytest.raises(InvalidToken):
            tokens.verify(f"{header}.{forged_payload}.{signature}")

    def test_malformed_token_rejected(self):
        with pytest.raises(InvalidToken):
            TokenService("secret-a").verify("definitely.not.a-jwt")
