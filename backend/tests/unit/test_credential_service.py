"""
Unit tests for password hashing and session token generation.
"""

import hashlib

import bcrypt
import pytest

from core import config
from core.exceptions import WeakPasswordError
from services.credential_service import CredentialService, credential_service


class TestHashPassword:
    """Test hash_password."""

    def test_hash_and_verify_round_trip(self):
        hashed = credential_service.hash_password("secreto123")

        assert hashed != "secreto123"
        assert credential_service.verify_password("secreto123", hashed) is True

    def test_altered_password_does_not_verify(self):
        hashed = credential_service.hash_password("secreto123")

        assert credential_service.verify_password("secreto124", hashed) is False
        assert credential_service.verify_password("Secreto123", hashed) is False

    def test_same_password_gets_different_salts(self):
        assert credential_service.hash_password("secreto123") != credential_service.hash_password("secreto123")

    @pytest.mark.parametrize("password", ["", "abc", "12345"])
    def test_short_password_rejected(self, password):
        with pytest.raises(WeakPasswordError):
            credential_service.hash_password(password)

    def test_minimum_length_accepted(self):
        hashed = credential_service.hash_password("123456")

        assert credential_service.verify_password("123456", hashed) is True

    def test_uses_configured_work_factor(self, monkeypatch):
        monkeypatch.setattr(config, "BCRYPT_ROUNDS", 12)

        hashed = credential_service.hash_password("secreto123")

        assert hashed.startswith("$2b$12$")

    def test_passwords_beyond_72_bytes_are_truncated(self):
        base = "a" * 72
        hashed = credential_service.hash_password(base + "tail")

        assert credential_service.verify_password(base, hashed) is True
        assert credential_service.verify_password(base + "different", hashed) is True

    def test_hash_is_standard_bcrypt(self):
        hashed = credential_service.hash_password("secreto123")

        assert bcrypt.checkpw(b"secreto123", hashed.encode("utf-8"))


class TestVerifyPassword:
    """Test verify_password never raises."""

    def test_malformed_hash_returns_false(self):
        assert credential_service.verify_password("secreto123", "not-a-bcrypt-hash") is False

    def test_empty_inputs_return_false(self):
        hashed = credential_service.hash_password("secreto123")

        assert credential_service.verify_password("", hashed) is False
        assert credential_service.verify_password("secreto123", "") is False

    def test_unknown_user_still_runs_bcrypt(self, monkeypatch):
        calls = []
        real_checkpw = bcrypt.checkpw

        def counting_checkpw(password, hashed):
            calls.append(hashed)
            return real_checkpw(password, hashed)

        monkeypatch.setattr(bcrypt, "checkpw", counting_checkpw)

        assert credential_service.verify_unknown_user("secreto123") is False
        assert len(calls) == 1
        assert calls[0].startswith(f"$2b$0{config.BCRYPT_ROUNDS}$".encode())


class TestSessionTokens:
    """Test session token generation and digests."""

    def test_tokens_are_unique_and_long(self):
        tokens = {credential_service.generate_session_token() for _ in range(50)}

        assert len(tokens) == 50
        # 32 random bytes, URL-safe base64 without padding
        assert all(len(token) == 43 for token in tokens)

    def test_token_digest_is_sha256_hex(self):
        token = credential_service.generate_session_token()

        digest = CredentialService.hash_session_token(token)

        assert digest == hashlib.sha256(token.encode("utf-8")).hexdigest()
        assert len(digest) == 64
