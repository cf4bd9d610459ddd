"""
Credential service for password hashing and session token generation.

Passwords are hashed with bcrypt (adaptive, salted). Session tokens are
random URL-safe strings; only their SHA-256 digest is ever stored.
"""

import hashlib
import logging
import secrets
from functools import lru_cache

import bcrypt

from core import config
from core.constants import BCRYPT_MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH
from core.exceptions import WeakPasswordError

logger = logging.getLogger(__name__)


class CredentialService:
    """Service for password and session token operations."""

    SESSION_TOKEN_BYTES = 32  # 256 bits of entropy

    @classmethod
    def _password_bytes(cls, password: str) -> bytes:
        # bcrypt only looks at the first 72 bytes; truncate explicitly so
        # long passphrases behave the same as in other bcrypt implementations
        return password.encode('utf-8')[:BCRYPT_MAX_PASSWORD_BYTES]

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a plaintext password for storage.

        Args:
            password: Plaintext password (at least MIN_PASSWORD_LENGTH characters)

        Returns:
            bcrypt hash string

        Raises:
            WeakPasswordError: If the password is shorter than the minimum
        """
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError()

        salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
        return bcrypt.hashpw(cls._password_bytes(password), salt).decode('utf-8')

    @classmethod
    def verify_password(cls, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a stored bcrypt hash.

        Uses bcrypt's own comparison, so timing does not depend on where the
        inputs differ. Never raises: malformed hashes or empty inputs are
        simply a mismatch.
        """
        if not password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(cls._password_bytes(password), hashed_password.encode('utf-8'))
        except (ValueError, TypeError) as e:
            logger.debug(f"Password verification failed on malformed input: {e}")
            return False

    @staticmethod
    @lru_cache(maxsize=4)
    def _dummy_hash(rounds: int) -> str:
        return bcrypt.hashpw(secrets.token_bytes(16), bcrypt.gensalt(rounds=rounds)).decode('utf-8')

    @classmethod
    def verify_unknown_user(cls, password: str) -> bool:
        """
        Spend the same bcrypt work as verify_password when no account matched.

        Keeps the response time of a login for an unknown email in line with
        one for a wrong password. Always returns False.
        """
        cls.verify_password(password, cls._dummy_hash(config.BCRYPT_ROUNDS))
        return False

    @classmethod
    def generate_session_token(cls) -> str:
        """Create a new opaque, unguessable session token."""
        return secrets.token_urlsafe(cls.SESSION_TOKEN_BYTES)

    @classmethod
    def hash_session_token(cls, token: str) -> str:
        """
        SHA-256 digest of a session token, used as the database lookup key.

        Returns:
            str: SHA-256 hash in hex format
        """
        return hashlib.sha256(token.encode('utf-8')).hexdigest()


# Global instance
credential_service = CredentialService()
