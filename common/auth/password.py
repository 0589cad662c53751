"""
bcrypt password hashing.

Passwords are pre-hashed with SHA-256 before bcrypt so that inputs longer
than bcrypt's 72-byte limit are handled consistently. Hashes produced by
plain bcrypt (for example records migrated from another service) still
verify.

Example:
    hasher = PasswordHasher(rounds=10)
    hashed = hasher.hash("s3cret")
    hasher.verify("s3cret", hashed)  # True
"""

import base64
import hashlib
import logging

import bcrypt as bcrypt_lib

logger = logging.getLogger(__name__)


DEFAULT_ROUNDS = 10


class PasswordHasher:
    """One-way salted password hashing with a fixed cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (log2 of the iteration count)
        """
        self.rounds = rounds

    def _prehash_password(self, password: str) -> bytes:
        """Pre-hash password with SHA-256 before bcrypt."""
        sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(sha256_hash)

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt with SHA-256 pre-hashing."""
        salt = bcrypt_lib.gensalt(rounds=self.rounds)
        return bcrypt_lib.hashpw(self._prehash_password(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Verify a password against its hash.

        Any malformed hash counts as a mismatch; this method never raises.
        """
        try:
            hashed_bytes = hashed.encode("utf-8")
        except AttributeError:
            return False

        try:
            if bcrypt_lib.checkpw(self._prehash_password(password), hashed_bytes):
                return True
        except (ValueError, TypeError):
            logger.debug("Stored password hash is malformed")
            return False

        # Legacy hashes were produced from the raw password
        try:
            return bcrypt_lib.checkpw(password.encode("utf-8"), hashed_bytes)
        except (ValueError, TypeError):
            # Password too long for direct bcrypt - definitely not a match
            return False
