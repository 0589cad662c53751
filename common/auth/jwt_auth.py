"""
JWT token issuance and verification.

Tokens are stateless: every claim needed downstream travels inside the
signed payload together with ``iat`` and ``exp``. There is no revocation
list, so a token stays valid until it expires.

Example:
    auth = JWTAuth(
        secret="your-secret-key",
        access_token_expire_minutes=60,
    )

    token = auth.issue_token({"customer_id": "65f0...", "email": "a@b.c"})
    claims = auth.verify_token(token)
    print(claims["customer_id"])
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

from bson import ObjectId
from jose import jwt, JWTError, ExpiredSignatureError

logger = logging.getLogger(__name__)


class TokenError(ValueError):
    """Base class for token verification failures."""

    reason = "invalid"


class MalformedToken(TokenError):
    """The token could not be parsed at all."""

    reason = "malformed"


class InvalidSignature(TokenError):
    """The signature does not match the payload."""

    reason = "invalid_signature"


class TokenExpired(TokenError):
    """The signature is valid but the embedded expiry has passed."""

    reason = "expired"


# Claims managed by the issuer itself
RESERVED_CLAIMS = ("exp", "iat")


def _serialize_claim(value: Any) -> Any:
    """Convert claim values that JSON cannot encode directly."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class JWTAuth:
    """
    Issues and verifies HS256-signed JWTs.

    The secret and the default lifetime come from configuration and are
    injected once at startup.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 7 * 24 * 60,
    ):
        """
        Initialize JWT auth.

        Args:
            secret: Secret key for JWT signing (keep this secure!)
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Default token lifetime
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")

        self.secret = secret
        self.algorithm = algorithm
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)

    def issue_token(
        self,
        claims: Dict[str, Any],
        ttl: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed token carrying ``claims``.

        Args:
            claims: Identity claims to embed
            ttl: Token lifetime; defaults to the configured lifetime

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        payload = {
            key: _serialize_claim(value)
            for key, value in claims.items()
            if key not in RESERVED_CLAIMS
        }
        payload["iat"] = now
        payload["exp"] = now + (ttl if ttl is not None else self.access_token_expire)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry, returning the decoded claims.

        Raises:
            MalformedToken: token cannot be parsed
            InvalidSignature: signature or algorithm mismatch
            TokenExpired: signature valid but ``exp`` has passed
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedToken(f"Malformed token: {e}") from e

        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except ExpiredSignatureError as e:
            raise TokenExpired("Token has expired") from e
        except JWTError as e:
            raise InvalidSignature(f"Invalid token: {e}") from e
