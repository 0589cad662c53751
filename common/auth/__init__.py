"""
Authentication module - password hashing and JWT tokens.
"""

from common.auth.password import PasswordHasher
from common.auth.jwt_auth import (
    JWTAuth,
    TokenError,
    MalformedToken,
    InvalidSignature,
    TokenExpired,
)

__all__ = [
    "PasswordHasher",
    "JWTAuth",
    "TokenError",
    "MalformedToken",
    "InvalidSignature",
    "TokenExpired",
]
