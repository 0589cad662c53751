"""
Authentication gates for protected routes.

Validates bearer tokens and attaches the caller's identity to requests.
"""

import logging
from typing import Optional

from fastapi import Request

from common.auth import JWTAuth, TokenError
from common.utils.exceptions import UnauthorizedException, ForbiddenException
from customer_api.auth.identity import IdentityContext

logger = logging.getLogger(__name__)


BEARER_PREFIX = "Bearer "


class AuthGate:
    """
    Gate that requires a valid bearer token.

    Either returns the caller's IdentityContext or raises
    UnauthorizedException; the wrapped handler only runs on success.
    """

    def __init__(self, token_auth: JWTAuth):
        """
        Initialize AuthGate.

        Args:
            token_auth: Verifies token signature and expiry
        """
        self._token_auth = token_auth

    def authenticate(self, authorization: Optional[str]) -> IdentityContext:
        """
        Verify an Authorization header value.

        Args:
            authorization: Raw header value ("Bearer <token>")

        Returns:
            IdentityContext built from the verified claims

        Raises:
            UnauthorizedException: Missing header, bad scheme, or any token failure
        """
        token = self._extract_token(authorization)

        if not token:
            raise UnauthorizedException(
                message="Authentication required",
                code="AUTH_REQUIRED"
            )

        try:
            claims = self._token_auth.verify_token(token)
        except TokenError as e:
            # Expired, forged and malformed tokens share one response
            logger.info(f"Token rejected: {e.reason}")
            raise UnauthorizedException(
                message="Invalid or expired token",
                code="INVALID_TOKEN"
            )

        try:
            return IdentityContext.from_claims(claims)
        except ValueError:
            logger.info("Token rejected: missing customer_id claim")
            raise UnauthorizedException(
                message="Invalid or expired token",
                code="INVALID_TOKEN"
            )

    async def require_auth(self, request: Request) -> IdentityContext:
        """
        Validate the request and attach the identity to request.state.identity.
        """
        identity = self.authenticate(request.headers.get("Authorization"))
        request.state.identity = identity
        return identity

    def _extract_token(self, authorization: Optional[str]) -> Optional[str]:
        """Extract bearer token from Authorization header value."""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return None

        return authorization[len(BEARER_PREFIX):].strip() or None


class AdminGate(AuthGate):
    """
    Gate that additionally requires a truthy is_admin claim.
    """

    def authenticate(self, authorization: Optional[str]) -> IdentityContext:
        """
        Raises:
            UnauthorizedException: As for AuthGate
            ForbiddenException: Authenticated but not an admin
        """
        identity = super().authenticate(authorization)

        if not identity.is_admin:
            logger.info(f"Admin access denied for customer {identity.customer_id}")
            raise ForbiddenException(
                message="Access denied",
                code="ADMIN_REQUIRED"
            )

        return identity
