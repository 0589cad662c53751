"""
FastAPI dependencies for the auth system.

Provides dependency injection for the token issuer and the gates.
"""

from typing import Annotated

from fastapi import Depends, Request

from common.auth import JWTAuth, PasswordHasher
from customer_api.auth.identity import IdentityContext
from customer_api.auth.middleware import AuthGate, AdminGate


_token_auth: JWTAuth | None = None
_password_hasher: PasswordHasher | None = None
_auth_gate: AuthGate | None = None
_admin_gate: AdminGate | None = None


def init_auth_services(
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    access_token_expire_minutes: int = 7 * 24 * 60,
) -> None:
    """
    Initialize auth services from configuration.

    Called once at application startup.

    Args:
        jwt_secret: Token signing secret
        jwt_algorithm: Token signing algorithm
        access_token_expire_minutes: Default token lifetime
    """
    global _token_auth, _password_hasher, _auth_gate, _admin_gate

    _token_auth = JWTAuth(
        secret=jwt_secret,
        algorithm=jwt_algorithm,
        access_token_expire_minutes=access_token_expire_minutes,
    )
    _password_hasher = PasswordHasher()
    _auth_gate = AuthGate(token_auth=_token_auth)
    _admin_gate = AdminGate(token_auth=_token_auth)


def get_token_auth() -> JWTAuth:
    """Get the token issuer/verifier."""
    if _token_auth is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _token_auth


def get_password_hasher() -> PasswordHasher:
    """Get the password hasher."""
    if _password_hasher is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _password_hasher


def get_auth_gate() -> AuthGate:
    """Get the bearer-token gate."""
    if _auth_gate is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _auth_gate


def get_admin_gate() -> AdminGate:
    """Get the admin gate."""
    if _admin_gate is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _admin_gate


async def require_auth(
    request: Request,
    auth_gate: Annotated[AuthGate, Depends(get_auth_gate)]
) -> IdentityContext:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(identity: Annotated[IdentityContext, Depends(require_auth)]):
            return {"customer_id": identity.customer_id}
    """
    return await auth_gate.require_auth(request)


async def require_admin(
    request: Request,
    admin_gate: Annotated[AdminGate, Depends(get_admin_gate)]
) -> IdentityContext:
    """Dependency that requires an authenticated admin."""
    return await admin_gate.require_auth(request)
