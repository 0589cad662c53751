"""
Identity context attached to authenticated requests.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class IdentityContext:
    """Verified claims of the caller, read-only for the rest of the request."""

    customer_id: str
    email: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    is_admin: bool = False

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "IdentityContext":
        """
        Build the context from decoded token claims.

        Raises:
            ValueError: If the claims carry no customer_id
        """
        customer_id = claims.get("customer_id")
        if not customer_id:
            raise ValueError("Token missing customer_id")

        return cls(
            customer_id=str(customer_id),
            email=claims.get("email"),
            username=claims.get("username"),
            phone=claims.get("phone"),
            image=claims.get("image"),
            is_admin=bool(claims.get("is_admin", False)),
        )
