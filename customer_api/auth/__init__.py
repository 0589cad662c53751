"""
Auth System

Bearer-token gates and the identity context they attach to requests.
"""

from customer_api.auth.identity import IdentityContext
from customer_api.auth.middleware import AuthGate, AdminGate

__all__ = [
    "IdentityContext",
    "AuthGate",
    "AdminGate",
]
