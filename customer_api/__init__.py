"""
Customer account API.

This package contains the customer-specific implementation:
- auth: identity context and the bearer-token gates
- customer: account service, request models and HTTP routes
- database: collection accessors and indexes
- config: application settings

Uses generic infrastructure from the common/ package.
"""

from customer_api.config import settings

__all__ = ["settings"]
