"""
Customer API database utilities.
"""

from customer_api.database.collections import (
    CUSTOMERS_COLLECTION,
    ensure_customer_indexes,
)

__all__ = [
    "CUSTOMERS_COLLECTION",
    "ensure_customer_indexes",
]
