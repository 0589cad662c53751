"""
Customer collection name and indexes.
"""

import logging

from pymongo import ASCENDING

logger = logging.getLogger(__name__)


CUSTOMERS_COLLECTION = "customers"


async def ensure_customer_indexes(collection) -> None:
    """
    Create the unique indexes on email and username.

    Concurrent registrations that both pass the existence check are
    rejected here with DuplicateKeyError.
    """
    await collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")
    await collection.create_index([("username", ASCENDING)], unique=True, name="username_unique")
    logger.info("Customer indexes ensured")
