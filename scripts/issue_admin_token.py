#!/usr/bin/env python3
"""
Issue an admin token for an existing customer.

Customer login never grants the is_admin claim, so operators mint admin
tokens with this script. The token is signed with the configured JWT_SECRET.

Usage:
    python scripts/issue_admin_token.py --customer-id 65f0c0ffee0000000000abcd
    python scripts/issue_admin_token.py --customer-id ... --ttl-minutes 60

Environment variables required:
    MONGODB_URI - MongoDB connection string
    MONGODB_DATABASE - Database name (default: customers)
    JWT_SECRET - Token signing secret
"""

import argparse
import asyncio
import os
import sys
from datetime import timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient

from common.auth import JWTAuth
from customer_api.config import settings
from customer_api.database import CUSTOMERS_COLLECTION


async def issue_admin_token(customer_id: str, ttl_minutes: int) -> str:
    """Look up the customer and sign a token carrying is_admin."""
    try:
        object_id = ObjectId(customer_id)
    except InvalidId:
        raise SystemExit(f"Not a valid customer id: {customer_id}")

    client = AsyncIOMotorClient(
        settings.MONGODB_URI,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    try:
        customer = await client[settings.MONGODB_DATABASE][CUSTOMERS_COLLECTION].find_one(
            {"_id": object_id}
        )
    finally:
        client.close()

    if not customer:
        raise SystemExit(f"Customer not found: {customer_id}")

    auth = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    return auth.issue_token(
        {
            "customer_id": str(customer["_id"]),
            "email": customer.get("email"),
            "username": customer.get("username"),
            "is_admin": True,
        },
        ttl=timedelta(minutes=ttl_minutes),
    )


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--customer-id", required=True)
    ap.add_argument("--ttl-minutes", type=int, default=60)
    args = ap.parse_args()

    settings.validate_required()
    token = asyncio.run(issue_admin_token(args.customer_id, args.ttl_minutes))
    print(token)


if __name__ == "__main__":
    main()
