"""
FastAPI dependencies for the Customer system.

Provides dependency injection for customer-related services.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import JWTAuth, PasswordHasher
from common.media import CloudinaryUploader
from customer_api.customer.services.customer_service import CustomerService


_customer_service: CustomerService | None = None


def init_customer_services(
    db: AsyncIOMotorDatabase,
    password_hasher: PasswordHasher,
    token_auth: JWTAuth,
    image_uploader: CloudinaryUploader,
) -> None:
    """
    Initialize customer services with database connection.

    Called once at application startup.
    """
    global _customer_service

    _customer_service = CustomerService(
        db=db,
        password_hasher=password_hasher,
        token_auth=token_auth,
        image_uploader=image_uploader,
    )


def get_customer_service() -> CustomerService:
    """Get customer service instance."""
    if _customer_service is None:
        raise RuntimeError("Customer services not initialized. Call init_customer_services first.")
    return _customer_service
