"""
FastAPI dependencies for the Customer API.

Wires every service once at startup.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.media import CloudinaryUploader
from customer_api.config import Settings
from customer_api.auth.dependencies import (
    init_auth_services,
    get_token_auth,
    get_password_hasher,
)
from customer_api.customer.dependencies import init_customer_services

logger = logging.getLogger(__name__)


def init_all_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """
    Initialize all services.

    Args:
        db: MongoDB database connection
        settings: Application settings
    """
    init_auth_services(
        jwt_secret=settings.JWT_SECRET,
        jwt_algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    image_uploader = CloudinaryUploader(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        folder=settings.CLOUDINARY_FOLDER,
        timeout=settings.IMAGE_UPLOAD_TIMEOUT_SECONDS,
    )
    if not image_uploader.is_configured:
        logger.warning("Cloudinary is not configured; profile image uploads will fail")

    init_customer_services(
        db=db,
        password_hasher=get_password_hasher(),
        token_auth=get_token_auth(),
        image_uploader=image_uploader,
    )
