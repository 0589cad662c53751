"""
Customer API application settings.

Extends the base settings with customer-specific configuration.
"""

from typing import Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Customer API settings."""

    # ==========================================================================
    # HTTP
    # ==========================================================================
    API_PREFIX: str = "/api/customers"

    # ==========================================================================
    # Image Hosting (Cloudinary)
    # ==========================================================================
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "customer_profiles"
    IMAGE_UPLOAD_TIMEOUT_SECONDS: float = 10.0

    # Profile image size limit (5MB)
    MAX_IMAGE_SIZE_BYTES: int = 5 * 1024 * 1024


# Global settings instance
settings = Settings()
