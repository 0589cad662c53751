"""
Image upload to Cloudinary.

Uses the signed upload endpoint of the Cloudinary REST API directly over
httpx and returns the ``secure_url`` of the stored image.
"""

import hashlib
import logging
import time
from typing import Optional, Dict, Any

import httpx

from common.utils.exceptions import InternalServerException

logger = logging.getLogger(__name__)


CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


class CloudinaryUploader:
    """
    Uploads image bytes to a Cloudinary folder.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: str = "customer_profiles",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize CloudinaryUploader.

        Args:
            cloud_name: Cloudinary cloud name
            api_key: Cloudinary API key
            api_secret: Cloudinary API secret, used to sign uploads
            folder: Destination folder for uploaded images
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._folder = folder
        self._timeout = timeout
        self._transport = transport

    @property
    def folder(self) -> str:
        return self._folder

    @property
    def is_configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    def _sign(self, params: Dict[str, Any]) -> str:
        """Sign upload parameters: sorted key=value pairs joined by & plus the secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self._api_secret}".encode("utf-8")).hexdigest()

    async def upload(self, data: bytes, folder: Optional[str] = None) -> str:
        """
        Upload an image and return its secure URL.

        Args:
            data: Raw image bytes
            folder: Destination folder, defaults to the configured folder

        Returns:
            The ``https`` URL of the stored image

        Raises:
            InternalServerException: Not configured, upload rejected or unreachable
        """
        if not self.is_configured:
            raise InternalServerException(
                message="Image hosting is not configured",
                code="IMAGE_HOST_NOT_CONFIGURED"
            )

        params = {
            "folder": folder or self._folder,
            "timestamp": int(time.time()),
        }
        form = {
            **{key: str(value) for key, value in params.items()},
            "api_key": self._api_key,
            "signature": self._sign(params),
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{CLOUDINARY_API_BASE}/{self._cloud_name}/image/upload",
                    data=form,
                    files={"file": ("upload", data, "application/octet-stream")},
                    timeout=self._timeout,
                )

                if response.status_code != 200:
                    logger.error(
                        f"Cloudinary upload error: {response.status_code} - {response.text}"
                    )
                    raise InternalServerException(
                        message="Failed to upload image",
                        code="UPLOAD_FAILED"
                    )

                secure_url = response.json().get("secure_url")

        except httpx.RequestError as e:
            logger.error(f"Cloudinary request error: {e}")
            raise InternalServerException(
                message="Failed to upload image",
                code="UPLOAD_FAILED"
            )

        if not secure_url:
            logger.error("Cloudinary response did not include secure_url")
            raise InternalServerException(
                message="Failed to upload image",
                code="UPLOAD_FAILED"
            )

        logger.info(f"Uploaded image to Cloudinary folder {params['folder']}")
        return secure_url
