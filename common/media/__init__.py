"""Media helpers - external image hosting."""

from common.media.cloudinary import CloudinaryUploader

__all__ = ["CloudinaryUploader"]
