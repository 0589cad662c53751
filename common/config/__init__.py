"""
Configuration module - Base settings class for environment configuration.
"""

from common.config.base_settings import BaseAppSettings, DEFAULT_JWT_SECRET

__all__ = ["BaseAppSettings", "DEFAULT_JWT_SECRET"]
