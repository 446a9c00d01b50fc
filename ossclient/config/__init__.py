"""Configuration module for client settings."""

from .settings import Settings, settings
from .storage import get_credentials, get_storage_client

__all__ = [
    "Settings",
    "settings",
    "get_credentials",
    "get_storage_client",
]
