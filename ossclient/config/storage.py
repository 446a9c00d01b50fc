"""Storage client configuration built from settings."""

from typing import Optional
from ..schemas.shared import Credentials
from .settings import Settings, settings as default_settings


def get_credentials(config: Optional[Settings] = None) -> Credentials:
    """Build the access key pair from settings."""
    config = config or default_settings
    if not config.oss_access_key_id or not config.oss_access_key_secret.get_secret_value():
        raise ValueError("OSS_ACCESS_KEY_ID and OSS_ACCESS_KEY_SECRET must be set")
    return Credentials(
        key_id=config.oss_access_key_id,
        key_secret=config.oss_access_key_secret,
    )


def get_storage_client(config: Optional[Settings] = None, bucket: Optional[str] = None):
    """
    Get a storage client configured from settings.
    Returns an OSSClient bound to the configured (or given) bucket.
    """
    from ..services.storage_service import OSSClient

    config = config or default_settings
    return OSSClient(
        credentials=get_credentials(config),
        endpoint=config.oss_endpoint,
        bucket=bucket if bucket is not None else config.oss_bucket,
        settings=config,
    )
