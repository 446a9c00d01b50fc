import asyncio
import sys
import os

# Ensure ossclient is in python path
sys.path.append(os.getcwd())

from ossclient.config import settings, get_storage_client
from ossclient.core.exceptions import OSSError
from ossclient.utils.logger import configure_logging


async def list_buckets():
    configure_logging()
    print("--- Listing Buckets ---")
    print(f"Endpoint: {settings.oss_endpoint}")

    try:
        async with get_storage_client() as client:
            result = await client.list_buckets()
    except (OSSError, ValueError) as e:
        print(f"❌ Failed to list buckets: {e}")
        sys.exit(1)

    print(f"Owner: {result.display_name or result.owner_id}")
    for bucket in result.buckets:
        print(f"  {bucket.name:<40} {bucket.location:<20} {bucket.storage_class}")
    if result.is_truncated:
        print(f"(truncated, next marker: {result.next_marker})")


if __name__ == "__main__":
    asyncio.run(list_buckets())
