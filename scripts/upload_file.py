import asyncio
import sys
import os

# Ensure ossclient is in python path
sys.path.append(os.getcwd())

from ossclient.config import settings, get_storage_client
from ossclient.core.exceptions import OSSError
from ossclient.utils.helpers import format_file_size
from ossclient.utils.logger import configure_logging

USAGE = "usage: python scripts/upload_file.py <file> <object-name> [part-size-bytes]"


async def upload_file(file_path: str, object_name: str, part_size: int):
    configure_logging()

    try:
        size = os.path.getsize(file_path)
        print(f"Uploading {file_path} ({format_file_size(size)}) to {settings.oss_bucket}/{object_name}")
        async with get_storage_client() as client:
            if size <= part_size:
                await client.put_object_from_file(file_path, object_name)
                print("✅ Uploaded in a single request")
            else:
                session = await client.chunk_upload_by_size(object_name, file_path, part_size)
                print(f"✅ Uploaded {len(session.parts)} parts (upload id {session.upload_id})")
    except (OSSError, OSError, ValueError) as e:
        print(f"❌ Upload failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) not in (3, 4):
        print(USAGE)
        sys.exit(2)
    part_size = int(sys.argv[3]) if len(sys.argv) == 4 else settings.part_size
    asyncio.run(upload_file(sys.argv[1], sys.argv[2], part_size))
