"""File repository for reading local source files."""

import asyncio
import os
from ..core.exceptions import FileReadError


class FileRepository:
    """Reads whole files or exact byte ranges off the event loop."""

    async def file_size(self, path: str) -> int:
        """Size of a local file in bytes."""
        try:
            stat = await asyncio.to_thread(os.stat, path)
        except OSError as e:
            raise FileReadError(f"Cannot stat {path}: {e}", details={"path": path}) from e
        return stat.st_size

    async def load_file(self, path: str) -> bytes:
        """Read a whole file."""
        return await asyncio.to_thread(self._read_all, path)

    async def read_range(self, path: str, offset: int, length: int) -> bytes:
        """
        Read exactly ``length`` bytes starting at ``offset``.
        Raises FileReadError on a short read.
        """
        data = await asyncio.to_thread(self._read_range, path, offset, length)
        if len(data) != length:
            raise FileReadError(
                f"Short read from {path}: expected {length} bytes at offset {offset}, got {len(data)}",
                details={"path": path, "offset": offset, "length": length, "read": len(data)},
            )
        return data

    @staticmethod
    def _read_all(path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(f"Cannot read {path}: {e}", details={"path": path}) from e

    @staticmethod
    def _read_range(path: str, offset: int, length: int) -> bytes:
        try:
            with open(path, "rb") as f:
                f.seek(offset)
                chunks = []
                remaining = length
                while remaining > 0:
                    block = f.read(remaining)
                    if not block:
                        break
                    chunks.append(block)
                    remaining -= len(block)
                return b"".join(chunks)
        except OSError as e:
            raise FileReadError(f"Cannot read {path}: {e}", details={"path": path}) from e
