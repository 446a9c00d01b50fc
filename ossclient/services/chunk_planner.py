"""Chunk planning: splitting a file into multipart upload byte ranges."""

from typing import List, Optional
from ..core.exceptions import InvalidInputError, TooManyPartsError
from ..repositories.file_repo import FileRepository
from ..schemas.multipart_schemas import FileChunk
from ..utils.constants import MAX_PARTS
from ..utils.validators import validate_part_size


def count_chunks(file_size: int, chunk_size: int) -> int:
    """Number of parts a file of ``file_size`` bytes splits into."""
    full, remainder = divmod(file_size, chunk_size)
    return full + (1 if remainder else 0)


def plan_chunks(file_size: int, chunk_size: int, max_parts: int = MAX_PARTS) -> List[FileChunk]:
    """
    Split ``file_size`` bytes into consecutive chunks of ``chunk_size``.

    Full chunks come first, numbered from 1; a trailing chunk holds the
    remainder if there is one. A zero-length file plans to no chunks.
    Raises InvalidInputError for a non-positive chunk size and
    TooManyPartsError when the part count would reach ``max_parts``.
    """
    validate_part_size(chunk_size)
    if file_size < 0:
        raise InvalidInputError("File size cannot be negative", details={"file_size": file_size})

    total = count_chunks(file_size, chunk_size)
    if total >= max_parts:
        raise TooManyPartsError(
            f"Too many parts ({total}), please increase part size",
            details={"file_size": file_size, "chunk_size": chunk_size, "parts": total},
        )

    full = file_size // chunk_size
    chunks = [
        FileChunk(number=i + 1, offset=i * chunk_size, size=chunk_size)
        for i in range(full)
    ]
    remainder = file_size % chunk_size
    if remainder:
        chunks.append(FileChunk(number=full + 1, offset=full * chunk_size, size=remainder))
    return chunks


async def split_file_by_part_size(
    file_path: str, chunk_size: int, files: Optional[FileRepository] = None
) -> List[FileChunk]:
    """Plan the chunks of a local file."""
    validate_part_size(chunk_size)
    files = files or FileRepository()
    size = await files.file_size(file_path)
    return plan_chunks(size, chunk_size)
