"""Multipart upload schemas."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field
from ..utils.constants import UploadState


class FileChunk(BaseModel):
    """Byte range of the source file uploaded as one part."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=1, description="Part number (1-indexed)")
    offset: int = Field(..., ge=0, description="Byte offset in the source file")
    size: int = Field(..., gt=0, description="Number of bytes in this part")

    @property
    def end(self) -> int:
        """Offset one past the last byte of the chunk."""
        return self.offset + self.size


class UploadedPart(BaseModel):
    """A part accepted by the provider."""

    model_config = ConfigDict(frozen=True)

    part_number: int = Field(..., ge=1, description="Part number (1-indexed)")
    etag: str = Field(..., description="ETag returned by the provider for this part")


class UploadSession(BaseModel):
    """
    State of one multipart upload run.

    Created while planning and given its upload id on initiate. Retired by
    either completion or abort.
    """

    upload_id: str = ""
    object_name: str
    bucket: str
    parts: List[UploadedPart] = Field(default_factory=list)
    state: UploadState = UploadState.PLANNING

    def record_part(self, part: UploadedPart) -> None:
        """Append a part, keeping part numbers contiguous from 1."""
        expected = len(self.parts) + 1
        if part.part_number != expected:
            raise ValueError(
                f"Part {part.part_number} recorded out of order, expected {expected}"
            )
        self.parts.append(part)

    def transition(self, state: UploadState) -> None:
        if self.state.is_terminal:
            raise ValueError(f"Upload {self.upload_id} already {self.state.value}")
        self.state = state
