"""Bucket listing schemas."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Bucket(BaseModel):
    """A single bucket entry of a ListAllMyBucketsResult."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    creation_date: str = ""
    location: str = ""
    extranet_endpoint: str = ""
    intranet_endpoint: str = ""
    storage_class: str = ""


class ListBuckets(BaseModel):
    """Decoded bucket listing with its paging markers and owner."""

    model_config = ConfigDict(frozen=True)

    prefix: str = ""
    marker: str = ""
    max_keys: str = ""
    is_truncated: bool = False
    next_marker: str = ""
    owner_id: str = Field(default="", description="Owner ID")
    display_name: str = Field(default="", description="Owner display name")
    buckets: List[Bucket] = Field(default_factory=list)
