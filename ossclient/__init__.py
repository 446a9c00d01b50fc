"""Async client for an OSS-style object storage HTTP API."""

from .core.exceptions import (
    DecodeError,
    FileReadError,
    InvalidInputError,
    OSSError,
    ProviderRejectedError,
    SigningError,
    TooManyPartsError,
    TransportError,
)
from .core.resources import RequestHeaders, ResourceParams, canonicalize_resources
from .core.security import Signer, oss_sign
from .schemas.bucket import Bucket, ListBuckets
from .schemas.multipart_schemas import FileChunk, UploadedPart, UploadSession
from .schemas.shared import Credentials, HTTPResponse
from .services.chunk_planner import plan_chunks, split_file_by_part_size
from .services.multipart_service import MultipartUploader
from .services.storage_service import OSSClient

__version__ = "0.1.0"

__all__ = [
    "OSSClient",
    "MultipartUploader",
    "Credentials",
    "Signer",
    "oss_sign",
    "ResourceParams",
    "RequestHeaders",
    "canonicalize_resources",
    "plan_chunks",
    "split_file_by_part_size",
    "FileChunk",
    "UploadedPart",
    "UploadSession",
    "Bucket",
    "ListBuckets",
    "HTTPResponse",
    "OSSError",
    "InvalidInputError",
    "TooManyPartsError",
    "TransportError",
    "ProviderRejectedError",
    "SigningError",
    "FileReadError",
    "DecodeError",
]
