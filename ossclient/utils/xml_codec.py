"""Decoding of provider XML replies and encoding of the completion body."""

import io
from typing import Dict, Iterable, Iterator, Optional, Tuple
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape
from ..core.exceptions import DecodeError
from ..schemas.bucket import Bucket, ListBuckets
from ..schemas.multipart_schemas import UploadedPart
from ..schemas.shared import ProviderErrorDetail

_LISTING_FIELDS = {
    "Prefix": "prefix",
    "Marker": "marker",
    "MaxKeys": "max_keys",
    "IsTruncated": "is_truncated",
    "NextMarker": "next_marker",
    "ID": "owner_id",
    "DisplayName": "display_name",
}

_BUCKET_FIELDS = {
    "Name": "name",
    "CreationDate": "creation_date",
    "Location": "location",
    "ExtranetEndpoint": "extranet_endpoint",
    "IntranetEndpoint": "intranet_endpoint",
    "StorageClass": "storage_class",
}

_ERROR_FIELDS = {
    "Code": "code",
    "Message": "message",
    "RequestId": "request_id",
    "HostId": "host_id",
}


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _events(body: bytes) -> Iterator[Tuple[str, ET.Element]]:
    """Stream start/end events, converting parser failures to DecodeError."""
    try:
        for event, element in ET.iterparse(io.BytesIO(body), events=("start", "end")):
            yield event, element
    except ET.ParseError as e:
        raise DecodeError(f"Malformed XML response: {e}") from e


def decode_list_buckets(body: bytes) -> ListBuckets:
    """Decode a ListAllMyBucketsResult document."""
    listing: Dict[str, object] = {}
    buckets = []
    current: Optional[Dict[str, str]] = None

    for event, element in _events(body):
        tag = _local(element.tag)
        if event == "start":
            if tag == "Bucket":
                current = {}
            continue

        text = (element.text or "").strip()
        if tag == "Bucket" and current is not None:
            buckets.append(Bucket(**current))
            current = None
        elif current is not None and tag in _BUCKET_FIELDS:
            current[_BUCKET_FIELDS[tag]] = text
        elif current is None and tag in _LISTING_FIELDS:
            field = _LISTING_FIELDS[tag]
            listing[field] = text == "true" if field == "is_truncated" else text
        element.clear()

    return ListBuckets(buckets=buckets, **listing)


def decode_initiate_upload(body: bytes) -> str:
    """Extract the UploadId of an InitiateMultipartUploadResult."""
    for event, element in _events(body):
        if event == "end" and _local(element.tag) == "UploadId":
            upload_id = (element.text or "").strip()
            if upload_id:
                return upload_id
    raise DecodeError("InitiateMultipartUploadResult has no UploadId")


def decode_error(body: bytes) -> Optional[ProviderErrorDetail]:
    """Decode an <Error> document; None when the body is not one."""
    if not body or not body.lstrip().startswith(b"<"):
        return None
    fields: Dict[str, str] = {}
    root_seen = False
    try:
        for event, element in _events(body):
            tag = _local(element.tag)
            if event == "start":
                if not root_seen:
                    if tag != "Error":
                        return None
                    root_seen = True
                continue
            if tag in _ERROR_FIELDS:
                fields[_ERROR_FIELDS[tag]] = (element.text or "").strip()
    except DecodeError:
        return None
    return ProviderErrorDetail(**fields) if root_seen else None


def render_complete_multipart_upload(parts: Iterable[UploadedPart]) -> str:
    """
    Render the CompleteMultipartUpload body.

    Parts appear in the given order with no whitespace between elements.
    ETags are written verbatim, surrounding quotes included.
    """
    body = ["<CompleteMultipartUpload>"]
    for part in parts:
        body.append(
            f"<Part><PartNumber>{part.part_number}</PartNumber>"
            f"<ETag>{escape(part.etag)}</ETag></Part>"
        )
    body.append("</CompleteMultipartUpload>")
    return "".join(body)
