"""Helper functions for common operations."""

import base64
import hashlib
from datetime import datetime, timezone
from typing import Optional, Tuple
from urllib.parse import quote

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def http_date(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as an RFC 1123 GMT date, e.g. ``Sun, 18 Oct 2026 08:00:00 GMT``.
    Day and month names are always English regardless of locale.
    """
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return (
        f"{_WEEKDAYS[moment.weekday()]}, {moment.day:02d} {_MONTHS[moment.month - 1]} "
        f"{moment.year:04d} {moment:%H:%M:%S} GMT"
    )


def content_md5(content: bytes) -> str:
    """Base64 encoded MD5 digest, the value of a Content-MD5 header."""
    return base64.b64encode(hashlib.md5(content).digest()).decode("ascii")


def split_endpoint(endpoint: str) -> Tuple[str, str]:
    """Split an endpoint into scheme and host; bare hosts default to http."""
    if endpoint.startswith("https://"):
        return "https", endpoint[len("https://"):].rstrip("/")
    if endpoint.startswith("http://"):
        return "http", endpoint[len("http://"):].rstrip("/")
    return "http", endpoint.rstrip("/")


def quote_object_name(object_name: str) -> str:
    """Percent-encode an object key for use in a URL path."""
    return quote(object_name, safe="/")


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"
