"""Input validators for headers, sub-resources and part sizes."""

import re
from ..core.exceptions import InvalidInputError, SigningError
from .constants import SUB_RESOURCES

# RFC 7230 token characters
_HEADER_NAME = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def validate_header_name(name: str) -> str:
    """Validate that a header name is a legal HTTP token."""
    if not name or not _HEADER_NAME.match(name):
        raise SigningError(f"Invalid header name: {name!r}")
    return name


def validate_header_value(name: str, value: str) -> str:
    """Validate that a header value can be signed and sent as-is."""
    if not isinstance(value, str):
        raise SigningError(f"Header {name} must be a string, got {type(value).__name__}")
    if "\r" in value or "\n" in value:
        raise SigningError(f"Header {name} contains a line break")
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise SigningError(f"Header {name} is not Latin-1 encodable")
    return value


def validate_resource_key(key: str) -> str:
    """Validate a sub-resource keyword against the provider allow-list."""
    if key not in SUB_RESOURCES:
        raise InvalidInputError(
            f"Unrecognized sub-resource: {key!r}", details={"resource": key}
        )
    return key


def validate_part_size(part_size: int) -> int:
    """Validate a requested part size."""
    if part_size <= 0:
        raise InvalidInputError(
            "Part size must be a positive number of bytes",
            details={"part_size": part_size},
        )
    return part_size
