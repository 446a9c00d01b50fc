"""Protocol constants and enums."""

from enum import Enum
from typing import Optional


# Authorization scheme prefix of the header signature
AUTH_SCHEME = "OSS"

# Prefix of provider headers that take part in signing
PROVIDER_HEADER_PREFIX = "x-oss-"

# Provider hard limit on parts per multipart upload
MAX_PARTS = 10000

# <MinSizeAllowed>102400</MinSizeAllowed>
MIN_PART_SIZE = 100 * 1024

# Sub-resource keywords recognized by the provider. Only these take part in
# the query string and the canonicalized resource.
SUB_RESOURCES = frozenset(
    [
        "acl",
        "uploads",
        "location",
        "cors",
        "logging",
        "website",
        "referer",
        "lifecycle",
        "delete",
        "append",
        "tagging",
        "objectMeta",
        "uploadId",
        "partNumber",
        "security-token",
        "position",
        "img",
        "style",
        "styleName",
        "replication",
        "replicationProgress",
        "replicationLocation",
        "cname",
        "bucketInfo",
        "comp",
        "qos",
        "live",
        "status",
        "vod",
        "startTime",
        "endTime",
        "symlink",
        "x-oss-process",
        "response-content-type",
        "response-content-language",
        "response-expires",
        "response-cache-control",
        "response-content-disposition",
        "response-content-encoding",
        "udf",
        "udfName",
        "udfImage",
        "udfId",
        "udfImageDesc",
        "udfApplication",
        "udfApplicationLog",
        "restore",
        "callback",
        "callback-var",
    ]
)


class HTTPMethod(str, Enum):
    """HTTP verbs used against the storage API."""

    GET = "GET"
    HEAD = "HEAD"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


class UploadState(str, Enum):
    """Multipart upload lifecycle states."""

    PLANNING = "planning"
    INITIATING = "initiating"
    UPLOADING_PARTS = "uploading_parts"
    COMPLETING = "completing"
    COMPLETED = "completed"
    ABORTING = "aborting"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        """Whether the session has been retired."""
        return self in (UploadState.COMPLETED, UploadState.ABORTED)


class UploadPhase(str, Enum):
    """Phase names attached to errors raised by the orchestrator."""

    PLAN = "plan"
    INITIATE = "initiate"
    PART = "part"
    COMPLETE = "complete"
    ABORT = "abort"

    def label(self, part_number: Optional[int] = None) -> str:
        """Render the phase for error messages, e.g. ``part 2``."""
        if self is UploadPhase.PART and part_number is not None:
            return f"part {part_number}"
        return self.value
