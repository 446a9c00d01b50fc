"""Request signing with the OSS header signature (HMAC-SHA1)."""

import base64
import hashlib
import hmac
from typing import Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict
from ..schemas.shared import Credentials
from ..utils.constants import AUTH_SCHEME, PROVIDER_HEADER_PREFIX
from .exceptions import SigningError
from .resources import RequestHeaders


class SigningContext(BaseModel):
    """Everything that goes into one string to sign."""

    model_config = ConfigDict(frozen=True)

    http_method: str
    content_md5: str = ""
    content_type: str = ""
    date: str = ""
    canonical_resource_path: str = "/"
    canonicalized_resources: str = ""
    header_subset: str = ""

    def string_to_sign(self) -> str:
        resource = self.canonical_resource_path
        if self.canonicalized_resources:
            resource = f"{resource}?{self.canonicalized_resources}"
        return (
            f"{self.http_method}\n"
            f"{self.content_md5}\n"
            f"{self.content_type}\n"
            f"{self.date}\n"
            f"{self.header_subset}{resource}"
        )


def canonicalize_headers(headers: Mapping[str, str]) -> str:
    """Render the provider headers as sorted ``name:value\\n`` lines."""
    lines = []
    for name, value in headers.items():
        lowered = name.lower()
        if lowered.startswith(PROVIDER_HEADER_PREFIX):
            lines.append(f"{lowered}:{value.strip()}\n")
    return "".join(sorted(lines))


def canonical_resource_path(bucket: Optional[str], object_name: Optional[str]) -> str:
    """Account level calls have no bucket and sign the bare ``/``."""
    if not bucket:
        return "/"
    return f"/{bucket}/{object_name or ''}"


def build_signing_context(
    method: str,
    bucket: Optional[str],
    object_name: Optional[str],
    canonical_resources: str,
    headers: Union[RequestHeaders, Mapping[str, str]],
) -> SigningContext:
    headers = RequestHeaders.coerce(headers)
    return SigningContext(
        http_method=method.upper(),
        content_md5=headers.get_ci("Content-MD5"),
        content_type=headers.get_ci("Content-Type"),
        date=headers.get_ci("Date"),
        canonical_resource_path=canonical_resource_path(bucket, object_name),
        canonicalized_resources=canonical_resources or "",
        header_subset=canonicalize_headers(headers),
    )


def compute_signature(key_secret: str, string_to_sign: str) -> str:
    """Base64 encoded HMAC-SHA1 of the string to sign."""
    try:
        digest = hmac.new(
            key_secret.encode("utf-8"),
            string_to_sign.encode("utf-8"),
            hashlib.sha1,
        ).digest()
    except UnicodeEncodeError as e:
        raise SigningError(f"Cannot encode signing input: {e.reason}")
    return base64.b64encode(digest).decode("ascii")


def oss_sign(
    method: str,
    key_id: str,
    key_secret: str,
    bucket: Optional[str],
    object_name: Optional[str],
    canonical_resources: str,
    headers: Union[RequestHeaders, Mapping[str, str]],
) -> str:
    """
    Build the Authorization header value for a request.

    Args:
        method: HTTP verb
        key_id: Access key id
        key_secret: Access key secret
        bucket: Bucket name, empty for account level calls
        object_name: Object key, empty for bucket level calls
        canonical_resources: Output of the resource canonicalizer
        headers: Request headers (Date, Content-MD5, Content-Type, x-oss-*)
    Returns:
        ``OSS <key_id>:<signature>``
    """
    context = build_signing_context(method, bucket, object_name, canonical_resources, headers)
    signature = compute_signature(key_secret, context.string_to_sign())
    return f"{AUTH_SCHEME} {key_id}:{signature}"


class Signer:
    """Signs requests on behalf of one set of credentials."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    @property
    def key_id(self) -> str:
        return self._credentials.key_id

    def sign(
        self,
        method: str,
        bucket: Optional[str],
        object_name: Optional[str],
        canonical_resources: str,
        headers: Union[RequestHeaders, Mapping[str, str]],
    ) -> str:
        return oss_sign(
            method,
            self._credentials.key_id,
            self._credentials.key_secret.get_secret_value(),
            bucket,
            object_name,
            canonical_resources,
            headers,
        )

    def __repr__(self) -> str:
        return f"Signer(key_id={self.key_id!r})"
