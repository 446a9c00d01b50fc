"""Storage service: signed object and bucket operations against the provider."""

from datetime import datetime
from typing import Callable, Dict, Iterable, Mapping, Optional, Union
from ..config.settings import Settings, settings as default_settings
from ..core.exceptions import ProviderRejectedError
from ..core.resources import RequestHeaders, ResourceParams
from ..core.security import Signer
from ..repositories.file_repo import FileRepository
from ..repositories.storage_repo import StorageRepository
from ..schemas.bucket import ListBuckets
from ..schemas.multipart_schemas import FileChunk, UploadedPart, UploadSession
from ..schemas.shared import Credentials, HTTPResponse
from ..utils.constants import HTTPMethod
from ..utils.helpers import content_md5, http_date, quote_object_name, split_endpoint
from ..utils.logger import get_logger
from ..utils.xml_codec import (
    decode_error,
    decode_initiate_upload,
    decode_list_buckets,
    render_complete_multipart_upload,
)

logger = get_logger(__name__)

HeadersLike = Union[RequestHeaders, Mapping[str, str], None]
ResourcesLike = Union[ResourceParams, Mapping[str, Optional[str]], None]

# Methods whose requests carry a body and therefore a Content-Length
_BODY_METHODS = (HTTPMethod.PUT, HTTPMethod.POST)


class OSSClient:
    """
    Client for one endpoint and bucket.

    Holds the credentials for its lifetime and signs every request with them.
    Nothing here is process-wide: create one client per credential set and
    pass it where it is needed.
    """

    def __init__(
        self,
        credentials: Credentials,
        endpoint: str,
        bucket: str = "",
        transport: Optional[StorageRepository] = None,
        files: Optional[FileRepository] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or default_settings
        self._signer = Signer(credentials)
        self._endpoint = endpoint
        self._bucket = bucket
        self._owns_transport = transport is None
        self.transport = transport or StorageRepository(timeout=self.settings.request_timeout)
        self.files = files or FileRepository()
        self._clock = clock

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def key_id(self) -> str:
        return self._signer.key_id

    def with_bucket(self, bucket: str) -> "OSSClient":
        """A client for another bucket sharing this client's credentials and transport."""
        clone = OSSClient.__new__(OSSClient)
        clone.__dict__.update(self.__dict__)
        clone._bucket = bucket
        clone._owns_transport = False
        return clone

    async def close(self) -> None:
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "OSSClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def host(self, bucket: str, object_name: str, resources_str: str = "") -> str:
        """Virtual-hosted URL of an object, query included when present."""
        scheme, host = split_endpoint(self._endpoint)
        if bucket:
            url = f"{scheme}://{bucket}.{host}/{quote_object_name(object_name)}"
        else:
            url = f"{scheme}://{host}/"
        return f"{url}?{resources_str}" if resources_str else url

    def date(self) -> str:
        return http_date(self._clock() if self._clock else None)

    async def _request(
        self,
        method: HTTPMethod,
        object_name: str = "",
        headers: HeadersLike = None,
        resources: ResourcesLike = None,
        body: Optional[bytes] = None,
        bucket: Optional[str] = None,
    ) -> HTTPResponse:
        """Sign and send one request; non-2xx replies raise ProviderRejectedError."""
        bucket = self._bucket if bucket is None else bucket
        resources_str = ResourceParams.coerce(resources).canonical()
        request_headers = RequestHeaders.coerce(headers)
        request_headers.set("Date", self.date())
        if method in _BODY_METHODS:
            request_headers.set("Content-Length", str(len(body or b"")))

        authorization = self._signer.sign(
            method.value, bucket, object_name, resources_str, request_headers
        )
        request_headers.set("Authorization", authorization)

        url = self.host(bucket, object_name, resources_str)
        response = await self.transport.send(method.value, url, request_headers.to_dict(), body)
        if not response.is_success:
            raise self._rejected(method, object_name, response)
        return response

    @staticmethod
    def _rejected(method: HTTPMethod, object_name: str, response: HTTPResponse) -> ProviderRejectedError:
        detail = decode_error(response.body)
        reason = detail.describe() if detail else response.text[:512]
        target = object_name or "/"
        logger.warning(
            "Request rejected",
            method=method.value,
            object_name=target,
            status_code=response.status_code,
            error_code=detail.code if detail else None,
            request_id=detail.request_id if detail else None,
        )
        message = f"{method.value} {target} rejected with status {response.status_code}"
        if reason:
            message = f"{message}: {reason}"
        return ProviderRejectedError(
            message,
            status_code=response.status_code,
            body=response.body,
            detail=detail,
        )

    async def list_buckets(self, resources: ResourcesLike = None) -> ListBuckets:
        """List the buckets owned by the credentials."""
        response = await self._request(HTTPMethod.GET, resources=resources, bucket="")
        return decode_list_buckets(response.body)

    async def get_object(
        self, object_name: str, headers: HeadersLike = None, resources: ResourcesLike = None
    ) -> bytes:
        response = await self._request(HTTPMethod.GET, object_name, headers, resources)
        return response.body

    async def head_object(
        self, object_name: str, headers: HeadersLike = None, resources: ResourcesLike = None
    ) -> Dict[str, str]:
        response = await self._request(HTTPMethod.HEAD, object_name, headers, resources)
        return response.headers

    async def put_object_from_buffer(
        self,
        data: bytes,
        object_name: str,
        headers: HeadersLike = None,
        resources: ResourcesLike = None,
        with_md5: bool = False,
    ) -> Optional[str]:
        """
        Upload an object in one request.
        Args:
            with_md5: Send a signed Content-MD5 so the provider verifies the body
        Returns:
            The object's ETag, if the provider returned one
        """
        if with_md5:
            headers = RequestHeaders.coerce(headers)
            headers.set("Content-MD5", content_md5(data))
        response = await self._request(HTTPMethod.PUT, object_name, headers, resources, body=data)
        logger.info("Object uploaded", object_name=object_name, size=len(data))
        return response.header("ETag")

    async def put_object_from_file(
        self,
        file_path: str,
        object_name: str,
        headers: HeadersLike = None,
        resources: ResourcesLike = None,
        with_md5: bool = False,
    ) -> Optional[str]:
        data = await self.files.load_file(file_path)
        return await self.put_object_from_buffer(data, object_name, headers, resources, with_md5)

    async def delete_object(self, object_name: str) -> None:
        await self._request(HTTPMethod.DELETE, object_name)
        logger.info("Object deleted", object_name=object_name)

    # Multipart Upload Methods

    async def initiate_multipart_upload(self, object_name: str, headers: HeadersLike = None) -> str:
        """Start a multipart upload and return the provider-assigned upload id."""
        response = await self._request(
            HTTPMethod.POST, object_name, headers, ResourceParams(uploads=None), body=b""
        )
        return decode_initiate_upload(response.body)

    async def upload_part(
        self,
        file_path: str,
        object_name: str,
        chunk: FileChunk,
        upload_id: str,
        headers: HeadersLike = None,
    ) -> UploadedPart:
        """Upload one chunk of ``file_path`` and return its ETag."""
        data = await self.files.read_range(file_path, chunk.offset, chunk.size)
        resources = ResourceParams(partNumber=str(chunk.number), uploadId=upload_id)
        response = await self._request(HTTPMethod.PUT, object_name, headers, resources, body=data)
        etag = response.header("ETag")
        if not etag:
            raise ProviderRejectedError(
                f"Part {chunk.number} accepted without an ETag",
                status_code=response.status_code,
                body=response.body,
            )
        return UploadedPart(part_number=chunk.number, etag=etag)

    async def complete_multipart_upload(
        self,
        object_name: str,
        upload_id: str,
        parts: Iterable[UploadedPart],
        headers: HeadersLike = None,
    ) -> HTTPResponse:
        """Commit the uploaded parts, in the given order, as one object."""
        body = render_complete_multipart_upload(parts).encode("utf-8")
        return await self._request(
            HTTPMethod.POST, object_name, headers, ResourceParams(uploadId=upload_id), body=body
        )

    async def abort_multipart_upload(self, object_name: str, upload_id: str) -> None:
        """Abort an upload, releasing the parts stored so far."""
        await self._request(HTTPMethod.DELETE, object_name, resources=ResourceParams(uploadId=upload_id))

    async def chunk_upload_by_size(
        self,
        object_name: str,
        file_path: str,
        chunk_size: Optional[int] = None,
        headers: HeadersLike = None,
        concurrency: Optional[int] = None,
    ) -> UploadSession:
        """Upload a local file as a multipart upload split into ``chunk_size`` parts."""
        from .multipart_service import MultipartUploader

        return await MultipartUploader(self).upload_file(
            object_name, file_path, chunk_size=chunk_size, headers=headers, concurrency=concurrency
        )

    def __repr__(self) -> str:
        return f"OSSClient(endpoint={self._endpoint!r}, bucket={self._bucket!r}, key_id={self.key_id!r})"
