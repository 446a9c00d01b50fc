"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict, List, Set
import httpx

from ossclient.config import Settings
from ossclient.repositories.storage_repo import StorageRepository
from ossclient.schemas.shared import Credentials
from ossclient.services.storage_service import OSSClient


FIXED_NOW = datetime(2026, 10, 18, 8, 0, 0, tzinfo=timezone.utc)
FIXED_DATE = "Sun, 18 Oct 2026 08:00:00 GMT"
UPLOAD_ID = "0004B9895DBBB6EC98E36"

ERROR_XML = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b"<Error><Code>{code}</Code><Message>{message}</Message>"
    b"<RequestId>5C3D9175B6FC201293AD4890</RequestId>"
    b"<HostId>demo.oss-cn-hangzhou.aliyuncs.com</HostId></Error>"
)

LIST_BUCKETS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<ListAllMyBucketsResult>
  <Prefix>my</Prefix>
  <Marker>mybucket</Marker>
  <MaxKeys>10</MaxKeys>
  <IsTruncated>true</IsTruncated>
  <NextMarker>mybucket10</NextMarker>
  <Owner>
    <ID>512**</ID>
    <DisplayName>51264</DisplayName>
  </Owner>
  <Buckets>
    <Bucket>
      <CreationDate>2014-02-07T18:12:43.000Z</CreationDate>
      <ExtranetEndpoint>oss-cn-shanghai.aliyuncs.com</ExtranetEndpoint>
      <IntranetEndpoint>oss-cn-shanghai-internal.aliyuncs.com</IntranetEndpoint>
      <Location>oss-cn-shanghai</Location>
      <Name>app-base-oss</Name>
      <StorageClass>Standard</StorageClass>
    </Bucket>
    <Bucket>
      <CreationDate>2014-02-25T11:21:04.000Z</CreationDate>
      <ExtranetEndpoint>oss-cn-hangzhou.aliyuncs.com</ExtranetEndpoint>
      <IntranetEndpoint>oss-cn-hangzhou-internal.aliyuncs.com</IntranetEndpoint>
      <Location>oss-cn-hangzhou</Location>
      <Name>mybucket</Name>
      <StorageClass>IA</StorageClass>
    </Bucket>
  </Buckets>
</ListAllMyBucketsResult>"""


def error_body(code: str, message: str) -> bytes:
    return ERROR_XML.replace(b"{code}", code.encode()).replace(b"{message}", message.encode())


class ProviderStub:
    """In-memory stand-in for the storage provider behind httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.fail_parts: Set[int] = set()
        self.broken_parts: Set[int] = set()
        self.fail_initiate = False
        self.fail_complete = False
        self.fail_abort = False
        self.objects: Dict[str, bytes] = {}
        self.parts: Dict[int, bytes] = {}
        self.completed_body: bytes = b""

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        key = request.url.path.lstrip("/")

        if request.method == "GET" and not key:
            return httpx.Response(200, content=LIST_BUCKETS_XML)

        if request.method == "POST" and "uploads" in params:
            if self.fail_initiate:
                return httpx.Response(403, content=error_body("AccessDenied", "denied"))
            body = (
                "<InitiateMultipartUploadResult><Bucket>demo</Bucket>"
                f"<Key>{key}</Key><UploadId>{UPLOAD_ID}</UploadId>"
                "</InitiateMultipartUploadResult>"
            )
            return httpx.Response(200, content=body.encode())

        if request.method == "PUT" and "partNumber" in params:
            number = int(params["partNumber"])
            if number in self.broken_parts:
                raise httpx.InvalidURL(f"part {number} unroutable")
            if number in self.fail_parts:
                return httpx.Response(500, content=error_body("InternalError", f"part {number} lost"))
            self.parts[number] = request.content
            return httpx.Response(200, headers={"ETag": f'"etag-{number}"'})

        if request.method == "POST" and "uploadId" in params:
            self.completed_body = request.content
            if self.fail_complete:
                return httpx.Response(400, content=error_body("InvalidPartOrder", "bad order"))
            return httpx.Response(200, content=b"<CompleteMultipartUploadResult/>")

        if request.method == "DELETE" and "uploadId" in params:
            if self.fail_abort:
                return httpx.Response(500, content=error_body("InternalError", "abort failed"))
            return httpx.Response(204)

        if request.method == "PUT":
            self.objects[key] = request.content
            return httpx.Response(200, headers={"ETag": '"object-etag"'})

        if request.method in ("GET", "HEAD"):
            if key not in self.objects:
                return httpx.Response(404, content=error_body("NoSuchKey", "The specified key does not exist."))
            data = self.objects[key]
            if request.method == "HEAD":
                return httpx.Response(200, headers={"x-oss-object-type": "Normal", "ETag": '"object-etag"'})
            return httpx.Response(200, content=data)

        if request.method == "DELETE":
            self.objects.pop(key, None)
            return httpx.Response(204)

        return httpx.Response(405)

    def calls(self, method: str, param: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and param in r.url.params]


@pytest.fixture
def credentials() -> Credentials:
    """Test access key pair."""
    return Credentials(key_id="test-key-id", key_secret="test-key-secret")


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        OSS_ACCESS_KEY_ID="test-key-id",
        OSS_ACCESS_KEY_SECRET="test-key-secret",
        OSS_ENDPOINT="https://oss-cn-hangzhou.aliyuncs.com",
        OSS_BUCKET="demo",
        OSS_PART_SIZE=100000,
    )


@pytest.fixture
def provider() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
async def oss_client(
    credentials: Credentials, provider: ProviderStub, test_settings: Settings
) -> AsyncGenerator[OSSClient, None]:
    """Client wired to the provider stub through httpx.MockTransport."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(provider))
    client = OSSClient(
        credentials=credentials,
        endpoint="https://oss-cn-hangzhou.aliyuncs.com",
        bucket="demo",
        transport=StorageRepository(http),
        settings=test_settings,
        clock=lambda: FIXED_NOW,
    )
    yield client
    await http.aclose()


@pytest.fixture
def source_file(tmp_path) -> str:
    """A 250000 byte file whose bytes encode their own offset."""
    path = tmp_path / "source.bin"
    path.write_bytes(bytes(i % 251 for i in range(250000)))
    return str(path)
