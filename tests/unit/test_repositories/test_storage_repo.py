"""Unit tests for the HTTP storage repository."""

import httpx
import pytest
from ossclient.core.exceptions import TransportError
from ossclient.repositories.storage_repo import StorageRepository


def ok(request):
    return httpx.Response(200, headers={"ETag": '"abc"'}, content=b"body")


@pytest.mark.asyncio
async def test_send_returns_status_headers_and_body():
    """Test a plain round trip through the transport."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(ok))
    repo = StorageRepository(http)

    response = await repo.send("GET", "https://demo.oss.example.com/a.txt", {"Date": "x"})

    assert response.status_code == 200
    assert response.header("etag") == '"abc"'
    assert response.body == b"body"
    await repo.close()
    assert not http.is_closed
    await http.aclose()


@pytest.mark.asyncio
async def test_send_through_closed_client_is_transport_error():
    """Test that a shared client closed by its owner surfaces as TransportError."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(ok))
    await http.aclose()
    repo = StorageRepository(http)

    with pytest.raises(TransportError):
        await repo.send("GET", "https://demo.oss.example.com/a.txt", {})


@pytest.mark.asyncio
async def test_send_invalid_url_is_transport_error():
    """Test that httpx errors outside HTTPError are wrapped too."""

    def invalid(request):
        raise httpx.InvalidURL("boom")

    http = httpx.AsyncClient(transport=httpx.MockTransport(invalid))
    repo = StorageRepository(http)

    with pytest.raises(TransportError, match="boom"):
        await repo.send("PUT", "https://demo.oss.example.com/a.txt", {}, b"x")
    await http.aclose()


@pytest.mark.asyncio
async def test_close_owned_client():
    """Test that a repository closes the client it created."""
    repo = StorageRepository(timeout=5.0)
    await repo.close()
    assert repo.client.is_closed
