"""Storage repository: the HTTP transport every signed request goes through."""

from typing import Mapping, Optional
import httpx
from ..core.exceptions import TransportError
from ..schemas.shared import HTTPResponse
from ..utils.logger import get_logger

logger = get_logger(__name__)


class StorageRepository:
    """Sends requests over httpx and returns status, headers and body."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 60.0):
        self._owns_client = client is None
        self.client: httpx.AsyncClient = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout)
        )

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> HTTPResponse:
        """
        Send one request exactly as given.
        Args:
            method: HTTP verb
            url: Fully built URL, query included
            headers: Signed request headers
            body: Request payload
        Returns:
            Response status, headers and body
        """
        try:
            response = await self.client.request(
                method, url, headers=dict(headers), content=body
            )
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, RuntimeError) as e:
            # RuntimeError is what a closed client raises
            logger.error("Request failed", method=method, url=url, error=str(e))
            raise TransportError(
                f"{method} {url} failed: {e}", details={"method": method, "url": url}
            ) from e

        logger.debug(
            "Request sent",
            method=method,
            url=url,
            status_code=response.status_code,
            sent_bytes=len(body) if body else 0,
        )
        return HTTPResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def close(self) -> None:
        """Close the HTTP client if this repository created it."""
        if self._owns_client:
            await self.client.aclose()
