# loading/fetcher.py
"""
Single-attempt HTTP fetch of a CSV document.
"""

import asyncio
import logging
from typing import Optional

import httpx

from .encoding import decode_body
from .errors import TransportError, HttpStatusError, EmptyResponseError, FetchTimeoutError

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache"
}


class CsvFetcher:
    """Fetches CSV text over HTTP GET, one attempt per call."""

    def __init__(self, base_url: str = "", client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        # The per-attempt deadline is passed on every request
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def fetch_text(self, url: str, timeout_ms: int) -> str:
        """
        GET ``url`` within ``timeout_ms``.

        The in-flight request is cancelled when the deadline passes.

        Raises:
            HttpStatusError: non-2xx status
            EmptyResponseError: body is blank
            FetchTimeoutError: deadline exceeded
            TransportError: any other network failure
        """
        try:
            response = await asyncio.wait_for(
                self._client.get(url, headers=NO_CACHE_HEADERS, timeout=timeout_ms / 1000),
                timeout=timeout_ms / 1000
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise FetchTimeoutError(timeout_ms, url)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise TransportError(f"{type(e).__name__}: {e}", url) from e

        if not response.is_success:
            raise HttpStatusError(response.status_code, response.reason_phrase, url)

        text = decode_body(response.content, response.charset_encoding)
        if not text.strip():
            raise EmptyResponseError(url)

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
