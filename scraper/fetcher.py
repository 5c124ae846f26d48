# scraper/fetcher.py
import asyncio
import logging
from contextlib import asynccontextmanager
from httpx import AsyncClient, HTTPError

from .errors import NoResponseError, UnsuccessfulResponseError
from .utils import network_retry

BASE_URL = "http://books.toscrape.com"

logger = logging.getLogger("scraper.fetcher")


class Crawler:
    def __init__(
        self,
        base_url=BASE_URL,
        concurrency=10,
        retries=3,
        backoff=1.0,
        timeout=30.0,
        transport=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.backoff = backoff
        self.semaphore = asyncio.Semaphore(concurrency)
        self.client = AsyncClient(
            timeout=timeout, follow_redirects=True, transport=transport
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        """
        Close the HTTP client and release resources.

        Should be called when the crawler instance is no longer needed, either
        in a finally block or by using the crawler in an ``async with`` block.
        """
        await self.client.aclose()

    async def fetch_page(self, url):
        """
        Fetch page content with concurrency control and retry logic.

        Performs an HTTP GET under the crawler's semaphore. Transient failures
        (transport errors, 5xx responses) are retried up to ``self.retries``
        attempts in total with exponential backoff.

        Args:
            url (str): The URL to fetch

        Returns:
            str: The response text/HTML content of the page

        Raises:
            UnsuccessfulResponseError: The exchange completed with a status
                other than 200
            NoResponseError: No response could be obtained within the retry
                budget
        """
        async with self.semaphore:
            try:
                async for attempt in network_retry(url, self.retries, self.backoff):
                    with attempt:
                        resp = await self.client.get(url)
                        if resp.status_code != 200:
                            raise UnsuccessfulResponseError(url, resp.status_code)
                        return resp.text
            except HTTPError as e:
                raise NoResponseError(url) from e

    @asynccontextmanager
    async def stream_asset(self, url):
        """
        Open a streaming download of an asset.

        Yields an async iterator of byte chunks so the payload never has to be
        held in memory as a whole. The semaphore slot is held, and the response
        kept open, until the ``async with`` block exits.

        Raises:
            UnsuccessfulResponseError: The status code was not 200
            NoResponseError: No response could be obtained within the retry
                budget
        """
        async with self.semaphore:
            response = await self._open_stream(url)
            try:
                yield response.aiter_bytes()
            finally:
                await response.aclose()

    async def _open_stream(self, url):
        try:
            async for attempt in network_retry(url, self.retries, self.backoff):
                with attempt:
                    request = self.client.build_request("GET", url)
                    response = await self.client.send(request, stream=True)
                    if response.status_code != 200:
                        await response.aclose()
                        raise UnsuccessfulResponseError(url, response.status_code)
                    return response
        except HTTPError as e:
            raise NoResponseError(url) from e
