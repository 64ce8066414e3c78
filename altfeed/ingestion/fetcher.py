"""Upstream Atom fetcher."""

import asyncio
from typing import Optional

import httpx
from rich.console import Console

from ..config import UpstreamConfig
from ..errors import BodyReadError, TransportError, UpstreamStatusError

console = Console(stderr=True)


class UpstreamFetcher:
    """Fetch the raw upstream feed document."""

    def __init__(
        self,
        url: str = "https://xkcd.com/atom.xml",
        timeout: float = 30.0,
        user_agent: str = "altfeed/0.1 (+https://xkcd.com)",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize upstream fetcher."""
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    @classmethod
    def from_config(
        cls,
        config: UpstreamConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "UpstreamFetcher":
        """Build a fetcher from the upstream section of the config."""
        return cls(
            url=config.url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def fetch(self) -> bytes:
        """Issue one GET and return the full response body.

        Raises:
            TransportError: the request could not be completed.
            UpstreamStatusError: the response status was not 200.
            BodyReadError: the body could not be drained.
        """
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/atom+xml, application/xml;q=0.9",
        }

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self.transport,
        ) as client:
            try:
                async with client.stream("GET", self.url) as response:
                    if response.status_code != httpx.codes.OK:
                        raise UpstreamStatusError(response.status_code, self.url)
                    try:
                        return await response.aread()
                    except (httpx.TransportError, httpx.DecodingError, httpx.StreamError) as e:
                        raise BodyReadError(f"failed to read response: {e}") from e
            except httpx.TransportError as e:
                raise TransportError(f"request to {self.url} failed: {e}") from e

    def fetch_sync(self) -> bytes:
        """Synchronous wrapper for fetch."""
        return asyncio.run(self.fetch())
