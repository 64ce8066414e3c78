"""Fetch-or-reuse orchestration around the feed cache."""

import asyncio
from typing import Optional

import httpx
from rich.console import Console

from ..cache import CacheStore, MemoryCacheStore
from ..config import ConfigModel
from ..errors import CacheCorruptionError, ParseError
from ..feed import FeedDocument, parse_feed, rewrite_links, serialize_feed
from ..ingestion import UpstreamFetcher

console = Console(stderr=True)

ATOM_KEY = "/xkcd.atom"
DEFAULT_TTL = 5 * 60.0


class FeedSource:
    """Serve the upstream feed from a short-lived cache.

    Concurrent misses each go upstream on their own; whichever stores last
    wins, and every stored snapshot is a valid feed.
    """

    def __init__(
        self,
        fetcher: UpstreamFetcher,
        store: CacheStore,
        cache_key: str = ATOM_KEY,
        ttl: float = DEFAULT_TTL,
    ) -> None:
        """Initialize feed source."""
        self.fetcher = fetcher
        self.store = store
        self.cache_key = cache_key
        self.ttl = ttl

    @classmethod
    def from_config(
        cls,
        config: ConfigModel,
        store: Optional[CacheStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "FeedSource":
        """Build a feed source with an in-memory store unless one is given."""
        return cls(
            fetcher=UpstreamFetcher.from_config(config.upstream, transport=transport),
            store=store if store is not None else MemoryCacheStore(),
            cache_key=config.cache.key,
            ttl=config.cache.ttl_seconds,
        )

    async def get_feed(self) -> FeedDocument:
        """Return the cached feed, fetching upstream on a miss.

        Raises:
            CacheCorruptionError: the cached snapshot does not parse.
            FeedError: any failure along fetch, rewrite and parse.
        """
        cached = self.store.get(self.cache_key)
        if cached is not None:
            console.print("[dim]found feed in cache[/dim]")
            try:
                return parse_feed(cached)
            except ParseError as e:
                raise CacheCorruptionError(f"failed to unmarshal cached feed: {e}") from e

        console.print(f"[dim]making request to {self.fetcher.url}[/dim]")
        raw = await self.fetcher.fetch()
        feed = parse_feed(rewrite_links(raw))
        self._store(feed)
        return feed

    def _store(self, feed: FeedDocument) -> None:
        """Cache a snapshot of the feed; failures only cost a refetch."""
        try:
            self.store.set(self.cache_key, serialize_feed(feed), self.ttl)
        except Exception as e:
            console.print(f"[yellow]Warning: could not cache feed: {e}[/yellow]")

    def get_feed_sync(self) -> FeedDocument:
        """Synchronous wrapper for get_feed."""
        return asyncio.run(self.get_feed())
