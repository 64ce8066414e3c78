"""Tests for the caching feed source."""

import asyncio

import httpx
import pytest

from altfeed.cache import CacheStore, MemoryCacheStore
from altfeed.config import ConfigModel
from altfeed.errors import CacheCorruptionError, ParseError, TransportError, UpstreamStatusError
from altfeed.feed import parse_feed, rewrite_links
from altfeed.ingestion import UpstreamFetcher
from altfeed.pipeline import ATOM_KEY, DEFAULT_TTL, FeedSource
from conftest import SAMPLE_ATOM, UPSTREAM_URL, Upstream


class FailingStore(CacheStore):
    """Store that always misses and refuses every write."""

    def __init__(self):
        self.writes = 0

    def get(self, key):
        return None

    def set(self, key, value, ttl):
        self.writes += 1
        raise ConnectionError("cache unavailable")


def test_miss_fetches_and_stores(upstream, make_source, store):
    source = make_source(upstream)

    feed = asyncio.run(source.get_feed())

    assert len(upstream.requests) == 1
    assert feed == parse_feed(rewrite_links(SAMPLE_ATOM))
    assert store.get(ATOM_KEY) is not None


def test_links_are_rewritten(upstream, make_source):
    feed = asyncio.run(make_source(upstream).get_feed())

    assert feed.links[0].href == "https://xkcd.com/"
    assert feed.entries[0].links[0].href == "https://xkcd.com/2/"
    assert "https://imgs.xkcd.com/comics/second.png" in feed.entries[0].summary.body
    assert "http://" not in feed.entries[0].summary.body


def test_hit_within_ttl_skips_upstream(upstream, make_source, clock):
    source = make_source(upstream)
    first = asyncio.run(source.get_feed())
    clock.advance(DEFAULT_TTL - 1)

    second = asyncio.run(source.get_feed())

    assert len(upstream.requests) == 1
    assert second == first


def test_expired_entry_refetches(upstream, make_source, clock):
    source = make_source(upstream)
    asyncio.run(source.get_feed())
    clock.advance(DEFAULT_TTL)

    asyncio.run(source.get_feed())

    assert len(upstream.requests) == 2


def test_status_error_does_not_touch_cache(make_source, store):
    upstream = Upstream(status_code=503)
    source = make_source(upstream)

    with pytest.raises(UpstreamStatusError):
        asyncio.run(source.get_feed())

    assert len(store) == 0


def test_transport_error_propagates(make_source, store):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    fetcher = UpstreamFetcher(url=UPSTREAM_URL, transport=httpx.MockTransport(handler))
    source = FeedSource(fetcher=fetcher, store=store)

    with pytest.raises(TransportError):
        asyncio.run(source.get_feed())

    assert len(store) == 0


def test_parse_error_does_not_touch_cache(make_source, store):
    upstream = Upstream(body=b"<html>maintenance</html>")

    with pytest.raises(ParseError):
        asyncio.run(make_source(upstream).get_feed())

    assert len(store) == 0


def test_corrupt_cache_is_a_hard_failure(upstream, make_source, store):
    store.set(ATOM_KEY, b"<feed>truncated", DEFAULT_TTL)

    with pytest.raises(CacheCorruptionError, match="failed to unmarshal cached feed"):
        asyncio.run(make_source(upstream).get_feed())

    assert upstream.requests == []


def test_store_failure_is_absorbed(upstream):
    failing = FailingStore()
    fetcher = UpstreamFetcher(url=UPSTREAM_URL, transport=upstream.transport)
    source = FeedSource(fetcher=fetcher, store=failing)

    feed = asyncio.run(source.get_feed())

    assert failing.writes == 1
    assert len(feed.entries) == 2


def test_concurrent_misses_each_fetch(store):
    requests = []

    async def slow_handler(request):
        requests.append(request)
        await asyncio.sleep(0.01)
        return httpx.Response(200, content=SAMPLE_ATOM)

    fetcher = UpstreamFetcher(url=UPSTREAM_URL, transport=httpx.MockTransport(slow_handler))
    source = FeedSource(fetcher=fetcher, store=store)

    async def both():
        return await asyncio.gather(source.get_feed(), source.get_feed())

    first, second = asyncio.run(both())

    assert first == second
    assert len(requests) == 2
    assert store.get(ATOM_KEY) is not None


def test_prefixed_summary_is_served_from_cache(make_source, clock):
    body = (
        b'<feed xmlns="http://www.w3.org/2005/Atom" xmlns:media="http://search.yahoo.com/mrss/">'
        b"<title>xkcd.com</title><id>https://xkcd.com/</id><updated>u</updated>"
        b'<entry><title>e</title><summary><media:thumbnail url="http://imgs.xkcd.com/t.png"/></summary></entry></feed>'
    )
    upstream = Upstream(body=body)
    source = make_source(upstream)

    first = asyncio.run(source.get_feed())
    clock.advance(1)
    second = asyncio.run(source.get_feed())

    assert second == first
    assert len(upstream.requests) == 1


def test_doctype_is_refused_before_caching(make_source, store):
    body = (
        b'<!DOCTYPE feed [<!ENTITY c "comic">]>'
        b'<feed xmlns="http://www.w3.org/2005/Atom"><id>i</id><updated>u</updated>'
        b"<entry><summary>&c;</summary></entry></feed>"
    )
    upstream = Upstream(body=body)

    with pytest.raises(ParseError, match="DOCTYPE"):
        asyncio.run(make_source(upstream).get_feed())

    assert len(store) == 0


def test_get_feed_sync(upstream, make_source):
    feed = make_source(upstream).get_feed_sync()
    assert feed.title == "xkcd.com"


def test_from_config_uses_cache_settings(upstream):
    config = ConfigModel(cache={"key": "/other", "ttl_seconds": 60})
    store = MemoryCacheStore()

    source = FeedSource.from_config(config, store=store, transport=upstream.transport)
    asyncio.run(source.get_feed())

    assert source.ttl == 60
    assert store.get("/other") is not None
    assert str(upstream.requests[0].url) == config.upstream.url
