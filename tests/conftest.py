"""Shared fixtures for altfeed tests."""

from typing import Callable, List

import httpx
import pytest

from altfeed.cache import MemoryCacheStore
from altfeed.ingestion import UpstreamFetcher
from altfeed.pipeline import FeedSource

UPSTREAM_URL = "https://xkcd.com/atom.xml"

SAMPLE_ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xml:lang="en"><title>xkcd.com</title><link href="http://xkcd.com/" rel="alternate"></link><id>https://xkcd.com/</id><updated>2024-01-05T00:00:00Z</updated><entry><title>Second Comic</title><link href="http://xkcd.com/2/" rel="alternate"></link><updated>2024-01-05T00:00:00Z</updated><id>https://xkcd.com/2/</id><summary type="html">&lt;img src="http://imgs.xkcd.com/comics/second.png" title="Tom &amp;amp; Jerry" alt="Tom &amp;amp; Jerry" /&gt;</summary></entry><entry><title>First Comic</title><link href="http://xkcd.com/1/" rel="alternate"></link><updated>2024-01-01T00:00:00Z</updated><id>https://xkcd.com/1/</id><summary type="html">&lt;img src="http://imgs.xkcd.com/comics/first.png" title="first" alt="first" /&gt;</summary></entry></feed>
"""

MINIMAL_ATOM = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"><title>xkcd.com</title><id>https://xkcd.com/</id><updated>2024-01-05T00:00:00Z</updated><entry><title>Hello</title><updated>2024-01-05T00:00:00Z</updated><id>https://xkcd.com/3/</id><summary><img src="http://imgs.xkcd.com/x.png" alt="hi"/></summary></entry></feed>
"""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Upstream:
    """Mock upstream that records every request it serves."""

    def __init__(self, body: bytes = SAMPLE_ATOM, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def make_source(store: MemoryCacheStore) -> Callable[[Upstream], FeedSource]:
    """Build a FeedSource that talks to the given mock upstream."""

    def _make(mock: Upstream) -> FeedSource:
        fetcher = UpstreamFetcher(url=UPSTREAM_URL, transport=mock.transport)
        return FeedSource(fetcher=fetcher, store=store)

    return _make
