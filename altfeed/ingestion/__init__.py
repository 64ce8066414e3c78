"""Upstream feed retrieval."""

from .fetcher import UpstreamFetcher

__all__ = ["UpstreamFetcher"]
