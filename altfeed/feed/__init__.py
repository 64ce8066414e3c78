"""Atom feed model, codec and text helpers."""

from .atom import XML_HEADER, parse_feed, serialize_feed
from .captions import extract_caption
from .models import Entry, FeedDocument, Link, Summary
from .rewriter import rewrite_links

__all__ = [
    "FeedDocument",
    "Entry",
    "Link",
    "Summary",
    "XML_HEADER",
    "parse_feed",
    "serialize_feed",
    "extract_caption",
    "rewrite_links",
]
