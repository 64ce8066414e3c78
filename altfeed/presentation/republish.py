"""Republish the feed with captions appended to each summary."""

from ..feed import XML_HEADER, FeedDocument, serialize_feed

ATOM_CONTENT_TYPE = "application/atom+xml"


def with_captions(feed: FeedDocument) -> FeedDocument:
    """Return a copy of the feed whose summaries end with their caption."""
    captioned = feed.model_copy(deep=True)
    for entry in captioned.entries:
        entry.summary.body += "\n" + entry.caption()
    return captioned


def republish(feed: FeedDocument) -> bytes:
    """Serialize the captioned feed with the XML preamble.

    Raises:
        SerializeError: the captioned feed could not be serialized.
    """
    return XML_HEADER + serialize_feed(with_captions(feed))
