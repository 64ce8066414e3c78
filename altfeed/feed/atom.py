"""Atom document parsing and serialization."""

import re
from typing import Any, Dict, List, Optional
from xml.parsers import expat
from xml.sax.saxutils import escape, quoteattr

from ..errors import ParseError, SerializeError
from .models import Entry, FeedDocument, Link, Summary

ATOM_NS = "http://www.w3.org/2005/Atom"
XML_NS = "http://www.w3.org/XML/1998/namespace"
XML_HEADER = b'<?xml version="1.0" encoding="UTF-8"?>\n'

_NS_SEP = " "
_TEXT_FIELDS = ("title", "id", "updated")
_ILLEGAL_XML_CHARS = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _local(name: str) -> str:
    return name.rsplit(_NS_SEP, 1)[-1]


class _FeedBuilder:
    """Build a FeedDocument from expat events.

    Children are matched by local name. The summary body is taken straight
    from the input bytes between the end of ``<summary ...>`` and the start of
    ``</summary>``, so it keeps the source's escaping.

    Prefixed namespaces declared outside summary bodies are collected on the
    feed so the bodies stay well-formed when written back out. Documents with
    a DOCTYPE are refused, since their entities would not survive that trip.
    """

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.parser = expat.ParserCreate(namespace_separator=_NS_SEP)
        self.parser.XmlDeclHandler = self._xml_decl
        self.parser.StartElementHandler = self._start
        self.parser.EndElementHandler = self._end
        self.parser.CharacterDataHandler = self._chars
        self.parser.CommentHandler = self._other
        self.parser.ProcessingInstructionHandler = self._other
        self.parser.StartCdataSectionHandler = self._other
        self.parser.StartNamespaceDeclHandler = self._namespace
        self.parser.StartDoctypeDeclHandler = self._doctype
        self.parser.EntityDeclHandler = self._entity_decl

        self.stack: List[str] = []
        self.feed: Dict[str, Any] = {"links": [], "entries": [], "namespaces": {}}
        self.entry: Optional[Dict[str, Any]] = None
        self.text: List[str] = []

        self.summary_type: Optional[str] = None
        self.summary_depth = 0
        self.inner_start: Optional[int] = None

    def build(self) -> FeedDocument:
        """Run the parser over the whole document."""
        try:
            self.parser.Parse(self.data, True)
        except (expat.ExpatError, UnicodeDecodeError) as e:
            raise ParseError(f"failed to unmarshal feed: {e}") from e

        for field in ("id", "updated"):
            if not self.feed.get(field):
                raise ParseError(f"failed to unmarshal feed: missing <{field}>")
        return FeedDocument(**self.feed)

    @property
    def _capturing(self) -> bool:
        return self.summary_type is not None

    def _mark(self) -> None:
        if self.inner_start is None:
            self.inner_start = self.parser.CurrentByteIndex

    def _xml_decl(self, version: str, encoding: Optional[str], standalone: int) -> None:
        if encoding and encoding.lower().replace("_", "-") not in ("utf-8", "utf8"):
            raise ParseError(f"failed to unmarshal feed: unsupported encoding {encoding!r}")

    def _doctype(self, *args: Any) -> None:
        raise ParseError("failed to unmarshal feed: DOCTYPE declarations are not allowed")

    def _entity_decl(self, name: str, *args: Any) -> None:
        raise ParseError(f"failed to unmarshal feed: entity declaration {name!r} is not allowed")

    def _namespace(self, prefix: Optional[str], uri: str) -> None:
        # declarations inside a summary body travel with the body
        if self._capturing or not prefix:
            return
        known = self.feed["namespaces"].setdefault(prefix, uri)
        if known != uri:
            raise ParseError(
                f"failed to unmarshal feed: prefix {prefix!r} bound to both {known!r} and {uri!r}"
            )

    def _start(self, name: str, attrs: Dict[str, str]) -> None:
        if self._capturing:
            self._mark()
            self.summary_depth += 1
            return

        local = _local(name)
        depth = len(self.stack)
        if local in _TEXT_FIELDS:
            self.text = []

        if depth == 0:
            if name != f"{ATOM_NS}{_NS_SEP}feed":
                raise ParseError(
                    f"failed to unmarshal feed: expected element type <feed> but have <{local}>"
                )
            self.feed["lang"] = attrs.get(f"{XML_NS}{_NS_SEP}lang", "")
        elif depth == 1 and local == "link":
            self.feed["links"].append(Link(href=attrs.get("href", ""), rel=attrs.get("rel", "")))
        elif depth == 1 and local == "entry":
            self.entry = {"links": []}
        elif depth == 2 and self.stack[-1] == "entry":
            if local == "link":
                self.entry["links"].append(
                    Link(href=attrs.get("href", ""), rel=attrs.get("rel", ""))
                )
            elif local == "summary":
                self.summary_type = attrs.get("type", "")
                self.summary_depth = 0
                self.inner_start = None

        self.stack.append(local)

    def _end(self, name: str) -> None:
        if self._capturing:
            if self.summary_depth > 0:
                self._mark()
                self.summary_depth -= 1
                return
            body = ""
            if self.inner_start is not None:
                body = self.data[self.inner_start:self.parser.CurrentByteIndex].decode("utf-8")
            self.entry["summary"] = Summary(type=self.summary_type, body=body)
            self.summary_type = None
            self.stack.pop()
            return

        local = self.stack.pop()
        depth = len(self.stack)

        if depth == 1 and local in _TEXT_FIELDS:
            self.feed[local] = "".join(self.text)
        elif depth == 1 and local == "entry":
            self.feed["entries"].append(Entry(**self.entry))
            self.entry = None
        elif depth == 2 and self.stack[-1] == "entry" and local in _TEXT_FIELDS:
            self.entry[local] = "".join(self.text)

    def _chars(self, data: str) -> None:
        if self._capturing:
            self._mark()
        elif self.stack and self.stack[-1] in _TEXT_FIELDS:
            self.text.append(data)

    def _other(self, *args: Any) -> None:
        if self._capturing:
            self._mark()


def parse_feed(data: bytes) -> FeedDocument:
    """Parse Atom bytes into a FeedDocument.

    Raises:
        ParseError: malformed markup, bad encoding, a DOCTYPE, a namespace
            prefix bound to two URIs, wrong root element, or a feed without
            ``id``/``updated``.
    """
    return _FeedBuilder(data).build()


def _text(value: str) -> str:
    return escape(value, {"\r": "&#13;"})


def _attr(value: str) -> str:
    return quoteattr(value, {"\r": "&#13;"})


def _link(link: Link) -> str:
    rel = f" rel={_attr(link.rel)}" if link.rel else ""
    return f"<link href={_attr(link.href)}{rel}/>"


def _entry(entry: Entry) -> str:
    parts = [f"<title>{_text(entry.title)}</title>"]
    parts.extend(_link(link) for link in entry.links)
    parts.append(f"<updated>{_text(entry.updated)}</updated>")
    parts.append(f"<id>{_text(entry.id)}</id>")
    summary_type = f" type={_attr(entry.summary.type)}" if entry.summary.type else ""
    # body is already markup
    parts.append(f"<summary{summary_type}>{entry.summary.body}</summary>")
    return "<entry>" + "".join(parts) + "</entry>"


def serialize_feed(feed: FeedDocument) -> bytes:
    """Serialize a FeedDocument to Atom bytes without the XML preamble.

    Optional attributes (``xml:lang``, ``rel``, ``type``) are left out when
    empty. Summary bodies are written verbatim.

    Raises:
        SerializeError: a value holds characters that XML cannot carry.
    """
    lang = f" xml:lang={_attr(feed.lang)}" if feed.lang else ""
    namespaces = "".join(
        f" xmlns:{prefix}={_attr(uri)}" for prefix, uri in feed.namespaces.items()
    )
    parts = [f'<feed xmlns="{ATOM_NS}"{namespaces}{lang}>', f"<title>{_text(feed.title)}</title>"]
    parts.extend(_link(link) for link in feed.links)
    parts.append(f"<id>{_text(feed.id)}</id>")
    parts.append(f"<updated>{_text(feed.updated)}</updated>")
    parts.extend(_entry(entry) for entry in feed.entries)
    parts.append("</feed>")
    document = "".join(parts)

    bad = _ILLEGAL_XML_CHARS.search(document)
    if bad is not None:
        raise SerializeError(
            f"failed to marshal feed: illegal character {bad.group()!r} at offset {bad.start()}"
        )
    return document.encode("utf-8")
