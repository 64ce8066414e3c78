"""Data model for an Atom feed document."""

from typing import Dict, List

from pydantic import BaseModel, Field

from .captions import extract_caption


class Link(BaseModel):
    """Navigation link on a feed or entry."""

    href: str = Field(..., description="Link target")
    rel: str = Field("", description="Link relation, empty when absent")


class Summary(BaseModel):
    """Entry summary.

    ``body`` is the raw inner markup of the ``<summary>`` element exactly as
    it appeared in the source document, still escaped. It is carried as an
    opaque string and never parsed.
    """

    type: str = Field("", description="Content type attribute, empty when absent")
    body: str = Field("", description="Raw inner markup")


class Entry(BaseModel):
    """One item within a feed."""

    title: str = Field("", description="Entry title")
    links: List[Link] = Field(default_factory=list, description="Entry links")
    updated: str = Field("", description="Last-updated timestamp")
    id: str = Field("", description="Unique identifier")
    summary: Summary = Field(default_factory=Summary)

    def caption(self) -> str:
        """Alt text of the first image in the summary."""
        return extract_caption(self.summary.body)


class FeedDocument(BaseModel):
    """Top-level Atom feed."""

    lang: str = Field("", description="xml:lang attribute, empty when absent")
    namespaces: Dict[str, str] = Field(
        default_factory=dict, description="Prefixed namespace declarations summaries rely on"
    )
    title: str = Field("", description="Feed title")
    links: List[Link] = Field(default_factory=list, description="Feed links")
    id: str = Field(..., description="Unique identifier")
    updated: str = Field(..., description="Last-updated timestamp")
    entries: List[Entry] = Field(default_factory=list, description="Entries in document order")
