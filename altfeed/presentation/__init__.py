"""Output representations of the cached feed."""

from .page import PageEntry, page_entries, render_page
from .republish import ATOM_CONTENT_TYPE, republish, with_captions

__all__ = [
    "ATOM_CONTENT_TYPE",
    "PageEntry",
    "page_entries",
    "render_page",
    "republish",
    "with_captions",
]
