"""Feed pipeline."""

from .orchestrator import ATOM_KEY, DEFAULT_TTL, FeedSource

__all__ = ["FeedSource", "ATOM_KEY", "DEFAULT_TTL"]
