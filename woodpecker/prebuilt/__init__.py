"""Ready-made locations of the hole backend."""

from .base import PagedLocation, PointLocation
from .holes import FetchAttention, FetchFeed, FetchSearch, FetchSingle
from .replies import FetchReply

__all__ = [
    "FetchAttention",
    "FetchFeed",
    "FetchReply",
    "FetchSearch",
    "FetchSingle",
    "PagedLocation",
    "PointLocation",
]
