# woodpecker/prebuilt/replies.py
"""Locations producing :class:`ReplySet` resources."""
from __future__ import annotations

from dataclasses import dataclass

from woodpecker.hole.sets import ReplySet
from woodpecker.prebuilt.base import PointLocation
from woodpecker.utils import extend_query

__all__ = ("FetchReply",)


@dataclass(frozen=True)
class FetchReply(PointLocation[ReplySet]):
    """Every reply of one hole; the backend returns them in a single page."""

    hole_id: int

    resource = ReplySet

    def locate(self, url: str) -> str:
        return extend_query(url, (("action", "getcomment"), ("pid", str(self.hole_id))))
