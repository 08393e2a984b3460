# woodpecker/prebuilt/holes.py
"""Locations producing :class:`HoleSet` resources."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from woodpecker.common.swarm import Concurrent, PagePolicy, Swarm
from woodpecker.hole.sets import HoleSet
from woodpecker.prebuilt.base import PagedLocation, PointLocation
from woodpecker.utils import extend_query, join_path

__all__ = ("FetchFeed", "FetchAttention", "FetchSearch", "FetchSingle")


@dataclass(frozen=True)
class FetchFeed(PagedLocation[HoleSet]):
    """The live feed, newest holes first."""

    resource = HoleSet

    def locate(self, url: str) -> str:
        return join_path(url, "pku_hole")

    def default_swarm(self) -> Optional[Swarm]:
        return Concurrent(count=4, page_size=30)


@dataclass(frozen=True)
class FetchAttention(PagedLocation[HoleSet]):
    """Holes the token owner follows."""

    resource = HoleSet

    def locate(self, url: str) -> str:
        return join_path(url, "follow")

    def default_swarm(self) -> Optional[Swarm]:
        return Concurrent(count=4, page_size=30)


@dataclass(frozen=True)
class FetchSearch(PagedLocation[HoleSet]):
    """Full-text search.

    The backend caps page size at 50 and serves only a few pages of results;
    larger requests are undefined behaviour on its side.
    """

    keyword: str

    resource = HoleSet
    SINGLE_PAGE = (("pagesize", "50"), ("page", "1"))
    POLITE: ClassVar[PagePolicy] = PagePolicy(max_page=3, max_page_size=50)

    def locate(self, url: str) -> str:
        return extend_query(url, (("action", "search"), ("keywords", self.keyword)))

    def page_params(self, page: int, page_size: int):
        return (("pagesize", str(page_size)), ("page", str(page)))

    def default_swarm(self) -> Optional[Swarm]:
        return Concurrent(count=3, page_size=50)


@dataclass(frozen=True)
class FetchSingle(PointLocation[HoleSet]):
    """One hole by id."""

    id: int

    resource = HoleSet

    def locate(self, url: str) -> str:
        return extend_query(url, (("action", "getone"), ("pid", str(self.id))))
