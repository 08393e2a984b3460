# woodpecker/prebuilt/base.py
"""
Base classes for the ready-made locations.

* :class:`PagedLocation` – listings that accept page/size query parameters.
* :class:`PointLocation` – lookups of one record; they cannot be paginated.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Sequence, Tuple

from woodpecker.common.errors import SwarmUnsupported
from woodpecker.common.resource import Location, R
from woodpecker.common.swarm import PagePolicy, Swarm
from woodpecker.hole.sets import HoleFlag
from woodpecker.utils import extend_query

__all__ = ("PagedLocation", "PointLocation")

_Pairs = Sequence[Tuple[str, str]]


@dataclass(frozen=True)
class _FlaggedLocation(Location[R]):
    flag: HoleFlag = field(default=HoleFlag.NONE, kw_only=True)

    @property
    def specifier(self) -> HoleFlag:
        return self.flag


@dataclass(frozen=True)
class PagedLocation(_FlaggedLocation[R]):
    """A listing. Subclasses set :attr:`SINGLE_PAGE` and may override :meth:`page_params`."""

    policy: Optional[PagePolicy] = field(default=None, kw_only=True)

    #: parameters used when no swarm is requested
    SINGLE_PAGE: ClassVar[_Pairs] = (("page", "1"), ("limit", "25"))
    #: the backend's own ceilings, enabled by :meth:`polite`
    POLITE: ClassVar[PagePolicy] = PagePolicy(max_page=100)

    def page_params(self, page: int, page_size: int) -> _Pairs:
        return (("page", str(page)), ("limit", str(page_size)))

    def dispatch(self, url: str, swarm: Optional[Swarm], page: int, page_size: int) -> str:
        if swarm is None:
            return extend_query(url, self.SINGLE_PAGE)
        if page < 1:
            raise ValueError(f"{self!r} requires page >= 1, got {page}")
        if self.policy is not None:
            self.policy.check(page, page_size)
        return extend_query(url, self.page_params(page, page_size))

    def polite(self) -> PagedLocation[R]:
        """Copy of this location guarded by :attr:`POLITE`."""
        return dataclasses.replace(self, policy=self.POLITE)


@dataclass(frozen=True)
class PointLocation(_FlaggedLocation[R]):
    """A single-record lookup: the URL from :meth:`locate` is used as is."""

    def dispatch(self, url: str, swarm: Optional[Swarm], page: int, page_size: int) -> str:
        if swarm is not None:
            raise SwarmUnsupported(self)
        return url
