# woodpecker/common/swarm.py
"""
Pagination strategies ("swarms") and the optional page-ceiling policy.

``None`` stands for the single-page mode; the two dataclasses below are the
only paginated variants.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, Union

from woodpecker.common.errors import SwarmPolicyRejected

__all__ = ("MAX_POOL_SIZE", "Sequential", "Concurrent", "Swarm", "pool_size", "PagePolicy")

#: hard upper bound on workers talking to one backend
MAX_POOL_SIZE: Final[int] = 16


def _check_positive(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True, slots=True)
class Sequential:
    """Fetch ``count`` pages one after another, in page order."""

    count: int
    page_size: int

    def __post_init__(self) -> None:
        _check_positive("count", self.count)
        _check_positive("page_size", self.page_size)


@dataclass(frozen=True, slots=True)
class Concurrent:
    """Fetch ``count`` pages with a bounded pool of workers."""

    count: int
    page_size: int

    def __post_init__(self) -> None:
        _check_positive("count", self.count)
        _check_positive("page_size", self.page_size)


Swarm = Union[Sequential, Concurrent]


def pool_size(swarm: Concurrent, limit: int = MAX_POOL_SIZE) -> int:
    """Number of workers for *swarm*; *limit* can only lower the hard cap."""
    return max(1, min(swarm.count, limit, MAX_POOL_SIZE))


@dataclass(frozen=True, slots=True)
class PagePolicy:
    """Dispatch-time ceiling on page number and page size (abuse guard)."""

    max_page: Optional[int] = None
    max_page_size: Optional[int] = None

    def check(self, page: int, page_size: int) -> None:
        if self.max_page is not None and page > self.max_page:
            raise SwarmPolicyRejected(page, page_size, f"max_page={self.max_page}")
        if self.max_page_size is not None and page_size > self.max_page_size:
            raise SwarmPolicyRejected(page, page_size, f"max_page_size={self.max_page_size}")
