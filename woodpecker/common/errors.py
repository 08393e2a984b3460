# woodpecker/common/errors.py
"""
Error hierarchy of the fetch engine.

Fatal errors abort :meth:`FetcherExecutor.execute`; per-page errors
(:class:`TransportError`, :class:`ParseError`) are logged and the page is
dropped, except in single-page mode where there is nothing to degrade to.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "FetchError",
    "ClientBuildError",
    "MalformedUrlError",
    "SwarmError",
    "SwarmUnsupported",
    "SwarmPolicyRejected",
    "TransportError",
    "ParseError",
    "MergeError",
    "PoolCommunicationError",
)


class FetchError(Exception):
    """Base class for everything the engine raises on purpose."""


class ClientBuildError(FetchError):
    """An HTTP client could not be constructed."""


class MalformedUrlError(FetchError):
    """The base URL or a composed page URL is not a valid absolute URL."""


class SwarmError(FetchError):
    """A location refused to dispatch a page."""


class SwarmUnsupported(SwarmError):
    """A paginated swarm was requested for a point lookup."""

    def __init__(self, location: object) -> None:
        super().__init__(f"Swarm not supported by {location!r}")
        self.location = location


class SwarmPolicyRejected(SwarmError):
    """The page ceiling configured on a location was exceeded."""

    def __init__(self, page: int, page_size: int, limit: str) -> None:
        super().__init__(f"page={page}, page_size={page_size} rejected by policy ({limit})")
        self.page = page
        self.page_size = page_size


class TransportError(FetchError):
    """One page request failed at the HTTP level."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"GET {url} failed: {reason}")
        self.url = url
        self.status = status


class ParseError(FetchError):
    """A response body does not match the expected JSON schema."""


class MergeError(FetchError):
    """Two resources of incompatible flavours were merged."""


class PoolCommunicationError(FetchError):
    """The worker pool broke down (a worker died or a hand-off failed)."""
