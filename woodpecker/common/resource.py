# woodpecker/common/resource.py
"""
Capability contracts shared by every fetchable resource.

* :class:`Resource` – a deduplicated, mergeable collection of records.
* :class:`Location` – where a resource lives and how it is paginated.
* :class:`Endpoint` – the backend a location is resolved against.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Iterator, Optional, Self, TypeVar

from aiohttp import ClientResponse

from woodpecker.common.errors import ParseError
from woodpecker.common.swarm import Swarm

__all__ = ("Resource", "Location", "Endpoint")


class Resource(ABC):
    """A growable collection that can be parsed from a response and merged.

    ``blank()`` is the identity element of :meth:`merge`; merge itself is a
    set union and must be associative and idempotent.
    """

    @classmethod
    @abstractmethod
    def blank(cls, specifier: Any = None) -> Self:
        """Return an empty collection carrying *specifier*."""

    @classmethod
    @abstractmethod
    def from_json(cls, text: str, specifier: Any = None) -> Self:
        """Build an instance from a raw JSON body, raising :class:`ParseError`."""

    @classmethod
    async def parse(cls, response: ClientResponse, specifier: Any = None) -> Self:
        """Read the body of *response* and parse it."""
        try:
            text = await response.text()
        except UnicodeDecodeError as exc:
            raise ParseError(f"Undecodable body from {response.url}: {exc}") from exc
        return cls.from_json(text, specifier)

    @abstractmethod
    def merge(self, other: Self) -> Self:
        """Return the union of *self* and *other*, raising :class:`MergeError`."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __iter__(self) -> Iterator[Any]: ...

    def __or__(self, other: Self) -> Self:
        return self.merge(other)


R = TypeVar("R", bound=Resource)


class Location(ABC, Generic[R]):
    """Describe one fetchable target.

    Implementations are frozen dataclasses: workers read them concurrently
    and nothing ever writes to them during a fetch.
    """

    #: the resource class produced by this location
    resource: ClassVar[type[Resource]]

    @abstractmethod
    def locate(self, url: str) -> str:
        """Turn the endpoint base URL into this resource's URL."""

    @abstractmethod
    def dispatch(self, url: str, swarm: Optional[Swarm], page: int, page_size: int) -> str:
        """Specialise *url* for one page under *swarm* (``None`` = single page)."""

    def default_swarm(self) -> Optional[Swarm]:
        return None

    @property
    def specifier(self) -> Any:
        return None

    def blank(self) -> R:
        return self.resource.blank(self.specifier)  # type: ignore[return-value]

    async def parse(self, response: ClientResponse) -> R:
        return await self.resource.parse(response, self.specifier)  # type: ignore[return-value]


class Endpoint(ABC):
    """Supplies the base URL and the access token of a backend."""

    @property
    @abstractmethod
    def base_url(self) -> str: ...

    @property
    @abstractmethod
    def user_token(self) -> str: ...

    def locate(self, location: Location[Any]) -> str:
        return location.locate(self.base_url)
