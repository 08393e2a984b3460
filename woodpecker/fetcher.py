# woodpecker/fetcher.py
"""
Fetch engine: turns a location plus a swarm into one merged resource.

Three strategies, selected by the swarm value:

* ``None``          – one page, errors are raised to the caller;
* :class:`Sequential` – pages 1..N one after another, failed pages dropped;
* :class:`Concurrent` – pages 1..N over a bounded pool of workers that pull
  URLs from a job queue and push parsed pages to a results queue.
"""
from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Union

from aiohttp import ClientError, ClientSession, ClientTimeout

from woodpecker.api import API
from woodpecker.common.errors import (
    ClientBuildError,
    FetchError,
    ParseError,
    PoolCommunicationError,
    SwarmPolicyRejected,
    TransportError,
)
from woodpecker.common.resource import Endpoint, Location, R
from woodpecker.common.swarm import MAX_POOL_SIZE, Concurrent, Sequential, Swarm, pool_size
from woodpecker.config import DEFAULT_REFERER, DEFAULT_USER_AGENT, FetcherConfig
from woodpecker.logger import logger

__all__ = ("ClientBuilder", "DefaultClientBuilder", "Fetcher", "FetcherExecutor")

# poison pill on the job queue, one per worker
_STOP = None


class _Done:
    """Last item a worker pushes on the results queue."""


_DONE = _Done()


class _WorkerCrash:
    """Unexpected failure inside the pool, forwarded to the collector."""

    def __init__(self, error: BaseException) -> None:
        self.error = error


class ClientBuilder(ABC):
    """Hook deciding how the HTTP clients of the engine are built."""

    @abstractmethod
    def build(self) -> ClientSession: ...


class DefaultClientBuilder(ClientBuilder):
    """aiohttp session with the browser-like headers the backend expects."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        referer: str = DEFAULT_REFERER,
        timeout: float = 15.0,
    ) -> None:
        self.user_agent = user_agent
        self.referer = referer
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: FetcherConfig) -> DefaultClientBuilder:
        return cls(user_agent=config.user_agent, referer=config.referer, timeout=config.timeout)

    def build(self) -> ClientSession:
        return ClientSession(
            headers={"User-Agent": self.user_agent, "Referer": self.referer},
            timeout=ClientTimeout(total=self.timeout),
            raise_for_status=False,
        )


class Fetcher:
    """A client of the hole backend.

    >>> fetcher = Fetcher(API(user_token="..."))
    >>> holes = await fetcher.fetch(FetchSearch("keyword")).execute()
    """

    def __init__(
        self,
        api: Endpoint,
        client_builder: Optional[ClientBuilder] = None,
        pool_limit: int = MAX_POOL_SIZE,
    ) -> None:
        if pool_limit < 1:
            raise ValueError("pool_limit must be >= 1")
        self.api = api
        self.client_builder = client_builder or DefaultClientBuilder()
        self.pool_limit = min(pool_limit, MAX_POOL_SIZE)

    @classmethod
    def from_config(cls, config: FetcherConfig, api: Optional[Endpoint] = None) -> Fetcher:
        return cls(
            api or API.from_config(config),
            client_builder=DefaultClientBuilder.from_config(config),
            pool_limit=config.pool_limit,
        )

    def fetch(self, location: Location[R]) -> FetcherExecutor[R]:
        """Prepare a fetch of *location* with its preferred swarm."""
        return FetcherExecutor(self, location, location.default_swarm())


class FetcherExecutor(Generic[R]):
    """One pending fetch; configure with :meth:`swarm`, run with :meth:`execute`."""

    def __init__(self, fetcher: Fetcher, location: Location[R], swarm: Optional[Swarm]) -> None:
        self._fetcher = fetcher
        self._location = location
        self._swarm = swarm

    def swarm(self, swarm: Optional[Swarm]) -> FetcherExecutor[R]:
        """Override the strategy; ``None`` selects the single-page mode."""
        self._swarm = swarm
        return self

    async def execute(self, cancel: Optional[asyncio.Event] = None) -> R:
        """Run the fetch and return the merged resource.

        Setting *cancel* stops the fetch early and returns what had been
        merged by then; in-flight requests still run to completion first.
        """
        swarm = self._swarm
        logger.info("Fetching %r (swarm=%r)", self._location, swarm)
        start = time.monotonic()
        if swarm is None:
            result = await self._execute_one(cancel)
        elif isinstance(swarm, Sequential):
            result = await self._execute_sequential(swarm, cancel)
        elif isinstance(swarm, Concurrent):
            result = await self._execute_concurrent(swarm, cancel)
        else:
            raise TypeError(f"Unknown swarm {swarm!r}")
        logger.info(
            "Fetched %d record(s) for %r in %.2f s", len(result), self._location, time.monotonic() - start
        )
        return result

    # ------------------------------------------------------------------ #
    # building blocks                                                    #
    # ------------------------------------------------------------------ #

    def _build_client(self) -> ClientSession:
        try:
            return self._fetcher.client_builder.build()
        except ClientBuildError:
            raise
        except Exception as exc:
            raise ClientBuildError(f"Cannot build a request client: {exc}") from exc

    def _page_url(self, swarm: Optional[Swarm], page: int, page_size: int) -> str:
        url = self._fetcher.api.locate(self._location)
        return self._location.dispatch(url, swarm, page, page_size)

    async def _get(self, session: ClientSession, url: str) -> R:
        """GET one page and parse it; raises TransportError or ParseError."""
        try:
            async with session.get(url) as response:
                if response.status >= 400:
                    raise TransportError(url, f"HTTP {response.status}", response.status)
                return await self._location.parse(response)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc

    @staticmethod
    def _cancelled(cancel: Optional[asyncio.Event]) -> bool:
        return cancel is not None and cancel.is_set()

    # ------------------------------------------------------------------ #
    # strategies                                                         #
    # ------------------------------------------------------------------ #

    async def _execute_one(self, cancel: Optional[asyncio.Event]) -> R:
        if self._cancelled(cancel):
            return self._location.blank()
        # page numbers are meaningless without a swarm
        url = self._page_url(None, 1, 1)
        async with self._build_client() as session:
            return await self._get(session, url)

    async def _execute_sequential(self, swarm: Sequential, cancel: Optional[asyncio.Event]) -> R:
        merged = self._location.blank()
        async with self._build_client() as session:
            for page in range(1, swarm.count + 1):
                if self._cancelled(cancel):
                    logger.info("Cancelled before page %d of %d", page, swarm.count)
                    break
                url = self._page_url(swarm, page, swarm.page_size)
                try:
                    one = await self._get(session, url)
                except (TransportError, ParseError) as exc:
                    logger.warning("Page %d dropped: %s", page, exc)
                    continue
                if self._cancelled(cancel):
                    break
                merged = merged.merge(one)
        return merged

    def _dispatch_pages(self, swarm: Concurrent) -> List[str]:
        """Page URLs in ascending order; pages refused by the policy are skipped."""
        urls: List[str] = []
        for page in range(1, swarm.count + 1):
            try:
                urls.append(self._page_url(swarm, page, swarm.page_size))
            except SwarmPolicyRejected as exc:
                logger.warning("Page %d not dispatched: %s", page, exc)
        return urls

    async def _execute_concurrent(self, swarm: Concurrent, cancel: Optional[asyncio.Event]) -> R:
        size = pool_size(swarm, self._fetcher.pool_limit)
        # SwarmUnsupported surfaces here, before any worker starts
        urls = self._dispatch_pages(swarm)

        sessions: List[ClientSession] = []
        try:
            for _ in range(size):
                sessions.append(self._build_client())
        except ClientBuildError:
            await asyncio.gather(*(s.close() for s in sessions))
            raise

        jobs: asyncio.Queue[Optional[str]] = asyncio.Queue(maxsize=size)
        results: asyncio.Queue[Any] = asyncio.Queue(maxsize=size)

        logger.debug("Starting %d worker(s) for %d page(s)", size, len(urls))
        workers = [
            asyncio.create_task(self._work(session, jobs, results, cancel), name=f"woodpecker-worker-{i}")
            for i, session in enumerate(sessions)
        ]
        dispatcher = asyncio.create_task(
            self._dispatch(urls, jobs, results, size, cancel), name="woodpecker-dispatcher"
        )
        tasks = [dispatcher, *workers]
        try:
            merged = await self._collect(results, size, cancel)
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return merged

    async def _dispatch(
        self,
        urls: List[str],
        jobs: asyncio.Queue[Optional[str]],
        results: asyncio.Queue[Any],
        workers: int,
        cancel: Optional[asyncio.Event],
    ) -> None:
        try:
            for enqueued, url in enumerate(urls):
                if self._cancelled(cancel):
                    logger.info("Cancelled: %d of %d page(s) not enqueued", len(urls) - enqueued, len(urls))
                    break
                await jobs.put(url)
            for _ in range(workers):
                await jobs.put(_STOP)
        except Exception as exc:
            await results.put(_WorkerCrash(exc))

    async def _work(
        self,
        session: ClientSession,
        jobs: asyncio.Queue[Optional[str]],
        results: asyncio.Queue[Any],
        cancel: Optional[asyncio.Event],
    ) -> None:
        try:
            async with session:
                while True:
                    url = await jobs.get()
                    if url is _STOP:
                        break
                    if self._cancelled(cancel):
                        continue
                    outcome: Union[R, FetchError]
                    try:
                        outcome = await self._get(session, url)
                    except (TransportError, ParseError) as exc:
                        outcome = exc
                    await results.put(outcome)
        except Exception as exc:
            await results.put(_WorkerCrash(exc))
        await results.put(_DONE)

    async def _collect(
        self, results: asyncio.Queue[Any], workers: int, cancel: Optional[asyncio.Event]
    ) -> R:
        """Merge pages until every worker reported done."""
        merged = self._location.blank()
        remaining = workers
        pages = failed = 0
        while remaining:
            item = await results.get()
            if item is _DONE:
                remaining -= 1
            elif isinstance(item, _WorkerCrash):
                raise PoolCommunicationError(f"Worker pool failed: {item.error!r}") from item.error
            elif isinstance(item, FetchError):
                failed += 1
                logger.warning("Page dropped: %s", item)
            elif self._cancelled(cancel):
                logger.debug("Discarding a page that completed after cancellation")
            else:
                merged = merged.merge(item)
                pages += 1
        logger.debug("Merged %d page(s), dropped %d", pages, failed)
        return merged
