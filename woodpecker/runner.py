# === FILE: woodpecker/runner.py ===
"""
Обёртка для запуска одной выборки: конфиг → API → Fetcher → ресурс.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from woodpecker.common.resource import Location, Resource
from woodpecker.config import FetcherConfig
from woodpecker.fetcher import Fetcher
from woodpecker.logger import logger
from woodpecker.prebuilt.base import PagedLocation

__all__ = ["start_fetch", "UNSET"]

#: marker for "use the location's default swarm"
UNSET: Any = object()


async def start_fetch(
    cfg: FetcherConfig,
    location: Location[Any],
    swarm: Any = UNSET,
    fetch_timeout: Optional[float] = None,
) -> Resource:
    """
    Выполняет выборку и возвращает объединённый ресурс.

    Parameters
    ----------
    cfg : FetcherConfig
        Конфигурация клиента.
    location : Location
        Что именно загружать.
    swarm : Swarm | None
        Стратегия; по умолчанию — предпочтительная стратегия location,
        ``None`` — одна страница.
    fetch_timeout : float | None
        По истечении времени новые страницы не запрашиваются, и
        возвращается то, что уже успели объединить.
    """
    if cfg.polite and isinstance(location, PagedLocation):
        location = location.polite()
    executor = Fetcher.from_config(cfg).fetch(location)
    if swarm is not UNSET:
        executor.swarm(swarm)

    cancel = asyncio.Event()
    if fetch_timeout is None:
        return await executor.execute(cancel)

    def _expire() -> None:
        logger.warning("Fetch timeout (%.1f s) reached, returning partial result", fetch_timeout)
        cancel.set()

    handle = asyncio.get_running_loop().call_later(fetch_timeout, _expire)
    try:
        return await executor.execute(cancel)
    finally:
        handle.cancel()
