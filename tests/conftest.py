# File: tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from woodpecker.config import FetcherConfig


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


#: 2022-05-31 07:49:18 UTC
BASE_TS = 1653983358


def make_hole(pid: int, **overrides: Any) -> Dict[str, Any]:
    """A hole in the wire format of the backend (numbers as strings)."""
    hole: Dict[str, Any] = {
        "pid": str(pid),
        "hidden": "0",
        "text": f"hole {pid}",
        "type": "text",
        "timestamp": str(BASE_TS + pid),
        "reply": "0",
        "likenum": "1",
        "extra": "0",
        "url": "",
        "hot": str(BASE_TS + pid),
        "tag": None,
    }
    hole.update(overrides)
    return hole


def make_page(pids: Iterable[int], timestamp: Optional[int] = BASE_TS) -> Dict[str, Any]:
    page: Dict[str, Any] = {"code": 0, "data": [make_hole(pid) for pid in pids]}
    if timestamp is not None:
        page["timestamp"] = timestamp
    return page


def make_reply(cid: int, pid: int, text: str = "hello", **overrides: Any) -> Dict[str, Any]:
    reply: Dict[str, Any] = {
        "cid": cid,
        "pid": str(pid),
        "name": "Alice",
        "text": text,
        "islz": 0,
        "timestamp": BASE_TS + cid,
        "tag": None,
    }
    reply.update(overrides)
    return reply


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory):
    """Start aiohttp apps on free ports; yields a function returning the API base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}/api/"

    yield _serve
    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def make_config() -> Callable[..., FetcherConfig]:
    def _make(base_url: str, **overrides: Any) -> FetcherConfig:
        values: Dict[str, Any] = {"base_url": base_url, "user_token": "test-token", "timeout": 2.0}
        values.update(overrides)
        return FetcherConfig(**values)

    return _make
