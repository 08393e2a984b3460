# File: woodpecker/utils.py
"""woodpecker.utils: URL helpers used by the endpoint and the locations."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse

from woodpecker.common.errors import MalformedUrlError
from woodpecker.logger import logger

__all__: Sequence[str] = (
    "validate_url",
    "extend_query",
    "join_path",
)


def validate_url(url: str) -> str:
    """Check that *url* is an absolute http(s) URL and return it unchanged."""
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise MalformedUrlError(f"Cannot parse URL {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise MalformedUrlError(f"Not an absolute http(s) URL: {url!r}")
    return url


def extend_query(url: str, pairs: Iterable[Tuple[str, str]]) -> str:
    """Append query *pairs* to *url*, keeping the parameters already present."""
    parsed = urlparse(url)
    query = parse_qsl(parsed.query, keep_blank_values=True)
    query.extend((key, str(value)) for key, value in pairs)
    extended = urlunparse(parsed._replace(query=urlencode(query)))
    logger.debug("Extended URL: %s -> %s", url, extended)
    return extended


def join_path(url: str, segment: str) -> str:
    """Resolve *segment* against the path of *url*, keeping its query string.

    ``join_path("https://h/api/?t=1", "follow")`` → ``"https://h/api/follow?t=1"``
    """
    parsed = urlparse(url)
    joined = urlparse(urljoin(urlunparse(parsed._replace(query="", fragment="")), segment))
    return urlunparse(joined._replace(query=parsed.query))
