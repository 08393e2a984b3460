# woodpecker/api.py
"""
The backend endpoint: base URL, fixed query parameters and the user token.
"""
from __future__ import annotations

from typing import Mapping, Optional

from woodpecker.common.resource import Endpoint
from woodpecker.config import DEFAULT_API_BASE, FetcherConfig
from woodpecker.utils import extend_query, validate_url

__all__ = ("API",)


class API(Endpoint):
    """Immutable entry point of the hole backend.

    The token is only put on the wire when *token_param* names the query
    parameter the backend expects (the legacy API uses ``user_token``).
    """

    def __init__(
        self,
        base: str = DEFAULT_API_BASE,
        params: Optional[Mapping[str, str]] = None,
        user_token: str = "",
        token_param: Optional[str] = None,
    ) -> None:
        pairs = list((params or {}).items())
        if token_param:
            pairs.append((token_param, user_token))
        url = validate_url(base)
        self._base_url = extend_query(url, pairs) if pairs else url
        self._user_token = user_token

    @classmethod
    def from_config(cls, config: FetcherConfig) -> API:
        return cls(
            str(config.base_url),
            params=config.params,
            user_token=config.user_token,
            token_param=config.token_param,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_token(self) -> str:
        return self._user_token

    def __repr__(self) -> str:
        return f"API(base_url={self._base_url!r})"
