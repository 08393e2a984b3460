# woodpecker/shim.py
"""
Pure parsing entry points for callers in another runtime (a browser
front-end, a scripting host): JSON text in, plain JSON-compatible lists out.

No network access happens here. Every function returns the entries in the
order they appear in the input, or raises :class:`ShimSyntaxError`.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from woodpecker.hole.models import HoleEntry, HolePage, ReplyEntry, ReplyPage

__all__ = (
    "ShimSyntaxError",
    "parse_holes",
    "parse_holes_from_api",
    "parse_replies",
    "parse_replies_from_api",
)

_HOLE_ENTRIES = TypeAdapter(List[HoleEntry])
_REPLY_ENTRIES = TypeAdapter(List[ReplyEntry])


class ShimSyntaxError(ValueError):
    """The input is not valid JSON or does not have the expected shape."""


def _dump(entries: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    return [entry.model_dump(mode="json") for entry in entries]


def _parse(load: Callable[[str], Iterable[BaseModel]], text: str) -> List[Dict[str, Any]]:
    try:
        return _dump(load(text))
    except ValidationError as exc:
        raise ShimSyntaxError(str(exc)) from exc


def _from_page(model: Type[BaseModel]) -> Callable[[str], Iterable[BaseModel]]:
    return lambda text: model.model_validate_json(text).entries()  # type: ignore[attr-defined]


def parse_holes(text: str) -> List[Dict[str, Any]]:
    """Parse a list of previously exported hole entries."""
    return _parse(_HOLE_ENTRIES.validate_json, text)


def parse_holes_from_api(text: str) -> List[Dict[str, Any]]:
    """Parse a raw hole page as the backend sends it."""
    return _parse(_from_page(HolePage), text)


def parse_replies(text: str) -> List[Dict[str, Any]]:
    """Parse a list of previously exported reply entries."""
    return _parse(_REPLY_ENTRIES.validate_json, text)


def parse_replies_from_api(text: str) -> List[Dict[str, Any]]:
    """Parse a raw reply page as the backend sends it."""
    return _parse(_from_page(ReplyPage), text)
