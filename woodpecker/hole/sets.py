# woodpecker/hole/sets.py
"""
Deduplicated collections of hole and reply entries.

An entry is identified by its record id; a :class:`HoleFlag` widens that
key so that, e.g., the same hole observed with two different reply counts
is kept twice. Sets built with different flags cannot be merged.
"""
from __future__ import annotations

import enum
from abc import abstractmethod
from typing import Any, ClassVar, Dict, Generic, Hashable, Iterable, Iterator, List, Self, Type, TypeVar

from pydantic import BaseModel, ValidationError

from woodpecker.common.errors import MergeError, ParseError
from woodpecker.common.resource import Resource
from woodpecker.hole.models import HoleEntry, HolePage, ReplyEntry, ReplyPage

__all__ = ("HoleFlag", "HoleSet", "ReplySet")


class HoleFlag(enum.Flag):
    """Extra fields that take part in the identity of an entry."""

    NONE = 0
    REPLY = enum.auto()
    LIKE = enum.auto()
    RECORD = enum.auto()


E = TypeVar("E", HoleEntry, ReplyEntry)


class _EntrySet(Resource, Generic[E]):
    page_model: ClassVar[Type[BaseModel]]

    def __init__(self, entries: Iterable[E] = (), flag: HoleFlag = HoleFlag.NONE) -> None:
        self._flag = HoleFlag(flag)
        self._entries: Dict[Hashable, E] = {}
        for entry in entries:
            self._entries.setdefault(self._key(entry), entry)

    @abstractmethod
    def _key(self, entry: E) -> Hashable:
        """Identity of *entry* under the flag of this set."""

    # -- Resource ----------------------------------------------------------

    @classmethod
    def blank(cls, specifier: Any = None) -> Self:
        return cls(flag=specifier or HoleFlag.NONE)

    @classmethod
    def from_json(cls, text: str, specifier: Any = None) -> Self:
        try:
            page = cls.page_model.model_validate_json(text)
        except ValidationError as exc:
            raise ParseError(f"{cls.__name__}: unexpected payload ({exc.error_count()} error(s))") from exc
        return cls(page.entries(), flag=specifier or HoleFlag.NONE)  # type: ignore[attr-defined]

    def merge(self, other: Self) -> Self:
        """Union of both sets; on a key collision the entry of *self* is kept."""
        if type(other) is not type(self):
            raise MergeError(f"Cannot merge {type(self).__name__} with {type(other).__name__}")
        if other._flag != self._flag:
            raise MergeError(f"Sets with {self._flag!r} and {other._flag!r} cannot be merged")
        merged = type(self)(flag=self._flag)
        merged._entries = dict(self._entries)
        for key, entry in other._entries.items():
            merged._entries.setdefault(key, entry)
        return merged

    # -- collection protocol ----------------------------------------------

    @property
    def flag(self) -> HoleFlag:
        return self._flag

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[E]:
        return iter(self._entries.values())

    def __contains__(self, entry: object) -> bool:
        try:
            return self._key(entry) in self._entries  # type: ignore[arg-type]
        except AttributeError:
            return False

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._flag == other._flag and self._entries.keys() == other._entries.keys()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={len(self)}, flag={self._flag!r})"

    def ids(self) -> set[int]:
        return {entry.entry.id for entry in self._entries.values()}

    def ordered(self) -> List[E]:
        """Entries sorted by record id, newest first."""
        return sorted(self._entries.values(), key=lambda e: (e.entry.id, e.snapshot), reverse=True)

    def to_records(self) -> List[dict[str, Any]]:
        return [entry.model_dump(mode="json") for entry in self.ordered()]


class HoleSet(_EntrySet[HoleEntry]):
    page_model = HolePage

    def _key(self, entry: HoleEntry) -> Hashable:
        hole = entry.entry
        return (
            hole.id,
            hole.reply if self._flag & HoleFlag.REPLY else None,
            hole.likenum if self._flag & HoleFlag.LIKE else None,
            entry.snapshot if self._flag & HoleFlag.RECORD else None,
        )


class ReplySet(_EntrySet[ReplyEntry]):
    """Replies of one or more holes; only :attr:`HoleFlag.RECORD` affects identity."""

    page_model = ReplyPage

    def _key(self, entry: ReplyEntry) -> Hashable:
        return (
            entry.entry.id,
            entry.snapshot if self._flag & HoleFlag.RECORD else None,
        )
