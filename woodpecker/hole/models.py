# woodpecker/hole/models.py
"""
Records of the hole backend: posts ("holes"), replies and the pages they
come in.

Wire payloads are loose (numbers as strings, unix timestamps, the post
kind flattened into the post itself); the ``Raw*`` models absorb that and
convert into the clean :class:`Hole` / :class:`Reply` records.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, field_validator

__all__ = (
    "TextKind",
    "ImageKind",
    "AudioKind",
    "HoleKind",
    "Hole",
    "HoleEntry",
    "RawHole",
    "HolePage",
    "Reply",
    "ReplyEntry",
    "RawReply",
    "ReplyPage",
    "utc_now",
)


def _lossy_int(value: Any) -> int:
    """``"12"`` → 12; anything unparsable (``""``, ``None``, ``"n/a"``) → 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def _from_epoch(seconds: Any) -> datetime:
    try:
        return datetime.fromtimestamp(int(seconds), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"unix timestamp out of range: {seconds!r}") from exc


def _to_utc(value: Any) -> Any:
    """Accept unix seconds (int or numeric string), ISO-8601 strings and datetimes."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return _from_epoch(text)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return value  # let pydantic report it
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return value


def _number_to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return _lossy_int(value) == 1


def _iso_seconds(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="seconds")


LossyInt = Annotated[int, BeforeValidator(_lossy_int)]
NumberBool = Annotated[bool, BeforeValidator(_number_to_bool)]
Timestamp = Annotated[
    datetime,
    BeforeValidator(_to_utc),
    PlainSerializer(_iso_seconds, return_type=str, when_used="json"),
]


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


# --------------------------------------------------------------------------- #
# Holes                                                                       #
# --------------------------------------------------------------------------- #


class TextKind(BaseModel):
    type: Literal["text"] = "text"


class ImageKind(BaseModel):
    type: Literal["image"] = "image"
    url: str


class AudioKind(BaseModel):
    type: Literal["audio"] = "audio"
    url: str


HoleKind = Annotated[Union[TextKind, ImageKind, AudioKind], Field(discriminator="type")]


class Hole(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    kind: HoleKind
    timestamp: Timestamp
    reply: int = 0
    likenum: int = 0
    tag: Optional[str] = None


class RawHole(BaseModel):
    """A hole exactly as the API sends it."""

    pid: LossyInt
    text: str = ""
    type: Literal["text", "image", "audio"] = "text"
    url: Optional[str] = None
    timestamp: Timestamp
    reply: LossyInt = 0
    likenum: LossyInt = 0
    tag: Optional[str] = None

    def to_hole(self) -> Hole:
        if self.type == "text":
            kind: Any = TextKind()
        elif self.type == "image":
            kind = ImageKind(url=self.url or "")
        else:
            kind = AudioKind(url=self.url or "")
        return Hole(
            id=self.pid,
            text=self.text,
            kind=kind,
            timestamp=self.timestamp,
            reply=self.reply,
            likenum=self.likenum,
            tag=self.tag,
        )


class HoleEntry(BaseModel):
    """A hole together with the moment it was observed."""
    model_config = ConfigDict(frozen=True)

    entry: Hole
    snapshot: Timestamp


class HolePage(BaseModel):
    code: int
    count: Optional[int] = None
    data: List[RawHole]
    timestamp: Optional[Timestamp] = None

    @field_validator("data", mode="before")
    def _one_or_many(cls, v: Any) -> Any:
        # single-hole lookups answer with an object instead of a list
        if isinstance(v, dict):
            return [v]
        return v

    def entries(self) -> List[HoleEntry]:
        snapshot = self.timestamp or utc_now()
        return [HoleEntry(entry=raw.to_hole(), snapshot=snapshot) for raw in self.data]


# --------------------------------------------------------------------------- #
# Replies                                                                     #
# --------------------------------------------------------------------------- #

_PEOPLE_PREFIX = re.compile(r"\[(洞主|\w+?(\s\w+)?)\]\s+")


def _strip_people_prefix(text: str) -> str:
    """``"[Alice] hi"`` → ``"hi"``; only the first speaker tag is removed."""
    return _PEOPLE_PREFIX.sub("", text, count=1)


class Reply(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    hole: int
    name: str
    text: str
    dz: bool = False
    timestamp: Timestamp
    tag: Optional[str] = None


class RawReply(BaseModel):
    cid: int
    pid: LossyInt
    name: str = ""
    text: str = ""
    islz: NumberBool = False
    timestamp: Timestamp
    tag: Optional[str] = None

    def to_reply(self) -> Reply:
        return Reply(
            id=self.cid,
            hole=self.pid,
            name=self.name,
            text=_strip_people_prefix(self.text),
            dz=self.islz,
            timestamp=self.timestamp,
            tag=self.tag,
        )


class ReplyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: Reply
    snapshot: Timestamp


class ReplyPage(BaseModel):
    code: int
    data: List[RawReply]
    attention: NumberBool = False

    @field_validator("data", mode="before")
    def _unwrap_data(cls, v: Any) -> Any:
        # the newer API nests the list one level deeper: {"data": {"data": [...]}}
        if isinstance(v, dict) and "data" in v:
            return v["data"]
        return v

    def entries(self) -> List[ReplyEntry]:
        snapshot = utc_now()
        return [ReplyEntry(entry=raw.to_reply(), snapshot=snapshot) for raw in self.data]
