"""Hole and reply records plus the resources collecting them."""

from .models import Hole, HoleEntry, HolePage, Reply, ReplyEntry, ReplyPage
from .sets import HoleFlag, HoleSet, ReplySet

__all__ = [
    "Hole",
    "HoleEntry",
    "HoleFlag",
    "HolePage",
    "HoleSet",
    "Reply",
    "ReplyEntry",
    "ReplyPage",
    "ReplySet",
]
