"""Contracts, strategies and errors shared by the engine and the locations."""

from .errors import (
    ClientBuildError,
    FetchError,
    MalformedUrlError,
    MergeError,
    ParseError,
    PoolCommunicationError,
    SwarmError,
    SwarmPolicyRejected,
    SwarmUnsupported,
    TransportError,
)
from .resource import Endpoint, Location, Resource
from .swarm import MAX_POOL_SIZE, Concurrent, PagePolicy, Sequential, Swarm, pool_size

__all__ = [
    "ClientBuildError",
    "Concurrent",
    "Endpoint",
    "FetchError",
    "Location",
    "MAX_POOL_SIZE",
    "MalformedUrlError",
    "MergeError",
    "PagePolicy",
    "ParseError",
    "PoolCommunicationError",
    "Resource",
    "Sequential",
    "Swarm",
    "SwarmError",
    "SwarmPolicyRejected",
    "SwarmUnsupported",
    "TransportError",
    "pool_size",
]
