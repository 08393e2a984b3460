# woodpecker/__init__.py
"""
Woodpecker package initializer.
Defines package version and exposes the fetch engine.
"""
__version__ = "0.1.0"

from woodpecker.api import API
from woodpecker.common import Concurrent, Sequential
from woodpecker.fetcher import Fetcher

__all__ = ["API", "Concurrent", "Fetcher", "Sequential", "__version__"]
