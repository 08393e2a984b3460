"""Logging setup for **Woodpecker**.

All modules log through one named logger::

    from woodpecker.logger import logger
    logger.warning("Page %d dropped: %s", page, exc)

Records go to stderr (stdout belongs to the fetched data) and, optionally,
to a size-rotated file. The CLI calls :func:`init_logging` once per run.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, TextIO, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "Woodpecker"
#: rotate at 5 MiB, keep three old files
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _build_handlers(
    fmt: str, log_file: Optional[Union[str, Path]], stream: Optional[TextIO]
) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt)
    # resolved per call so that a replaced sys.stderr is honoured
    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """(Re)configure the project logger and return it.

    Parameters
    ----------
    level
        Numeric or textual level, e.g. ``"DEBUG"``.
    log_file
        Extra rotating log file; *None* keeps output on the console only.
    log_format
        :class:`logging.Formatter` format string.
    replace_handlers
        Drop previously installed handlers first.
    stream
        Console stream, ``sys.stderr`` when omitted.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(log_format, log_file, stream):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Fresh configuration with the handlers of a previous call removed."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging(level="WARNING")

__all__ = ["logger", "configure", "init_logging"]
